"""
Command-line entry point: resolve, show, fields, version.
"""

import argparse
import importlib
import os
import sys

import structlog

from envconf import __version__
from envconf.errors import ConfigError


def _path_args(args: argparse.Namespace) -> list[str]:
    """Positional dir/file, falling back to ENVCONF_DIR / ENVCONF_FILE."""
    directory = args.dir or os.environ.get("ENVCONF_DIR")
    filename = args.file or os.environ.get("ENVCONF_FILE")
    if filename and not directory:
        directory = "."
    return [p for p in (directory, filename) if p]


def _import_model(spec: str) -> type:
    """Import 'package.module:ClassName'."""
    module_name, sep, attr = spec.partition(":")
    if not sep or not attr:
        raise SystemExit(f"expected MODULE:CLASS, got {spec!r}")
    module = importlib.import_module(module_name)
    try:
        return getattr(module, attr)
    except AttributeError:
        raise SystemExit(f"{module_name} has no attribute {attr!r}") from None


def cmd_resolve(args: argparse.Namespace) -> int:
    """Print the resolved config file path and whether it exists."""
    from envconf.config.paths import resolve_config_path
    location = resolve_config_path(*_path_args(args))
    exists = os.path.exists(location.path)
    print(f"{location.path}\t{'exists' if exists else 'missing (environment fallback)'}")
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    """Load the settings class and print its values as JSON."""
    from envconf.config.loader import load
    model_cls = _import_model(args.model)
    if not hasattr(model_cls, "model_construct"):
        print(f"mapping: {args.model} is not a pydantic model", file=sys.stderr)
        return 1
    try:
        # required fields may come from the env, so skip construction-time validation
        settings = load(model_cls.model_construct(), *_path_args(args))
    except ConfigError as e:
        print(f"{e.stage}: {e}", file=sys.stderr)
        return 1
    print(settings.model_dump_json(indent=2, by_alias=args.by_alias))
    return 0


def cmd_fields(args: argparse.Namespace) -> int:
    """List each field with its env key and decoded kind."""
    from envconf.config.mapper import describe_fields
    model_cls = _import_model(args.model)
    for field in describe_fields(model_cls):
        print(f"{field.name}\t{field.key or '-'}\t{field.kind or 'unsupported'}")
    return 0


def cmd_version(_: argparse.Namespace) -> int:
    """Print version."""
    print(__version__)
    return 0


def _log_to_stderr() -> None:
    """Keep stdout for command output; structlog writes to stdout by default."""
    structlog.configure(logger_factory=lambda *_: structlog.PrintLogger(sys.stderr))


def main() -> int:
    parser = argparse.ArgumentParser(
        prog="envconf",
        description="envconf: resolve config paths, load and inspect settings models.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # resolve
    p_resolve = sub.add_parser("resolve", help="Print the resolved config file path")
    p_resolve.add_argument("dir", nargs="?", default=None, help="Config directory (default: ENVCONF_DIR or .)")
    p_resolve.add_argument("file", nargs="?", default=None, help="Config file name (default: ENVCONF_FILE or .env)")
    p_resolve.set_defaults(func=cmd_resolve)

    # show
    p_show = sub.add_parser("show", help="Load a settings model and print it as JSON")
    p_show.add_argument("model", help="Settings class as MODULE:CLASS")
    p_show.add_argument("dir", nargs="?", default=None, help="Config directory (default: ENVCONF_DIR or .)")
    p_show.add_argument("file", nargs="?", default=None, help="Config file name (default: ENVCONF_FILE or .env)")
    p_show.add_argument("--by-alias", action="store_true", help="Print env keys instead of field names")
    p_show.set_defaults(func=cmd_show)

    # fields
    p_fields = sub.add_parser("fields", help="List a settings model's fields, env keys and kinds")
    p_fields.add_argument("model", help="Settings class as MODULE:CLASS")
    p_fields.set_defaults(func=cmd_fields)

    # version
    p_version = sub.add_parser("version", help="Print version")
    p_version.set_defaults(func=cmd_version)

    args = parser.parse_args()
    _log_to_stderr()
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
