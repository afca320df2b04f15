"""Build the KEY -> VALUE map the field mapper reads from."""

from __future__ import annotations

import os
from typing import Iterable

from envconf.errors import MalformedEnvironmentError


def environ(entries: Iterable[str] | None = None) -> dict[str, str]:
    """
    Return environment variables as a dict.

    With no entries, reads the live process environment. Raw "KEY=VALUE" entries
    are split at the first '=' only, so values may themselves contain '='.

    Raises:
        MalformedEnvironmentError: An entry has no '='.
    """
    if entries is None:
        return dict(os.environ)
    env: dict[str, str] = {}
    for entry in entries:
        key, sep, value = entry.partition("=")
        if not sep:
            raise MalformedEnvironmentError(entry)
        env[key] = value
    return env
