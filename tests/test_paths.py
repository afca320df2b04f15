"""Tests for config path resolution."""

import pytest

from envconf.config.paths import ConfigLocation, resolve_config_path
from envconf.errors import InvalidParametersError


def test_no_args_defaults_to_dot_env_in_cwd():
    assert resolve_config_path() == ConfigLocation(".", ".env", "./.env")


def test_directory_only_uses_default_file_name():
    assert resolve_config_path("/a/b").path == "/a/b/.env"


def test_trailing_separator_is_not_doubled():
    loc = resolve_config_path("/a/b/")
    assert loc.path == "/a/b/.env"
    assert loc.directory == "/a/b/"


def test_directory_and_file_name():
    loc = resolve_config_path("/a/b", "custom")
    assert loc == ConfigLocation("/a/b", "custom", "/a/b/custom")


def test_relative_directory_with_trailing_separator_and_file():
    assert resolve_config_path("conf/", "app.yaml").path == "conf/app.yaml"


def test_more_than_two_args_is_an_argument_error():
    with pytest.raises(InvalidParametersError) as exc_info:
        resolve_config_path("x", "y", "z")
    assert exc_info.value.stage == "arguments"
    assert "invalid set of parameters" in str(exc_info.value)
