"""Tests for config file reading and unmarshalling (.env, YAML, JSON)."""

import pytest
from pydantic import BaseModel, Field

from envconf.config.files import config_type, load_file, read_config_file, unmarshal
from envconf.errors import FileLoadError, UnmarshalError, UnsupportedConfigTypeError


class AppConfig(BaseModel):
    name: str = Field("app", alias="NAME")
    port: int = Field(8000, alias="PORT")
    debug: bool = Field(False, alias="DEBUG")
    region: str = "us-east-1"


@pytest.mark.parametrize(
    "path,expected",
    [
        ("./.env", "env"),
        ("/etc/app/config.YAML", "yaml"),
        ("conf/settings.yml", "yml"),
        ("settings.json", "json"),
        ("/a/b/custom", ""),
        ("/a/b/.env.local", "local"),
    ],
)
def test_config_type_from_extension(path, expected):
    assert config_type(path) == expected


def test_read_dotenv_skips_keys_without_values(tmp_path):
    f = tmp_path / ".env"
    f.write_text('# comment\nPORT=9090\nNAME="quoted name"\nBARE\nURL=http://h/?a=b\n')
    values = read_config_file(str(f))
    assert values == {"PORT": "9090", "NAME": "quoted name", "URL": "http://h/?a=b"}


def test_read_yaml_and_json(tmp_path):
    y = tmp_path / "app.yaml"
    y.write_text("PORT: 7000\nDEBUG: true\n")
    assert read_config_file(str(y)) == {"PORT": 7000, "DEBUG": True}
    j = tmp_path / "app.json"
    j.write_text('{"PORT": 7001}')
    assert read_config_file(str(j)) == {"PORT": 7001}


def test_empty_yaml_is_empty_mapping(tmp_path):
    y = tmp_path / "app.yaml"
    y.write_text("")
    assert read_config_file(str(y)) == {}


def test_unsupported_extension(tmp_path):
    f = tmp_path / "custom"
    f.write_text("PORT=1\n")
    with pytest.raises(UnsupportedConfigTypeError) as exc_info:
        read_config_file(str(f))
    assert exc_info.value.config_type == ""
    assert exc_info.value.stage == "file"


def test_invalid_yaml_is_file_load_error(tmp_path):
    y = tmp_path / "app.yaml"
    y.write_text("PORT: [unclosed\n")
    with pytest.raises(FileLoadError):
        read_config_file(str(y))


def test_non_mapping_json_is_file_load_error(tmp_path):
    j = tmp_path / "app.json"
    j.write_text("[1, 2]")
    with pytest.raises(FileLoadError):
        read_config_file(str(j))


def test_unmarshal_coerces_strings_and_matches_case_insensitively():
    cfg = AppConfig()
    unmarshal({"port": "9090", "Debug": "true", "REGION": "eu-west-1"}, cfg)
    assert cfg.port == 9090
    assert cfg.debug is True
    assert cfg.region == "eu-west-1"
    assert cfg.name == "app"


def test_unmarshal_case_sensitive_ignores_other_cases():
    cfg = AppConfig()
    unmarshal({"port": "9090", "DEBUG": "1"}, cfg, case_sensitive=True)
    assert cfg.port == 8000
    assert cfg.debug is True


def test_unmarshal_numbers_into_text_fields():
    cfg = AppConfig()
    unmarshal({"NAME": 8080}, cfg)
    assert cfg.name == "8080"


def test_unmarshal_error_names_key():
    with pytest.raises(UnmarshalError) as exc_info:
        unmarshal({"PORT": "eighty"}, AppConfig())
    assert exc_info.value.key == "PORT"
    assert exc_info.value.stage == "unmarshal"


def test_load_file_populates_target(tmp_path):
    f = tmp_path / ".env"
    f.write_text("NAME=svc\nPORT=9091\n")
    cfg = AppConfig()
    assert load_file(str(f), cfg) is cfg
    assert (cfg.name, cfg.port) == ("svc", 9091)
