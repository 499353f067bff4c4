"""
Tests for RuntimeConfig loading and CLI key/value parsing.
"""

import pytest
from pydantic import BaseModel

from macro_contract.config import RuntimeConfig, parse_cli_key_values


def _write_pyproject(directory, body):
  (directory / "pyproject.toml").write_text(body, encoding="utf-8")


def test_defaults():
  config = RuntimeConfig()
  assert config.strict_mode is False
  assert config.script_paths == []
  assert config.script_settings == {}


def test_load_from_toml(tmp_path):
  _write_pyproject(
    tmp_path,
    """
[tool.macro_contract]
strict_mode = true
script_paths = ["macros"]

[tool.macro_contract.script_settings]
greeting = "hi"
repeat = 2
""",
  )
  nested = tmp_path / "src" / "deep"
  nested.mkdir(parents=True)

  config = RuntimeConfig.load(search_path=nested)

  assert config.strict_mode is True
  assert config.script_paths == [(tmp_path / "macros").resolve()]
  assert config.script_settings == {"greeting": "hi", "repeat": 2}


def test_cli_overrides_toml(tmp_path):
  _write_pyproject(
    tmp_path,
    """
[tool.macro_contract]
strict_mode = true

[tool.macro_contract.script_settings]
greeting = "hi"
""",
  )

  config = RuntimeConfig.load(
    strict_mode=False,
    script_settings={"greeting": "yo", "extra": True},
    script_paths=[tmp_path / "more"],
    search_path=tmp_path,
  )

  assert config.strict_mode is False
  assert config.script_settings == {"greeting": "yo", "extra": True}
  assert config.script_paths == [(tmp_path / "more").resolve()]


def test_other_tool_sections_are_ignored(tmp_path):
  _write_pyproject(tmp_path, '[tool.something_else]\nstrict_mode = true\n')
  assert RuntimeConfig.load(search_path=tmp_path).strict_mode is False


def test_unreadable_toml_is_ignored(tmp_path):
  _write_pyproject(tmp_path, "this is = = not toml")
  assert RuntimeConfig.load(search_path=tmp_path).strict_mode is False


class GreetingSettings(BaseModel):
  greeting: str
  repeat: int = 1


def test_parse_script_settings():
  config = RuntimeConfig(script_settings={"greeting": "hi", "unrelated": 1})
  settings = config.parse_script_settings(GreetingSettings)
  assert settings.greeting == "hi"
  assert settings.repeat == 1


def test_parse_script_settings_invalid():
  config = RuntimeConfig(script_settings={"repeat": "many"})
  with pytest.raises(ValueError, match="Script configuration validation failed"):
    config.parse_script_settings(GreetingSettings)


def test_parse_cli_key_values():
  parsed = parse_cli_key_values(["flag=True", "off=false", "count=3", "ratio=0.5", "name=hello", "bad"])
  assert parsed == {"flag": True, "off": False, "count": 3, "ratio": 0.5, "name": "hello"}
  assert parse_cli_key_values(None) == {}
