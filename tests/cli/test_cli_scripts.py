"""
Tests for the `list` and `check` CLI commands.
"""

from rich.console import Console

from macro_contract.cli.__main__ import main
from macro_contract.utils.console import reset_console, set_console


def _capture_console():
  capture = Console(record=True, width=200)
  set_console(capture)
  return capture


def test_list_shows_builtins():
  capture = _capture_console()
  try:
    assert main(["list"]) == 0
    text = capture.export_text()
  finally:
    reset_console()

  for name in ("say_hello", "SayHello", "hello_world"):
    assert name in text
  assert "hello_message" in text
  assert "builtin" in text


def test_list_includes_external_scripts(script_dir):
  capture = _capture_console()
  try:
    assert main(["list", "--scripts", str(script_dir)]) == 0
    text = capture.export_text()
  finally:
    reset_console()

  assert "shout" in text


def test_check_valid_header(script_dir):
  assert main(["check", str(script_dir / "shout.py")]) == 0


def test_check_missing_header(script_dir):
  assert main(["check", str(script_dir / "helpers.py")]) == 1


def test_check_invalid_header(tmp_path):
  path = tmp_path / "bad.py"
  path.write_text("#! MACRO: function(bad) attributes(nope)\n", encoding="utf-8")
  assert main(["check", str(path)]) == 1


def test_check_missing_file(tmp_path):
  assert main(["check", str(tmp_path / "nope.py")]) == 1
