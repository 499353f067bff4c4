"""
Tests for the `say_hello` attribute macro.
"""

import pytest

from macro_contract.macros.say_hello import DEFAULT_MESSAGE, expand


def test_scenario_message_argument():
  output = expand("fn greet(){ return 1; }", 'message = "Hello"')
  assert output == 'fn greet(){ println!("Hello"); return 1; }'


def test_default_message_without_arguments():
  output = expand("fn test() {}", None)
  assert output == f'fn test() {{ println!("{DEFAULT_MESSAGE}");}}'
  assert DEFAULT_MESSAGE == "Default hello message"


@pytest.mark.parametrize("arguments", ["", 'msg = "x"', "message", 'greeting = "Hi"'])
def test_default_message_when_pattern_missing(arguments):
  output = expand("fn f() {}", arguments)
  assert 'println!("Default hello message");' in output


@pytest.mark.parametrize("message", ["X", "Hello, you called test!", "", "with {braces}"])
def test_message_carried_exactly(message):
  output = expand("fn f() { g(); }", f'message = "{message}"')
  assert f'println!("{message}");' in output


@pytest.mark.parametrize(
  "item",
  [
    "fn f() {}",
    "pub fn f(a: i32) -> i32 { a }",
    "#[inline]\nfn multi(\n  a: u8,\n)\n{\n  a;\n}",
    "fn outer() { fn inner() {} }",
  ],
)
def test_exactly_one_statement_inserted(item):
  output = expand(item, 'message = "Hi"')
  inserted = ' println!("Hi");'

  assert output.count("println!") == 1
  assert len(output) - len(item) == len(inserted)
  # Everything up to and including the first body brace is preserved.
  brace = output.index("{", output.index("fn")) + 1
  assert output[:brace] == item[:brace]
  assert output[brace:] == inserted + item[brace:]


def test_no_function_is_a_silent_no_op():
  item = "struct NotAFunction { x: u8 }"
  assert expand(item, 'message = "Hi"') == item


def test_fn_inside_comment_is_not_rewritten():
  item = "// fn fake {\nfn real() {}"
  assert expand(item, None) == '// fn fake {\nfn real() { println!("Default hello message");}'


def test_input_is_not_mutated():
  item = "fn f() {}"
  before = str(item)
  expand(item, None)
  assert item == before
