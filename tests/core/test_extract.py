"""
Tests for Directive Extraction.

Optional lookups return None on a miss; the type-name lookup raises.
Nothing inside comments or string literals may match.
"""

import pytest

from macro_contract.core.errors import ExpansionError
from macro_contract.core.extract import (
  find_first_string,
  find_fn_body_open,
  find_helper_attribute,
  find_key_value,
  find_type_name,
)


@pytest.mark.parametrize(
  "text, expected",
  [
    ('message = "Hello"', "Hello"),
    ('message="no spaces"', "no spaces"),
    ('other = "x", message = "y"', "y"),
    ('message = ""', ""),
    ('msg = "x"', None),
    ("message = 42", None),
    ("", None),
    (None, None),
  ],
)
def test_find_key_value(text, expected):
  assert find_key_value(text, "message") == expected


def test_find_key_value_ignores_commented_pair():
  assert find_key_value('/* message = "old" */ message = "new"', "message") == "new"


@pytest.mark.parametrize(
  "text, expected",
  [
    ("struct User { }", "User"),
    ("enum Bar { A, B }", "Bar"),
    ("pub struct Wrapper(u8);", "Wrapper"),
    ("struct Generic<T> { value: T }", "Generic"),
    ('#[hello_message = "x"] struct Example {}', "Example"),
    ("struct\n    MultiLine\n{}", "MultiLine"),
  ],
)
def test_find_type_name(text, expected):
  assert find_type_name(text) == expected


@pytest.mark.parametrize(
  "text",
  [
    "fn not_a_type() {}",
    "struct { }",
    "// struct Hidden\nunion U { }",
    'const S: &str = "struct Fake";',
    "",
  ],
)
def test_find_type_name_missing_is_fatal(text):
  with pytest.raises(ExpansionError):
    find_type_name(text)


def test_find_helper_attribute():
  text = '#[hello_message = "Hi"]\nenum Bar { A }'
  assert find_helper_attribute(text, "hello_message") == "Hi"


def test_find_helper_attribute_absent():
  assert find_helper_attribute("struct Foo {}", "hello_message") is None
  assert find_helper_attribute('#[other = "x"] struct Foo {}', "hello_message") is None


def test_find_helper_attribute_ignores_string_and_comment_contents():
  text = (
    'const X: &str = "#[hello_message = \\"no\\"]";\n'
    '// #[hello_message = "also no"]\n'
    '#[hello_message = "yes"] struct S {}'
  )
  assert find_helper_attribute(text, "hello_message") == "yes"


@pytest.mark.parametrize(
  "text, expected",
  [
    ('"Hi there"', "Hi there"),
    ('foo, "a", "b"', "a"),
    ("42", None),
    ('"unterminated', None),
    ('/* "commented" */ "real"', "real"),
  ],
)
def test_find_first_string(text, expected):
  assert find_first_string(text) == expected


def test_find_fn_body_open():
  text = "fn greet(){ return 1; }"
  offset = find_fn_body_open(text)
  assert offset == text.index("{") + 1


def test_find_fn_body_open_spans_lines():
  text = "pub fn greet(\n  a: i32,\n) -> i32\n{\n  a\n}"
  assert text[: find_fn_body_open(text)].endswith("\n{")


def test_find_fn_body_open_skips_comments():
  text = "// fn fake {\nfn real() {}"
  offset = find_fn_body_open(text)
  assert offset == text.rindex("{") + 1



def test_find_fn_body_open_skips_nested_comments():
  text = "/* a /* b */ fn x { */ fn real() {}"
  offset = find_fn_body_open(text)
  assert offset == text.rindex("{") + 1
  assert text[:offset].endswith("fn real() {")

@pytest.mark.parametrize("text", ["struct A {}", "fn declared_only();", "often { }", ""])
def test_find_fn_body_open_missing(text):
  assert find_fn_body_open(text) is None
