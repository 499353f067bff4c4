"""
Directive Extraction.

Pulls small pieces of structured information (a message string, a type name,
the position of a function body) out of macro fragments.

Optional directives return `None` on a miss and the caller substitutes its
default. The derived type name is required: a miss raises `ExpansionError`.
"""

import logging
from typing import List, Optional, Sequence

from macro_contract.core.errors import ExpansionError
from macro_contract.core.lexer import Token, significant_tokens, string_value
from macro_contract.core.tokens import Symbol, TokenKind

logger = logging.getLogger(__name__)

TYPE_KEYWORDS = ("struct", "enum")


def _match_at(tokens: Sequence[Token], index: int, pattern: List[str]) -> bool:
  """
  Checks whether `tokens[index:]` starts with the given shape.

  Pattern items are either a literal symbol/identifier text, or one of the
  placeholders "<STRING>" / "<IDENT>".
  """
  if index + len(pattern) > len(tokens):
    return False
  for offset, expected in enumerate(pattern):
    tok = tokens[index + offset]
    if expected == "<STRING>":
      ok = tok.kind == TokenKind.STRING
    elif expected == "<IDENT>":
      ok = tok.kind == TokenKind.IDENTIFIER
    else:
      ok = tok.text == expected and tok.kind in (TokenKind.SYMBOL, TokenKind.IDENTIFIER)
    if not ok:
      return False
  return True


def find_key_value(text: Optional[str], key: str) -> Optional[str]:
  """
  Finds the string value of a `key = "value"` pair.

  Args:
      text: Raw argument text (may be None when no arguments were given).
      key: The identifier to look for, e.g. "message".

  Returns:
      The literal's content, or None if no such pair exists.
  """
  if not text:
    return None
  tokens = significant_tokens(text)
  for i in range(len(tokens)):
    if _match_at(tokens, i, [key, Symbol.EQUAL.value, "<STRING>"]):
      return string_value(tokens[i + 2])
  return None


def find_type_name(text: str) -> str:
  """
  Finds the identifier declared by the first `struct` or `enum` header.

  Args:
      text: The full type definition handed to a derive macro.

  Returns:
      The type's name.

  Raises:
      ExpansionError: If there is no `struct <name>` or `enum <name>` in `text`.
  """
  tokens = significant_tokens(text)
  for i, tok in enumerate(tokens[:-1]):
    if tok.kind == TokenKind.IDENTIFIER and tok.text in TYPE_KEYWORDS:
      following = tokens[i + 1]
      if following.kind == TokenKind.IDENTIFIER:
        return following.text
      logger.debug("Keyword '%s' at %d:%d is not followed by a name", tok.text, tok.line, tok.col)
  raise ExpansionError("expected a `struct` or `enum` declaration followed by a type name")


def find_helper_attribute(text: str, name: str) -> Optional[str]:
  """
  Finds the value of a `#[name = "value"]` helper attribute.

  Only real attribute syntax matches; the same text inside a string literal
  or comment is ignored.

  Args:
      text: The fragment to search.
      name: The helper attribute name, e.g. "hello_message".

  Returns:
      The attribute's string value, or None if absent.
  """
  pattern = [
    Symbol.HASH.value,
    Symbol.LBRACKET.value,
    name,
    Symbol.EQUAL.value,
    "<STRING>",
    Symbol.RBRACKET.value,
  ]
  tokens = significant_tokens(text)
  for i in range(len(tokens)):
    if _match_at(tokens, i, pattern):
      return string_value(tokens[i + 4])
  return None


def find_first_string(text: str) -> Optional[str]:
  """Returns the content of the first string literal in `text`, if any."""
  for tok in significant_tokens(text):
    if tok.kind == TokenKind.STRING:
      return string_value(tok)
  return None


def find_fn_body_open(text: str) -> Optional[int]:
  """
  Locates the opening brace of the first function body.

  Args:
      text: The annotated item text.

  Returns:
      The offset just past the first `{` following the first `fn` keyword,
      or None when there is no such span.
  """
  tokens = significant_tokens(text)
  for i, tok in enumerate(tokens):
    if tok.is_ident("fn"):
      for candidate in tokens[i + 1 :]:
        if candidate.is_symbol(Symbol.LBRACE.value):
          return candidate.end
      return None
  return None
