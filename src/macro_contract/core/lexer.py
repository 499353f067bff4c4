"""
Fragment Lexer.

Splits a source fragment into tokens for the narrow grammar the builtin
macros need: identifiers, punctuation, string/char literals and comments.
The lexer is total: any character it does not recognise becomes a single
SYMBOL token, so an unterminated quote never raises. Block comments nest, and an
unterminated one runs to the end of the fragment.

Working on tokens rather than raw text means keywords such as `fn` or
`struct` only match as whole identifiers, and nothing inside a comment or a
string literal is ever mistaken for structure.
"""

import re
from dataclasses import dataclass
from typing import Generator, List

from macro_contract.core.tokens import TRIVIA, TokenKind


@dataclass(frozen=True)
class Token:
  kind: TokenKind
  text: str
  start: int
  end: int
  line: int
  col: int

  def is_ident(self, name: str) -> bool:
    """True if this token is the identifier `name`."""
    return self.kind == TokenKind.IDENTIFIER and self.text == name

  def is_symbol(self, char: str) -> bool:
    """True if this token is the punctuation character `char`."""
    return self.kind == TokenKind.SYMBOL and self.text == char


class Tokenizer:
  PATTERN_DEFS = [
    # Block comments are only opened here; `_block_comment_end` finds the close.
    (TokenKind.COMMENT, r"//[^\n]*|/\*"),
    (TokenKind.STRING, r'"(?:[^"\\]|\\[\s\S])*"'),
    (TokenKind.CHAR, r"'(?:[^'\\\n]|\\[^\n]+?)'"),
    (TokenKind.LIFETIME, r"'[A-Za-z_][A-Za-z0-9_]*"),
    (TokenKind.IDENTIFIER, r"[A-Za-z_][A-Za-z0-9_]*"),
    (TokenKind.NUMBER, r"\d[\d_]*(?:\.\d[\d_]*)?[A-Za-z0-9_]*"),
    (TokenKind.NEWLINE, r"\r?\n"),
    (TokenKind.WHITESPACE, r"[^\S\n]+"),
    (TokenKind.SYMBOL, r"[\s\S]"),
  ]

  _REGEX = re.compile("|".join(f"(?P<{kind.value}>{pattern})" for kind, pattern in PATTERN_DEFS))

  def __init__(self, text: str):
    self.text = text

  def tokenize(self) -> Generator[Token, None, None]:
    line_num = 1
    line_start = 0
    pos = 0
    while pos < len(self.text):
      mo = self._REGEX.match(self.text, pos)
      kind = TokenKind(mo.lastgroup)
      end = mo.end()
      if kind == TokenKind.COMMENT and mo.group().startswith("/*"):
        end = self._block_comment_end(pos)
      value = self.text[pos:end]
      yield Token(kind, value, pos, end, line_num, pos - line_start)

      # Strings and block comments may span lines too.
      newlines = value.count("\n")
      if newlines:
        line_num += newlines
        line_start = pos + value.rfind("\n") + 1
      pos = end
    yield Token(TokenKind.EOF, "", len(self.text), len(self.text), line_num, len(self.text) - line_start)

  def _block_comment_end(self, start: int) -> int:
    """
    Finds the offset just past the `*/` closing the block comment at `start`.

    Block comments nest. An unterminated comment runs to the end of the text.
    """
    depth = 0
    pos = start
    while pos < len(self.text):
      pair = self.text[pos : pos + 2]
      if pair == "/*":
        depth += 1
        pos += 2
      elif pair == "*/":
        depth -= 1
        pos += 2
        if depth == 0:
          return pos
      else:
        pos += 1
    return len(self.text)


def tokenize(text: str) -> List[Token]:
  """Returns every token of `text`, trivia included, terminated by EOF."""
  return list(Tokenizer(text).tokenize())


def significant_tokens(text: str) -> List[Token]:
  """Returns the tokens of `text` without whitespace, newlines or comments."""
  return [tok for tok in Tokenizer(text).tokenize() if tok.kind not in TRIVIA]


def string_value(token: Token) -> str:
  """
  Returns the content of a string literal token without its quotes.

  Escape sequences are kept as written, since callers re-emit the value
  inside another string literal.

  Args:
      token: A STRING token.

  Returns:
      str: The literal's body.

  Raises:
      ValueError: If the token is not a string literal.
  """
  if token.kind != TokenKind.STRING:
    raise ValueError(f"Expected a string literal, got {token.kind.value} {token.text!r}")
  return token.text[1:-1]
