"""
Token Definitions.

Defines the token kinds and punctuation symbols produced by the fragment lexer.
"""

from enum import Enum


class TokenKind(str, Enum):
  """Enumeration of Lexer Token Types."""

  COMMENT = "COMMENT"
  STRING = "STRING"
  CHAR = "CHAR"
  LIFETIME = "LIFETIME"
  IDENTIFIER = "IDENTIFIER"
  NUMBER = "NUMBER"
  SYMBOL = "SYMBOL"
  NEWLINE = "NEWLINE"
  WHITESPACE = "WHITESPACE"
  EOF = "EOF"


class Symbol(str, Enum):
  """Enumeration of Punctuation Symbols used by the extractors."""

  LBRACE = "{"
  RBRACE = "}"
  LBRACKET = "["
  RBRACKET = "]"
  EQUAL = "="
  HASH = "#"


TRIVIA = frozenset({TokenKind.COMMENT, TokenKind.NEWLINE, TokenKind.WHITESPACE})
