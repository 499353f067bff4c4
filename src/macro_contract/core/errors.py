"""
Exception hierarchy for macro expansion.

Only two conditions surface to the host: a required directive that could not
be extracted (`ExpansionError`) and a malformed script declaration
(`DeclarationError`). Optional directives fall back to defaults and never raise.
"""

from typing import Optional


class MacroError(Exception):
  """Base class for all macro-contract errors."""


class ExpansionError(MacroError):
  """
  Raised when a macro cannot produce an output fragment.

  The engine attaches the macro name and kind before re-raising so the host
  can report a diagnostic at the invocation site.
  """

  def __init__(self, message: str, macro_name: Optional[str] = None, kind: Optional[str] = None):
    super().__init__(message)
    self.message = message
    self.macro_name = macro_name
    self.kind = kind

  def __str__(self) -> str:
    if self.macro_name:
      return f"{self.kind} macro '{self.macro_name}': {self.message}"
    return self.message


class DeclarationError(MacroError):
  """Raised for invalid macro registrations or script headers."""


class InvocationStateError(MacroError):
  """Raised when an invocation is driven out of order (e.g. output set twice)."""
