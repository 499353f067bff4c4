"""
Enumerations for macro-contract.

This module defines the macro kinds understood by the engine and the
lifecycle states of a single invocation.
"""

from enum import Enum


class MacroKind(str, Enum):
  """
  The three ways a host compiler can invoke a macro script.

  The kind decides which inputs a script receives and how its output is
  spliced back into the compiled source.
  """

  ATTRIBUTE = "attribute"  # rewrites the annotated item in place
  DERIVE = "derive"  # emits additive code next to a type definition
  FUNCTION = "function"  # replaces a call-like invocation with an expression


class InvocationState(str, Enum):
  """
  Lifecycle of a MacroInvocation.

  Each invocation is single pass: IDLE -> EXTRACT -> SYNTHESIZE -> DONE.
  A required extraction miss moves it to FAILED instead.
  """

  IDLE = "idle"
  EXTRACT = "extract"
  SYNTHESIZE = "synthesize"
  DONE = "done"
  FAILED = "failed"
