"""
Data structures for a single macro invocation and its result.

A `MacroInvocation` is created by the engine immediately before a replacement
fragment is needed, executed synchronously, and discarded once the output has
been read back. `ExpansionResult` is what the engine hands to its caller.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from macro_contract.core.errors import InvocationStateError
from macro_contract.enums import InvocationState, MacroKind

_TRANSITIONS = {
  InvocationState.IDLE: {InvocationState.EXTRACT},
  InvocationState.EXTRACT: {InvocationState.SYNTHESIZE, InvocationState.FAILED},
  InvocationState.SYNTHESIZE: {InvocationState.DONE, InvocationState.FAILED},
  InvocationState.DONE: set(),
  InvocationState.FAILED: set(),
}


class MacroInvocation(BaseModel):
  """
  One execution of one macro.

  The input fragment is frozen; the output fragment is written exactly once,
  by `complete()`, after extraction has finished.
  """

  model_config = ConfigDict(validate_assignment=True)

  kind: MacroKind = Field(..., description="Which macro kind is being expanded.")
  name: str = Field(..., description="Registered macro name.")
  input_fragment: str = Field(..., frozen=True, description="Source text the macro was applied to.")
  arguments_text: Optional[str] = Field(
    None, frozen=True, description="Raw attribute-argument text, if the macro kind takes any."
  )
  output_fragment: Optional[str] = Field(None, description="Produced replacement text.")
  state: InvocationState = Field(InvocationState.IDLE, description="Current lifecycle state.")

  def advance(self, new_state: InvocationState) -> None:
    """
    Moves the invocation to `new_state`.

    Raises:
        InvocationStateError: If the transition is not part of the lifecycle.
    """
    if new_state not in _TRANSITIONS[self.state]:
      raise InvocationStateError(f"Cannot move invocation from {self.state.value} to {new_state.value}")
    self.state = new_state

  def complete(self, output: str) -> None:
    """
    Records the output fragment and finishes the invocation.

    Args:
        output: The synthesized fragment.

    Raises:
        InvocationStateError: If an output was already recorded or the
            invocation is not in the SYNTHESIZE state.
    """
    if self.output_fragment is not None:
      raise InvocationStateError(f"Output for macro '{self.name}' was already produced")
    if self.state != InvocationState.SYNTHESIZE:
      raise InvocationStateError(f"Cannot produce output while {self.state.value}")
    self.output_fragment = output
    self.advance(InvocationState.DONE)

  def fail(self) -> None:
    """Marks the invocation as failed. No output is ever recorded."""
    self.advance(InvocationState.FAILED)

  @property
  def is_done(self) -> bool:
    return self.state == InvocationState.DONE


class ExpansionResult(BaseModel):
  """
  Container for the outcome of one expansion.
  """

  kind: Optional[MacroKind] = Field(None, description="The macro kind that was invoked. None if the kind was not recognised.")
  name: str = Field(..., description="The macro that was invoked.")
  output: str = Field(default="", description="The produced fragment. Empty on failure.")
  errors: List[str] = Field(default_factory=list, description="List of error messages encountered.")
  success: bool = Field(
    default=True,
    description="False if no output may be spliced into the compiled source.",
  )

  @property
  def has_errors(self) -> bool:
    """
    Check if the result contains any error messages.

    Returns:
        True if one or more errors are present.
    """
    return len(self.errors) > 0
