"""
Orchestration Engine for Macro Expansion.

This module provides the `MacroEngine`, the host-side driver for one macro
invocation. For every request it:

1.  Creates a fresh `MacroInvocation` holding the input fragment and, for
    attribute macros, the argument text.
2.  Resolves the registered script for the macro name and checks its kind.
3.  Runs the script (`IDLE -> EXTRACT -> SYNTHESIZE -> DONE`).
4.  Applies strict-mode checks and records the output exactly once.

A required extraction miss (e.g. a derive macro applied to something that is
not a `struct` or `enum`) ends the invocation in `FAILED` with no output. The
host must not splice anything in that case and should report the error at
the invocation site.

Invocations share no state; one engine can serve any number of them.
"""

import logging
from typing import Optional, Union

from macro_contract.config import RuntimeConfig
from macro_contract.core.errors import DeclarationError, ExpansionError
from macro_contract.core.invocation import ExpansionResult, MacroInvocation
from macro_contract.core.registry import MacroScript, get_macro
from macro_contract.enums import InvocationState, MacroKind

logger = logging.getLogger(__name__)


class MacroEngine:
  """
  Executes macro scripts on behalf of a host compiler.
  """

  def __init__(self, config: Optional[RuntimeConfig] = None):
    """
    Initializes the Engine.

    Args:
        config: Runtime configuration. Defaults to a non-strict config.
    """
    self.config = config or RuntimeConfig()

  def invoke(
    self,
    kind: Union[str, MacroKind],
    name: str,
    input_fragment: str,
    arguments_text: Optional[str] = None,
  ) -> ExpansionResult:
    """
    Expands one macro and reports the outcome without raising.

    Args:
        kind: The macro kind the host is invoking.
        name: The macro name.
        input_fragment: The source text the macro was applied to.
        arguments_text: Attribute argument text. Ignored for other kinds.

    Returns:
        ExpansionResult: `success` is False (and `output` empty) when the
        macro could not produce an output.
    """
    try:
      macro_kind = _parse_kind(kind)
    except ExpansionError as e:
      return ExpansionResult(name=name, success=False, errors=[str(e)])

    try:
      output = self.expand(macro_kind, name, input_fragment, arguments_text)
    except ExpansionError as e:
      return ExpansionResult(kind=macro_kind, name=name, success=False, errors=[str(e)])
    return ExpansionResult(kind=macro_kind, name=name, output=output)

  def expand(
    self,
    kind: Union[str, MacroKind],
    name: str,
    input_fragment: str,
    arguments_text: Optional[str] = None,
  ) -> str:
    """
    Expands one macro and returns its output fragment.

    Args:
        kind: The macro kind the host is invoking.
        name: The macro name.
        input_fragment: The source text the macro was applied to.
        arguments_text: Attribute argument text. Ignored for other kinds.

    Returns:
        str: The output fragment.

    Raises:
        ExpansionError: If the macro is unknown or of a different kind, the kind
            itself is unknown, or the macro could not produce an output.
    """
    macro_kind = _parse_kind(kind)

    if arguments_text and macro_kind != MacroKind.ATTRIBUTE:
      logger.warning("Ignoring arguments passed to %s macro '%s'", macro_kind.value, name)
      arguments_text = None

    invocation = MacroInvocation(
      kind=macro_kind,
      name=name,
      input_fragment=input_fragment,
      arguments_text=arguments_text,
    )

    try:
      script = self._resolve(invocation)
      self._run(script, invocation)
    except ExpansionError as e:
      if invocation.state not in (InvocationState.IDLE, InvocationState.FAILED):
        invocation.fail()
      e.macro_name = name
      e.kind = macro_kind.value
      logger.debug("Expansion of %s macro '%s' failed: %s", macro_kind.value, name, e.message)
      raise

    return invocation.output_fragment

  def splice(self, kind: Union[str, MacroKind], input_fragment: str, output_fragment: str) -> str:
    """
    Combines an output fragment with the original source the way the host does.

    Attribute and function-like outputs replace the invocation. Derive output
    is additive and follows the original declaration.

    Args:
        kind: The macro kind that produced `output_fragment`.
        input_fragment: The original source text.
        output_fragment: The macro's output.

    Returns:
        str: The text that ends up in the compiled source.
    """
    if _parse_kind(kind) == MacroKind.DERIVE:
      return input_fragment.rstrip("\n") + "\n" + output_fragment.lstrip("\n")
    return output_fragment

  def _resolve(self, invocation: MacroInvocation) -> MacroScript:
    """Looks up the script for an invocation."""
    try:
      script = get_macro(invocation.name, invocation.kind)
    except DeclarationError as e:
      raise ExpansionError(str(e)) from e
    if script is None:
      raise ExpansionError(f"Unknown macro '{invocation.name}'")
    return script

  def _run(self, script: MacroScript, invocation: MacroInvocation) -> None:
    """Drives a resolved invocation through its lifecycle."""
    invocation.advance(InvocationState.EXTRACT)
    try:
      if script.accepts_settings:
        output = script.expand(
          invocation.input_fragment,
          invocation.arguments_text,
          settings=dict(self.config.script_settings),
        )
      else:
        output = script.expand(invocation.input_fragment, invocation.arguments_text)
    except ExpansionError:
      raise
    except Exception as e:
      raise ExpansionError(f"script raised {type(e).__name__}: {e}") from e

    invocation.advance(InvocationState.SYNTHESIZE)
    if not isinstance(output, str):
      raise ExpansionError(f"script returned {type(output).__name__} instead of a string")

    if self.config.strict_mode and invocation.kind == MacroKind.ATTRIBUTE and output == invocation.input_fragment:
      raise ExpansionError("no function body found to rewrite (strict mode)")

    invocation.complete(output)


def _parse_kind(kind: Union[str, MacroKind]) -> MacroKind:
  """
  Converts a kind name into a MacroKind.

  Raises:
      ExpansionError: If `kind` is not one of the known macro kinds.
  """
  try:
    return MacroKind(kind)
  except ValueError:
    raise ExpansionError(f"Unknown macro kind '{kind}'") from None
