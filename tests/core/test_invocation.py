"""
Tests for the MacroInvocation lifecycle and ExpansionResult.
"""

import pytest
from pydantic import ValidationError

from macro_contract.core.errors import InvocationStateError
from macro_contract.core.invocation import ExpansionResult, MacroInvocation
from macro_contract.enums import InvocationState, MacroKind


@pytest.fixture
def invocation():
  return MacroInvocation(kind=MacroKind.FUNCTION, name="hello_world", input_fragment='"Hi"')


def test_new_invocation_is_idle(invocation):
  assert invocation.state == InvocationState.IDLE
  assert invocation.output_fragment is None
  assert invocation.arguments_text is None
  assert not invocation.is_done


def test_full_lifecycle(invocation):
  invocation.advance(InvocationState.EXTRACT)
  invocation.advance(InvocationState.SYNTHESIZE)
  invocation.complete('println!("Hi")')

  assert invocation.is_done
  assert invocation.output_fragment == 'println!("Hi")'


def test_output_is_set_exactly_once(invocation):
  invocation.advance(InvocationState.EXTRACT)
  invocation.advance(InvocationState.SYNTHESIZE)
  invocation.complete("first")

  with pytest.raises(InvocationStateError):
    invocation.complete("second")
  assert invocation.output_fragment == "first"


def test_output_requires_synthesize_state(invocation):
  with pytest.raises(InvocationStateError):
    invocation.complete("too early")
  assert invocation.output_fragment is None


def test_states_cannot_be_skipped(invocation):
  with pytest.raises(InvocationStateError):
    invocation.advance(InvocationState.DONE)


def test_failed_invocation_is_terminal(invocation):
  invocation.advance(InvocationState.EXTRACT)
  invocation.fail()

  assert invocation.state == InvocationState.FAILED
  assert invocation.output_fragment is None
  with pytest.raises(InvocationStateError):
    invocation.advance(InvocationState.SYNTHESIZE)


def test_input_fragment_is_frozen(invocation):
  with pytest.raises(ValidationError):
    invocation.input_fragment = "changed"
  assert invocation.input_fragment == '"Hi"'


def test_kind_accepts_string_value():
  inv = MacroInvocation(kind="derive", name="SayHello", input_fragment="struct A {}")
  assert inv.kind == MacroKind.DERIVE


def test_expansion_result_defaults():
  res = ExpansionResult(kind=MacroKind.ATTRIBUTE, name="say_hello")
  assert res.success
  assert res.output == ""
  assert not res.has_errors

  failed = ExpansionResult(kind=MacroKind.DERIVE, name="SayHello", success=False, errors=["boom"])
  assert failed.has_errors
