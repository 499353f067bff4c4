"""
Function-like macro `hello_world`.

`hello_world!("Howdy")` expands to `println!("Howdy")`.
"""

from typing import Optional

from macro_contract.core.extract import find_first_string
from macro_contract.core.registry import register_macro
from macro_contract.enums import MacroKind
from macro_contract.macros._render import println

DEFAULT_MESSAGE = "Default hello message"


@register_macro(MacroKind.FUNCTION, "hello_world")
def expand(input_fragment: str, arguments_text: Optional[str] = None) -> str:
  message = find_first_string(input_fragment)
  if message is None:
    message = DEFAULT_MESSAGE
  return println(message)
