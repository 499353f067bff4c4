"""
Derive macro `SayHello`.

Usage in the host language::

    #[derive(SayHello)]
    #[hello_message = "Hello ts macro!"]
    struct Example {}

Produces an implementation of the `SayHello` trait for the type. The type
definition itself is left alone.
"""

from typing import Optional

from macro_contract.core.extract import find_helper_attribute, find_type_name
from macro_contract.core.registry import register_macro
from macro_contract.enums import MacroKind
from macro_contract.macros._render import println

HELPER_ATTRIBUTE = "hello_message"
DEFAULT_MESSAGE = "Default hello world message"

_TEMPLATE = """
impl SayHello for {type_name} {{
\tfn say_hello(){{
\t\t{statement};
\t}}
}}
"""


@register_macro(MacroKind.DERIVE, "SayHello", helper_attributes=[HELPER_ATTRIBUTE])
def expand(input_fragment: str, arguments_text: Optional[str] = None) -> str:
  """
  Builds the `impl SayHello for <Type>` block.

  Raises:
      ExpansionError: If the input has no `struct`/`enum` header.
  """
  type_name = find_type_name(input_fragment)
  message = find_helper_attribute(input_fragment, HELPER_ATTRIBUTE)
  if message is None:
    message = DEFAULT_MESSAGE
  return _TEMPLATE.format(type_name=type_name, statement=println(message))
