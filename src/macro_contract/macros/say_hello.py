"""
Attribute macro `say_hello`.

Usage in the host language::

    #[say_hello(message = "Hello, you called test!")]
    fn test() {}

Expands to the same function with a print statement injected as the first
statement of its body::

    fn test() { println!("Hello, you called test!"); }
"""

from typing import Optional

from macro_contract.core.extract import find_fn_body_open, find_key_value
from macro_contract.core.registry import register_macro
from macro_contract.enums import MacroKind
from macro_contract.macros._render import println

DEFAULT_MESSAGE = "Default hello message"


@register_macro(MacroKind.ATTRIBUTE, "say_hello")
def expand(input_fragment: str, arguments_text: Optional[str] = None) -> str:
  """
  Injects a greeting right after the opening brace of the first function.

  Args:
      input_fragment: The annotated item.
      arguments_text: The attribute's argument list, e.g. `message = "Hi"`.

  Returns:
      str: The rewritten item. If the item has no `fn ... {` span it is
      returned unchanged.
  """
  message = find_key_value(arguments_text, "message")
  if message is None:
    message = DEFAULT_MESSAGE

  insert_at = find_fn_body_open(input_fragment)
  if insert_at is None:
    return input_fragment

  return f"{input_fragment[:insert_at]} {println(message)};{input_fragment[insert_at:]}"
