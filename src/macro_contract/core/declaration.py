"""
Macro Script Declarations.

Every macro script announces what it is: its kind, the name the host invokes
it by, and (for derive macros) the helper attributes it consumes. Builtin
scripts pass this to `register_macro`; external script files carry it as a
header line::

    #! MACRO: derive(SayHello) attributes(hello_message)
    #! MACRO: attribute(say_hello)
    #! MACRO: function(hello_world)

Files without such a line are not macro scripts and are skipped by the loader.
"""

import re
from typing import Iterable, List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from macro_contract.core.errors import DeclarationError
from macro_contract.enums import MacroKind

_HEADER_PATTERN = re.compile(
  r"""
  # MACRO header comment
  ^\#!\s*MACRO:\s*

  # Macro type
  (?P<macro_type>\w+?)

  # Macro name
  \(
    (?P<name>.*?)
  \)\s*

  # Optional helper attribute list
  (?:
    attributes\(
      (?P<attributes>.*?)
    \)
  )?\s*$
  """,
  re.MULTILINE | re.VERBOSE,
)

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class MacroDeclaration(BaseModel):
  """
  Registration metadata for one macro script.
  """

  name: str = Field(..., description="Name the host invokes the macro by (e.g. 'say_hello').")
  kind: MacroKind = Field(..., description="Macro kind.")
  helper_attributes: List[str] = Field(
    default_factory=list,
    description="Inert helper attributes a derive macro reads from its input (e.g. 'hello_message').",
  )

  @field_validator("name")
  @classmethod
  def validate_name(cls, v: str) -> str:
    """
    Ensures the macro name is a plain identifier.

    Raises:
        ValueError: If `v` is not an identifier.
    """
    v_clean = v.strip()
    if not _IDENTIFIER.match(v_clean):
      raise ValueError(f"Macro name must be an identifier, got '{v}'")
    return v_clean


def build_declaration(
  kind: Union[str, MacroKind],
  name: str,
  helper_attributes: Optional[Iterable[str]] = None,
) -> MacroDeclaration:
  """
  Validates and builds a declaration.

  Args:
      kind: Macro kind, as an enum or its string value.
      name: Macro name.
      helper_attributes: Helper attribute names; only valid for derive macros.

  Returns:
      MacroDeclaration: The validated declaration.

  Raises:
      DeclarationError: On an unknown kind, an invalid name, or helper
          attributes on a non-derive macro.
  """
  try:
    macro_kind = MacroKind(kind)
  except ValueError:
    raise DeclarationError(
      f"Unexpected macro type: `{kind}`. Should be one of: {', '.join(k.value for k in MacroKind)}"
    ) from None

  attributes = [a.strip() for a in (helper_attributes or []) if a.strip()]
  if attributes and macro_kind != MacroKind.DERIVE:
    raise DeclarationError(
      f"Macro type {macro_kind.value} does not support helper attributes ({', '.join(attributes)})"
    )
  for attr in attributes:
    if not _IDENTIFIER.match(attr):
      raise DeclarationError(f"Helper attribute must be an identifier, got '{attr}'")

  try:
    return MacroDeclaration(name=name, kind=macro_kind, helper_attributes=attributes)
  except ValueError as e:
    raise DeclarationError(str(e)) from e


def parse_declaration(text: str) -> Optional[MacroDeclaration]:
  """
  Extracts the declaration header from a script's source text.

  Args:
      text: Full contents of a script file.

  Returns:
      The declaration, or None if the file has no `#! MACRO:` header.

  Raises:
      DeclarationError: If a header is present but invalid.
  """
  match = _HEADER_PATTERN.search(text)
  if not match:
    return None

  raw_attributes = match.group("attributes")
  attributes = raw_attributes.split(",") if raw_attributes is not None else None
  return build_declaration(match.group("macro_type"), match.group("name"), attributes)
