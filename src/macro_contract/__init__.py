"""
macro-contract Package.

Runs macro scripts for a host compiler. A script receives the source fragment
a macro was applied to (plus, for attribute macros, the attribute's argument
text) and returns the fragment that replaces or supplements it.

Usage
-----

Simple Expansion
^^^^^^^^^^^^^^^^

.. code-block:: python

    import macro_contract as mc
    mc.expand("function", "hello_world", '"Howdy"')
    # 'println!("Howdy")'

Engine
^^^^^^

.. code-block:: python

    from macro_contract import MacroEngine, RuntimeConfig

    engine = MacroEngine(config=RuntimeConfig(strict_mode=True))
    res = engine.invoke("derive", "SayHello", "struct User { }")

    if res.success:
        print(res.output)
    else:
        print(f"Errors: {res.errors}")
"""

from typing import Optional

from macro_contract.config import RuntimeConfig
from macro_contract.core.engine import MacroEngine
from macro_contract.core.errors import DeclarationError, ExpansionError, MacroError
from macro_contract.core.invocation import ExpansionResult
from macro_contract.core.registry import register_macro
from macro_contract.enums import MacroKind

__version__ = "0.1.0"


def expand(
  kind: str,
  name: str,
  input_fragment: str,
  arguments_text: Optional[str] = None,
  strict: bool = False,
) -> str:
  """
  Expands a single macro invocation.

  Args:
      kind (str): "attribute", "derive" or "function".
      name (str): The macro name, e.g. "say_hello".
      input_fragment (str): The source text the macro was applied to.
      arguments_text (str, optional): Attribute argument text.
      strict (bool): Fail when an attribute macro leaves its item unchanged.

  Returns:
      str: The output fragment.

  Raises:
      ExpansionError: If the macro could not produce an output.
  """
  engine = MacroEngine(config=RuntimeConfig(strict_mode=strict))
  return engine.expand(kind, name, input_fragment, arguments_text)


__all__ = [
  "DeclarationError",
  "ExpansionError",
  "ExpansionResult",
  "MacroEngine",
  "MacroError",
  "MacroKind",
  "RuntimeConfig",
  "expand",
  "register_macro",
  "__version__",
]
