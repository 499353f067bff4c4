"""
Script Inspection Handlers.

Implements `macro-contract list` (show registered macros) and
`macro-contract check` (validate a script file's declaration header).
"""

from pathlib import Path
from typing import List, Optional

from rich.markup import escape
from rich.table import Table

from macro_contract.core.declaration import parse_declaration
from macro_contract.core.errors import DeclarationError
from macro_contract.core.registry import get_macro, load_scripts, registered_macros
from macro_contract.utils.console import console, log_error, log_success, log_warning


def handle_list(script_dirs: Optional[List[Path]] = None) -> int:
  """
  Prints a table of every registered macro.

  Args:
      script_dirs: Extra directories of external scripts to load first.

  Returns:
      int: Exit code.
  """
  try:
    load_scripts(extra_dirs=script_dirs)
  except DeclarationError as e:
    log_error(escape(str(e)))
    return 1

  table = Table(title="Registered Macros")
  table.add_column("Name", style="bold magenta")
  table.add_column("Kind")
  table.add_column("Helper Attributes")
  table.add_column("Origin", style="bold blue")

  for decl in registered_macros():
    script = get_macro(decl.name)
    origin = str(script.origin) if script and script.origin else "builtin"
    table.add_row(decl.name, decl.kind.value, ", ".join(decl.helper_attributes) or "-", escape(origin))

  console.print(table)
  return 0


def handle_check(path: Path) -> int:
  """
  Validates the declaration header of a script file without importing it.

  Args:
      path: The script file.

  Returns:
      int: 0 if a valid header was found, 1 otherwise.
  """
  if not path.is_file():
    log_error(f"Script not found: {escape(str(path))}")
    return 1

  try:
    declaration = parse_declaration(path.read_text(encoding="utf-8"))
  except DeclarationError as e:
    log_error(escape(str(e)))
    return 1

  if declaration is None:
    log_warning(f"No '#! MACRO:' header in {escape(str(path))}")
    return 1

  details = f"{declaration.kind.value} macro [code]{declaration.name}[/code]"
  if declaration.helper_attributes:
    details += f" with helper attributes {', '.join(declaration.helper_attributes)}"
  log_success(details)
  return 0
