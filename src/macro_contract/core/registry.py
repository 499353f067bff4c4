"""
Macro Registry and Script Loader.

This module keeps track of every macro script the engine can invoke. Scripts
are plain functions `expand(input_fragment, arguments_text) -> str`:

* Builtin scripts live in `macro_contract.macros` and register themselves with
  the `register_macro` decorator.
* External scripts are `.py` files carrying a `#! MACRO: ...` declaration
  header (see `macro_contract.core.declaration`) and defining a module-level
  `expand` function. `load_scripts` imports them from user directories.

A script that also accepts a `settings` keyword receives a copy of
`RuntimeConfig.script_settings` on every invocation.
"""

import importlib
import importlib.util
import inspect
import logging
import pkgutil
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from macro_contract.core.declaration import MacroDeclaration, build_declaration, parse_declaration
from macro_contract.core.errors import DeclarationError
from macro_contract.enums import MacroKind

logger = logging.getLogger(__name__)

ExpandFunction = Callable[[str, Optional[str]], str]

BUILTIN_PACKAGE = "macro_contract.macros"


class MacroScript(BaseModel):
  """
  A registered macro: its declaration plus the callable that expands it.
  """

  declaration: MacroDeclaration = Field(..., description="Name, kind and helper attributes.")
  expand: ExpandFunction = Field(..., description="Callable producing the output fragment.")
  origin: Optional[Path] = Field(None, description="Source file for externally loaded scripts.")
  accepts_settings: bool = Field(False, description="True if `expand` takes a `settings` keyword argument.")

  @property
  def name(self) -> str:
    return self.declaration.name

  @property
  def kind(self) -> MacroKind:
    return self.declaration.kind


# Global Registry
_MACROS: Dict[str, MacroScript] = {}
_BUILTINS_LOADED = False


def register_macro(
  kind: Union[str, MacroKind],
  name: str,
  helper_attributes: Optional[List[str]] = None,
  origin: Optional[Path] = None,
) -> Callable[[ExpandFunction], ExpandFunction]:
  """
  Decorator to register a function as a macro script.

  Args:
      kind: The macro kind ("attribute", "derive" or "function").
      name: The name the host invokes the macro by.
      helper_attributes: Helper attributes consumed by a derive macro.
      origin: Path of the file the script was loaded from, if external.

  Raises:
      DeclarationError: If the declaration is invalid.
  """
  declaration = build_declaration(kind, name, helper_attributes)

  def decorator(func: ExpandFunction) -> ExpandFunction:
    previous = _MACROS.get(declaration.name)
    if previous is not None and previous.expand is not func:
      logger.debug("Replacing macro '%s' (%s)", declaration.name, previous.kind.value)
    _MACROS[declaration.name] = MacroScript(
      declaration=declaration,
      expand=func,
      origin=origin,
      accepts_settings=_accepts_settings(func),
    )
    logger.debug("Registered %s macro: %s", declaration.kind.value, declaration.name)
    return func

  return decorator


def _accepts_settings(func: ExpandFunction) -> bool:
  """Checks whether a script wants the `script_settings` passed as `settings=`."""
  try:
    params = inspect.signature(func).parameters.values()
  except (TypeError, ValueError):
    return False
  return any(p.name == "settings" or p.kind == inspect.Parameter.VAR_KEYWORD for p in params)


def get_macro(name: str, kind: Optional[Union[str, MacroKind]] = None) -> Optional[MacroScript]:
  """
  Retrieves a registered macro by name.
  Lazily loads the builtin scripts if they have not been loaded yet.

  Args:
      name: Macro name.
      kind: If given, the kind the caller expects.

  Returns:
      The script, or None if no macro of that name exists.

  Raises:
      DeclarationError: If the macro exists but is of a different kind.
  """
  if not _BUILTINS_LOADED:
    load_scripts()
  script = _MACROS.get(name)
  if script is not None and kind is not None and script.kind != MacroKind(kind):
    raise DeclarationError(f"Macro '{name}' is a {script.kind.value} macro, not {MacroKind(kind).value}")
  return script


def registered_macros() -> List[MacroDeclaration]:
  """
  Returns the declarations of all registered macros, sorted by name.
  """
  if not _BUILTINS_LOADED:
    load_scripts()
  return [_MACROS[name].declaration for name in sorted(_MACROS)]


def clear_macros() -> None:
  """Resets the internal registry. Primarily for testing."""
  global _BUILTINS_LOADED
  _MACROS.clear()
  _BUILTINS_LOADED = False


def load_scripts(scripts_dir: Optional[Path] = None, extra_dirs: Optional[List[Path]] = None) -> int:
  """
  Imports macro scripts.

  Args:
      scripts_dir: Overrides the builtin package. If provided, only this
                   directory is scanned; builtins are not loaded.
      extra_dirs: Additional directories to scan (e.g. project-local scripts).

  Returns:
      int: Number of scripts registered by this call.

  Raises:
      DeclarationError: If a scanned file has a malformed header or does
          not define a callable `expand`.
  """
  global _BUILTINS_LOADED
  total_loaded = 0

  if scripts_dir is None and not _BUILTINS_LOADED:
    total_loaded += _load_builtins()
    _BUILTINS_LOADED = True

  if scripts_dir is not None:
    total_loaded += _import_from_dir(scripts_dir)
    _BUILTINS_LOADED = True

  for ex_dir in extra_dirs or []:
    total_loaded += _import_from_dir(ex_dir)

  return total_loaded


def _load_builtins() -> int:
  """Imports (or re-imports) every module of the builtin scripts package."""
  before = len(_MACROS)
  package = importlib.import_module(BUILTIN_PACKAGE)
  for _, module_name, _ in pkgutil.iter_modules(package.__path__):
    if module_name.startswith("_"):
      continue
    full_name = f"{BUILTIN_PACKAGE}.{module_name}"
    # A cleared registry needs the decorators to run again.
    if full_name in sys.modules:
      importlib.reload(sys.modules[full_name])
    else:
      importlib.import_module(full_name)
  return len(_MACROS) - before


def _import_from_dir(directory: Path) -> int:
  """Helper to iterate and import declared scripts from a directory."""
  if not directory.is_dir():
    logger.warning("Script directory not found: %s", directory)
    return 0

  count = 0
  for item in sorted(directory.glob("*.py")):
    if item.name == "__init__.py":
      continue
    if load_script_file(item) is not None:
      count += 1
  return count


def load_script_file(path: Path) -> Optional[MacroDeclaration]:
  """
  Imports a single external script and registers its `expand` function.

  Args:
      path: Path to a `.py` file.

  Returns:
      The registered declaration, or None if the file has no header.

  Raises:
      DeclarationError: If the header is invalid, the module fails to
          import, or it has no callable `expand`.
  """
  contents = path.read_text(encoding="utf-8")
  try:
    declaration = parse_declaration(contents)
  except DeclarationError as e:
    raise DeclarationError(f"Failed parsing macro script {path}: {e}") from e
  if declaration is None:
    logger.debug("Skipping %s: no macro declaration header", path)
    return None

  unique_name = f"macro_contract_script_{path.stem}_{path.stat().st_ino}"
  spec = importlib.util.spec_from_file_location(unique_name, path)
  if spec is None or spec.loader is None:
    raise DeclarationError(f"Cannot import macro script {path}")
  module = importlib.util.module_from_spec(spec)
  sys.modules[unique_name] = module
  try:
    spec.loader.exec_module(module)
  except Exception as e:
    del sys.modules[unique_name]
    raise DeclarationError(f"Failed importing macro script {path}: {e}") from e

  expand = getattr(module, "expand", None)
  if not callable(expand):
    raise DeclarationError(f"Macro script {path} does not define an `expand` function")

  register_macro(
    declaration.kind,
    declaration.name,
    declaration.helper_attributes,
    origin=path,
  )(expand)
  return declaration
