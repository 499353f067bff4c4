"""
Expand Command Handler.

This module implements the logic for the `macro-contract expand` command.
It orchestrates:
1. Configuration loading (including external script discovery).
2. Reading the input fragment from a file or stdin.
3. Running the macro through the Engine.
4. Writing the output (or the spliced source) to stdout or a file.
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.markup import escape

from macro_contract.config import RuntimeConfig
from macro_contract.core.engine import MacroEngine
from macro_contract.core.errors import DeclarationError
from macro_contract.core.registry import load_scripts
from macro_contract.utils.console import log_error, log_info, log_success


def handle_expand(
  kind: str,
  name: str,
  input_path: Optional[Path],
  arguments_text: Optional[str],
  strict: Optional[bool],
  script_dirs: Optional[List[Path]],
  script_settings: Dict[str, Any],
  splice: bool = False,
  output_path: Optional[Path] = None,
) -> int:
  """
  Handles the 'expand' command execution.

  Args:
      kind: Macro kind ("attribute", "derive" or "function").
      name: Macro name.
      input_path: File holding the input fragment. None or '-' reads stdin.
      arguments_text: Attribute argument text.
      strict: Overrides strict mode from configuration.
      script_dirs: Extra directories holding external macro scripts.
      script_settings: Free-form settings for scripts.
      splice: If True, print the source as the host would see it after
          splicing instead of the bare output fragment.
      output_path: Where to write the result. Defaults to stdout.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  reading_stdin = input_path is None or str(input_path) == "-"
  if reading_stdin:
    fragment = sys.stdin.read()
    search_path = None
  else:
    if not input_path.is_file():
      log_error(f"Input not found: {escape(str(input_path))}")
      return 1
    fragment = input_path.read_text(encoding="utf-8")
    search_path = input_path.parent

  config = RuntimeConfig.load(
    strict_mode=strict,
    script_settings=script_settings,
    script_paths=script_dirs,
    search_path=search_path,
  )

  if config.script_paths:
    try:
      # Builtins first, so the count below only covers external files.
      load_scripts()
      loaded = load_scripts(extra_dirs=config.script_paths)
    except DeclarationError as e:
      log_error(escape(str(e)))
      return 1
    if loaded:
      log_info(f"Loaded {loaded} external macro script(s).")

  engine = MacroEngine(config=config)
  result = engine.invoke(kind, name, fragment, arguments_text)
  if not result.success:
    for err in result.errors:
      log_error(escape(err))
    return 1

  text = engine.splice(kind, fragment, result.output) if splice else result.output

  if output_path:
    output_path.write_text(text, encoding="utf-8")
    log_success(f"Wrote [path]{escape(str(output_path))}[/path]")
  else:
    sys.stdout.write(text)
    if not text.endswith("\n"):
      sys.stdout.write("\n")
  return 0
