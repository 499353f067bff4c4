"""
Main Entry Point for the macro-contract CLI.

This module handles argument parsing and dispatches to the command handlers
in `macro_contract.cli.handlers`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from macro_contract import __version__
from macro_contract.cli.handlers.expand import handle_expand
from macro_contract.cli.handlers.scripts import handle_check, handle_list
from macro_contract.config import parse_cli_key_values
from macro_contract.enums import MacroKind


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="macro-contract: run macro scripts on source fragments")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: EXPAND ---
  cmd_exp = subparsers.add_parser("expand", help="Expand one macro invocation")
  cmd_exp.add_argument("kind", choices=[k.value for k in MacroKind], help="Macro kind")
  cmd_exp.add_argument("name", help="Macro name (e.g. say_hello, SayHello, hello_world)")
  cmd_exp.add_argument(
    "path",
    nargs="?",
    type=Path,
    default=None,
    help="File holding the input fragment (default: stdin, also '-')",
  )
  cmd_exp.add_argument("--args", dest="arguments", default=None, help="Attribute argument text, e.g. 'message = \"Hi\"'")
  cmd_exp.add_argument(
    "--strict",
    action="store_true",
    default=None,
    help="Fail when an attribute macro leaves its item unchanged (Overrides config)",
  )
  cmd_exp.add_argument("--scripts", nargs="+", type=Path, default=None, help="Extra directories of macro scripts")
  cmd_exp.add_argument("--splice", action="store_true", help="Print the spliced source instead of the bare output")
  cmd_exp.add_argument("--out", type=Path, default=None, help="Write the result to a file")
  cmd_exp.add_argument(
    "--config",
    nargs="*",
    help="Script configuration flags in key=value format (e.g. greeting=hi verbose=True)",
  )

  # --- Command: LIST ---
  cmd_list = subparsers.add_parser("list", help="Show registered macros")
  cmd_list.add_argument("--scripts", nargs="+", type=Path, default=None, help="Extra directories of macro scripts")

  # --- Command: CHECK ---
  cmd_check = subparsers.add_parser("check", help="Validate a script's '#! MACRO:' header")
  cmd_check.add_argument("path", type=Path, help="Script file")

  args = parser.parse_args(argv)

  if args.command == "expand":
    return handle_expand(
      args.kind,
      args.name,
      args.path,
      args.arguments,
      args.strict,
      args.scripts,
      parse_cli_key_values(args.config),
      splice=args.splice,
      output_path=args.out,
    )
  if args.command == "list":
    return handle_list(args.scripts)
  if args.command == "check":
    return handle_check(args.path)

  return 1


if __name__ == "__main__":
  sys.exit(main())
