"""
Main Entry Point for the console-rewriter CLI.

Parses arguments and dispatches to the handlers in `console_rewriter.cli.handlers`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from console_rewriter.config import parse_cli_key_values
from console_rewriter.cli import handlers
from console_rewriter import __version__


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="console-rewriter: replace the first argument of console.* calls")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: CONVERT ---
  cmd_conv = subparsers.add_parser("convert", help="Rewrite a Python file or directory")
  cmd_conv.add_argument("path", type=Path, help="Input source file or directory")
  cmd_conv.add_argument("--out", type=Path, help="Output destination (file or dir)")
  cmd_conv.add_argument("--visitor", default=None, help="Registered visitor name (default: from toml)")
  cmd_conv.add_argument("--object", dest="target_object", default=None, help="Object name to match (default: console)")
  cmd_conv.add_argument(
    "--replacement", default=None, help="Replacement string literal content (default: from_plugin)"
  )
  cmd_conv.add_argument(
    "--json-trace", type=Path, default=None, help="Dump the execution trace (events, diffs) to a JSON file."
  )
  cmd_conv.add_argument(
    "--config",
    nargs="*",
    help="Configuration overrides in key=value format (e.g. replacement_value=redacted)",
  )

  # --- Command: VISITORS ---
  subparsers.add_parser("visitors", help="List registered visitors")

  args = parser.parse_args(argv)

  if args.command == "convert":
    settings = parse_cli_key_values(args.config)
    return handlers.handle_convert(
      args.path,
      args.out,
      args.visitor,
      args.target_object,
      args.replacement,
      settings,
      args.json_trace,
    )

  elif args.command == "visitors":
    return handlers.handle_visitors()

  return 0


if __name__ == "__main__":
  sys.exit(main())
