"""
Main Entry Point for the logshift CLI.

This module handles argument parsing and dispatches to specific command
handlers defined in `logshift.cli.commands`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from logshift import __version__
from logshift.cli import commands
from logshift.utils.console import set_verbose


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Parses arguments via argparse and calls the appropriate handler function.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="logshift: Automated Java logging migrations")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
  parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: MIGRATE ---
  cmd_mig = subparsers.add_parser("migrate", help="Migrate a Java file or directory")
  cmd_mig.add_argument("path", type=Path, help="Input source file or directory")
  cmd_mig.add_argument("--recipe", default=None, help="Recipe to run (default: from toml)")
  cmd_mig.add_argument("--out", type=Path, default=None, help="Mirror results into this directory")
  cmd_mig.add_argument("--dry-run", action="store_true", help="Report changes without writing to disk")
  cmd_mig.add_argument("--diff", action="store_true", help="Print a unified diff of every edited file")
  cmd_mig.add_argument("--workers", type=int, default=None, help="Files migrated concurrently (default: from toml)")
  cmd_mig.add_argument(
    "--json-report", type=Path, default=None, help="Dump per-file results (status, errors, trace) to a JSON file."
  )

  # --- Command: CHECK ---
  cmd_chk = subparsers.add_parser("check", help="List files a recipe would change")
  cmd_chk.add_argument("path", type=Path, help="Input source file or directory")
  cmd_chk.add_argument("--recipe", default=None, help="Recipe to run (default: from toml)")

  # --- Command: RECIPES ---
  subparsers.add_parser("recipes", help="List available recipes")

  args = parser.parse_args(argv)
  set_verbose(args.verbose)

  if args.command == "migrate":
    return commands.handle_migrate(
      args.path, args.out, args.recipe, args.dry_run, args.diff, args.workers, args.json_report
    )

  elif args.command == "check":
    return commands.handle_check(args.path, args.recipe)

  elif args.command == "recipes":
    return commands.handle_recipes()

  return 0


if __name__ == "__main__":
  sys.exit(main())
