"""
Migrate and Check Command Handlers.

This module implements the `logshift migrate` and `logshift check` commands.
It orchestrates:
1. Configuration loading (``[tool.logshift]`` plus CLI overrides).
2. File discovery and batch migration via the `BatchMigrator`.
3. Diff output, the JSON report and the summary table.
"""

import difflib
import json
from pathlib import Path
from typing import Dict, Optional

from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from logshift.config import MigrationConfig
from logshift.core.batch import BatchMigrator, discover_files
from logshift.core.result import MigrationResult
from logshift.enums import MigrationStatus
from logshift.utils.console import console, log_error, log_info, log_success, log_warning


def _load_config(input_path: Path, recipe: Optional[str], workers: Optional[int] = None) -> Optional[MigrationConfig]:
  try:
    return MigrationConfig.load(
      recipe=recipe,
      workers=workers,
      search_path=input_path if input_path.is_dir() else input_path.parent,
    )
  except ValueError as e:
    log_error(escape(str(e)))
    return None


def handle_migrate(
  input_path: Path,
  output_path: Optional[Path],
  recipe: Optional[str],
  dry_run: bool,
  show_diff: bool,
  workers: Optional[int] = None,
  json_report_path: Optional[Path] = None,
) -> int:
  """
  Handles the 'migrate' command execution.

  Args:
      input_path: Java file or directory to migrate.
      output_path: Directory to mirror results into; files are edited in place if None.
      recipe: Override for the recipe name.
      dry_run: If True, nothing is written.
      show_diff: If True, prints a unified diff for every edited file.
      workers: Override for the number of concurrent files.
      json_report_path: Optional path to dump per-file results as JSON.

  Returns:
      int: Exit code (0 for success, 1 if any file failed).
  """
  if not input_path.exists():
    log_error(f"Input not found: {input_path}")
    return 1

  config = _load_config(input_path, recipe, workers)
  if config is None:
    return 1

  files = discover_files(input_path, config.include, config.exclude)
  if not files:
    log_warning(f"No matching files found in {input_path}")
    return 0
  log_info(f"Processing {len(files)} files from [path]{input_path}[/path] with recipe [code]{config.recipe}[/code]...")

  originals: Dict[str, str] = {}
  if show_diff:
    base = input_path if input_path.is_dir() else input_path.parent
    for path in files:
      try:
        with open(path, "rt", encoding=config.encoding, newline="") as f:
          originals[path.relative_to(base).as_posix()] = f.read()
      except (OSError, UnicodeDecodeError):
        continue

  results = BatchMigrator(config).run(input_path, out_dir=output_path, dry_run=dry_run)

  if show_diff:
    for name, result in results.items():
      if result.changed and name in originals:
        _print_diff(name, originals[name], result.code)

  if json_report_path:
    _write_report(json_report_path, results)

  _print_batch_summary(results, dry_run)
  return 1 if any(r.status == MigrationStatus.FAILED for r in results.values()) else 0


def handle_check(input_path: Path, recipe: Optional[str]) -> int:
  """
  Handles the 'check' command: lists files the recipe would change.

  Returns:
      int: Exit code (0 if nothing would change, 1 otherwise or on failures).
  """
  if not input_path.exists():
    log_error(f"Input not found: {input_path}")
    return 1

  config = _load_config(input_path, recipe)
  if config is None:
    return 1

  results = BatchMigrator(config).run(input_path, dry_run=True)
  pending = [name for name, r in results.items() if r.changed]
  failed = [name for name, r in results.items() if r.status == MigrationStatus.FAILED]

  for name in pending:
    console.print(f"would migrate [path]{name}[/path]")
  for name in failed:
    log_error(escape(f"{name}: {'; '.join(results[name].errors)}"))

  if not pending and not failed:
    log_success(f"{len(results)} files checked, nothing to migrate.")
    return 0
  log_warning(f"{len(pending)} of {len(results)} files would be migrated.")
  return 1


def _print_diff(name: str, before: str, after: str) -> None:
  diff = "".join(
    difflib.unified_diff(
      before.splitlines(keepends=True),
      after.splitlines(keepends=True),
      fromfile=f"a/{name}",
      tofile=f"b/{name}",
    )
  )
  console.print(Syntax(diff, "diff", theme="ansi_dark", background_color="default"))


def _write_report(report_path: Path, results: Dict[str, MigrationResult]) -> None:
  payload = {name: result.model_dump(mode="json", exclude={"code"}) for name, result in results.items()}
  try:
    report_path.parent.mkdir(parents=True, exist_ok=True)
    with open(report_path, "wt", encoding="utf-8") as f:
      json.dump(payload, f, indent=2)
    log_info(f"Report saved to [path]{report_path}[/path]")
  except OSError as e:
    log_error(f"Failed to write report: {e}")


def _print_batch_summary(results: Dict[str, MigrationResult], dry_run: bool = False) -> None:
  """
  Renders a summary table of migration results to the console.

  Args:
      results: Dictionary mapping relative paths to migration results.
      dry_run: Whether the run wrote files.
  """
  total = len(results)
  edited = sum(1 for r in results.values() if r.status == MigrationStatus.EDITED)
  failures = sum(1 for r in results.values() if r.status == MigrationStatus.FAILED)
  verb = "would be migrated" if dry_run else "migrated"

  if failures == 0 and edited == 0:
    log_success(f"Batch Complete: {total} files checked, nothing to migrate.")
    return

  table = Table(title="Migration Report")
  table.add_column("File", style="cyan")
  table.add_column("Status", justify="center")
  table.add_column("Issues", style="red")

  for filename, res in results.items():
    if res.status == MigrationStatus.UNCHANGED:
      continue
    status = "❌ Failed" if res.status == MigrationStatus.FAILED else "✏️ Edited"
    issues = escape("; ".join(res.errors))
    table.add_row(filename, status, issues)

  console.print(table)
  console.print(f"\n[bold]Summary:[/bold] {edited} {verb}, {total - edited - failures} unchanged, {failures} failed.")
