"""
Batch Migration Runner.

Applies one recipe to every matching file under a directory. Each file is an
independent task with its own engine run, so files can be migrated
concurrently on a thread pool and a failure in one file never stops the
others.
"""

import fnmatch
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from logshift.config import MigrationConfig
from logshift.core.engine import MigrationEngine
from logshift.core.result import MigrationResult
from logshift.enums import MigrationStatus

logger = logging.getLogger(__name__)


def discover_files(root: Path, include: Sequence[str], exclude: Sequence[str] = ()) -> List[Path]:
  """
  Lists the files to migrate.

  Args:
      root: A single file (returned as-is) or a directory to search.
      include: Glob patterns relative to ``root`` (``Path.glob`` syntax).
      exclude: ``fnmatch`` patterns tested against the POSIX relative path.

  Returns:
      List[Path]: Matching files, sorted and de-duplicated.
  """
  if root.is_file():
    return [root]

  found = set()
  for pattern in include:
    for path in root.glob(pattern):
      if not path.is_file():
        continue
      relative = path.relative_to(root).as_posix()
      if any(fnmatch.fnmatch(relative, ex) for ex in exclude):
        continue
      found.add(path)
  return sorted(found)


class BatchMigrator:
  """
  Migrates a tree of source files.

  Args:
      config: Run settings (recipe, globs, worker count, encoding).
      engine: Engine to use. Built from ``config`` if omitted.
  """

  def __init__(self, config: Optional[MigrationConfig] = None, engine: Optional[MigrationEngine] = None) -> None:
    self.config = config or MigrationConfig()
    self.engine = engine or MigrationEngine(config=self.config)

  def run(self, root: Path, out_dir: Optional[Path] = None, dry_run: bool = False) -> Dict[str, MigrationResult]:
    """
    Migrates every discovered file.

    Args:
        root: File or directory to migrate.
        out_dir: Mirror results into this directory instead of editing in place.
        dry_run: Compute results without writing anything.

    Returns:
        Dict[str, MigrationResult]: Results keyed by path relative to ``root``,
        in sorted order.
    """
    files = discover_files(root, self.config.include, self.config.exclude)
    base = root if root.is_dir() else root.parent
    logger.debug("Discovered %d files under %s", len(files), root)

    results: Dict[str, MigrationResult] = {}
    if self.config.workers > 1 and len(files) > 1:
      with ThreadPoolExecutor(max_workers=self.config.workers) as executor:
        futures = {executor.submit(self.migrate_file, path, base, out_dir, dry_run): path for path in files}
        for future in as_completed(futures):
          result = future.result()
          results[result.path] = result
    else:
      for path in files:
        result = self.migrate_file(path, base, out_dir, dry_run)
        results[result.path] = result

    return dict(sorted(results.items()))

  def migrate_file(
    self, path: Path, base: Path, out_dir: Optional[Path] = None, dry_run: bool = False
  ) -> MigrationResult:
    """
    Migrates one file and writes the outcome.

    Edited files are written back (or to ``out_dir``); with ``out_dir`` set,
    unchanged files are copied too so the mirror is complete. Failed files are
    never written.
    """
    relative = path.relative_to(base).as_posix()
    try:
      with open(path, "rt", encoding=self.config.encoding, newline="") as f:
        code = f.read()
      result = self.engine.run(code, path=relative)

      if dry_run or result.status == MigrationStatus.FAILED:
        return result
      if out_dir is not None:
        destination = out_dir / relative
        destination.parent.mkdir(parents=True, exist_ok=True)
      elif result.changed:
        destination = path
      else:
        return result
      with open(destination, "wt", encoding=self.config.encoding, newline="") as f:
        f.write(result.code)
      return result
    except Exception as e:
      logger.debug("Migration of %s failed", relative, exc_info=True)
      return MigrationResult(path=relative, status=MigrationStatus.FAILED, errors=[f"{type(e).__name__}: {e}"])
