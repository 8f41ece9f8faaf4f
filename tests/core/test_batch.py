"""
Tests for the Batch Migrator and file discovery.
"""

from unittest.mock import MagicMock

import pytest

from logshift.config import MigrationConfig
from logshift.core.batch import BatchMigrator, discover_files
from logshift.enums import MigrationStatus

PLAIN = "package com.example;\n\nclass Plain {}\n"
BROKEN = "class Broken {\n"


@pytest.fixture
def tree(tmp_path, appender_source):
  """
  src/
    com/example/MyAppender.java   (migratable)
    com/example/Plain.java        (untouched)
    gen/Broken.java               (parse error)
    README.txt                    (not Java)
  """
  root = tmp_path / "src"
  (root / "com" / "example").mkdir(parents=True)
  (root / "gen").mkdir()
  (root / "com" / "example" / "MyAppender.java").write_text(appender_source)
  (root / "com" / "example" / "Plain.java").write_text(PLAIN)
  (root / "gen" / "Broken.java").write_text(BROKEN)
  (root / "README.txt").write_text("notes")
  return root


def statuses(results):
  return {name: r.status for name, r in results.items()}


EXPECTED = {
  "com/example/MyAppender.java": MigrationStatus.EDITED,
  "com/example/Plain.java": MigrationStatus.UNCHANGED,
  "gen/Broken.java": MigrationStatus.FAILED,
}


def test_discover_files(tree):
  found = discover_files(tree, ["**/*.java"], ["gen/*"])
  assert [p.relative_to(tree).as_posix() for p in found] == ["com/example/MyAppender.java", "com/example/Plain.java"]
  single = tree / "gen" / "Broken.java"
  assert discover_files(single, ["**/*.java"]) == [single]


def test_in_place(tree, migrated_appender_source):
  results = BatchMigrator().run(tree)
  assert list(results) == sorted(EXPECTED)
  assert statuses(results) == EXPECTED
  assert (tree / "com" / "example" / "MyAppender.java").read_text() == migrated_appender_source
  assert (tree / "com" / "example" / "Plain.java").read_text() == PLAIN
  assert (tree / "gen" / "Broken.java").read_text() == BROKEN


def test_dry_run_writes_nothing(tree, appender_source, migrated_appender_source):
  results = BatchMigrator().run(tree, dry_run=True)
  assert results["com/example/MyAppender.java"].code == migrated_appender_source
  assert (tree / "com" / "example" / "MyAppender.java").read_text() == appender_source


def test_out_dir_mirrors_successful_files(tree, tmp_path, appender_source, migrated_appender_source):
  out = tmp_path / "out"
  BatchMigrator().run(tree, out_dir=out)
  assert (out / "com" / "example" / "MyAppender.java").read_text() == migrated_appender_source
  assert (out / "com" / "example" / "Plain.java").read_text() == PLAIN
  assert not (out / "gen" / "Broken.java").exists()
  assert (tree / "com" / "example" / "MyAppender.java").read_text() == appender_source


def test_workers_give_same_results(tree):
  results = BatchMigrator(MigrationConfig(workers=4)).run(tree, dry_run=True)
  assert list(results) == sorted(EXPECTED)
  assert statuses(results) == EXPECTED


def test_single_file_root(tree, migrated_appender_source):
  path = tree / "com" / "example" / "MyAppender.java"
  results = BatchMigrator().run(path)
  assert list(results) == ["MyAppender.java"]
  assert path.read_text() == migrated_appender_source


def test_crlf_is_preserved(tmp_path, appender_source):
  path = tmp_path / "MyAppender.java"
  path.write_bytes(appender_source.replace("\n", "\r\n").encode("utf-8"))
  BatchMigrator().run(tmp_path)
  data = path.read_bytes().decode("utf-8")
  assert "extends AppenderBase<ILoggingEvent> {\r\n" in data
  assert "\n" not in data.replace("\r\n", "")


def test_unexpected_errors_become_failed_results(tree):
  """
  Scenario: The engine crashes on every file.
  Expectation: Each file gets a failed result naming the exception; nothing is written.
  """
  engine = MagicMock()
  engine.run.side_effect = RuntimeError("boom")
  results = BatchMigrator(engine=engine).run(tree)
  assert all(r.status == MigrationStatus.FAILED for r in results.values())
  assert results["com/example/Plain.java"].errors == ["RuntimeError: boom"]


def test_undecodable_file_fails_alone(tree):
  (tree / "com" / "example" / "Latin1.java").write_bytes("// caf\xe9\nclass Latin1 {}\n".encode("latin-1"))
  results = BatchMigrator().run(tree, dry_run=True)
  assert results["com/example/Latin1.java"].status == MigrationStatus.FAILED
  assert results["com/example/Latin1.java"].errors[0].startswith("UnicodeDecodeError")
  assert results["com/example/MyAppender.java"].status == MigrationStatus.EDITED
