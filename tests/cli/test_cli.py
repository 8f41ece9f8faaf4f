"""
Tests for the logshift command line interface.

Covers argument dispatch and the end-to-end behaviour of the ``migrate``,
``check`` and ``recipes`` commands against temporary source trees.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from rich.console import Console

from logshift import __version__
from logshift.cli.__main__ import main
from logshift.utils.console import set_console


@pytest.fixture
def captured():
  """Routes console and logging output into a recording console."""
  capture = Console(record=True, width=200)
  set_console(capture)
  return capture


@pytest.fixture
def project(tmp_path, appender_source):
  root = tmp_path / "project"
  (root / "src").mkdir(parents=True)
  (root / "src" / "MyAppender.java").write_text(appender_source)
  (root / "src" / "Plain.java").write_text("class Plain {}\n")
  return root


def test_version(capsys):
  with pytest.raises(SystemExit) as exc:
    main(["--version"])
  assert exc.value.code == 0
  assert __version__ in capsys.readouterr().out


def test_command_is_required():
  with pytest.raises(SystemExit):
    main([])


def test_migrate_dispatch():
  with patch("logshift.cli.commands.handle_migrate", return_value=0) as mock_handle:
    assert main(["migrate", "src", "--workers", "3", "--dry-run", "--json-report", "r.json"]) == 0
  mock_handle.assert_called_once_with(Path("src"), None, None, True, False, 3, Path("r.json"))


def test_check_dispatch_and_verbose():
  with patch("logshift.cli.commands.handle_check", return_value=1) as mock_handle, patch(
    "logshift.cli.__main__.set_verbose"
  ) as mock_verbose:
    assert main(["-v", "check", "src", "--recipe", "log4j-appender-to-logback"]) == 1
  mock_handle.assert_called_once_with(Path("src"), "log4j-appender-to-logback")
  mock_verbose.assert_called_once_with(True)


def test_recipes_lists_bundled_recipe(captured):
  assert main(["recipes"]) == 0
  output = captured.export_text()
  assert "log4j-appender-to-logback" in output
  assert "Migrate from Log4j appender" in output


def test_migrate_in_place(project, captured, migrated_appender_source):
  assert main(["migrate", str(project)]) == 0
  assert (project / "src" / "MyAppender.java").read_text() == migrated_appender_source
  assert (project / "src" / "Plain.java").read_text() == "class Plain {}\n"
  output = captured.export_text()
  assert "src/MyAppender.java" in output
  assert "1 migrated, 1 unchanged, 0 failed" in output


def test_migrate_dry_run_with_diff(project, captured, appender_source):
  assert main(["migrate", str(project), "--dry-run", "--diff"]) == 0
  assert (project / "src" / "MyAppender.java").read_text() == appender_source
  output = captured.export_text()
  assert "+public class MyAppender extends AppenderBase<ILoggingEvent> {" in output
  assert "-import org.apache.log4j.AppenderSkeleton;" in output
  assert "would be migrated" in output


def test_migrate_out_dir_and_report(project, tmp_path, captured, migrated_appender_source):
  out = tmp_path / "out"
  report = tmp_path / "reports" / "logshift.json"
  assert main(["migrate", str(project / "src"), "--out", str(out), "--json-report", str(report)]) == 0
  assert (out / "MyAppender.java").read_text() == migrated_appender_source

  payload = json.loads(report.read_text())
  assert payload["MyAppender.java"]["status"] == "edited"
  assert payload["Plain.java"]["status"] == "unchanged"
  assert "code" not in payload["MyAppender.java"]
  assert payload["MyAppender.java"]["trace_events"]


def test_migrate_reports_failures(project, captured):
  (project / "src" / "Broken.java").write_text("class Broken {")
  assert main(["migrate", str(project)]) == 1
  output = captured.export_text()
  assert "Parse Error" in output
  assert (project / "src" / "Broken.java").read_text() == "class Broken {"


def test_migrate_missing_input(tmp_path, captured):
  assert main(["migrate", str(tmp_path / "nope")]) == 1
  assert "Input not found" in captured.export_text()


def test_migrate_without_java_files(tmp_path, captured):
  (tmp_path / "notes.txt").write_text("nothing here")
  assert main(["migrate", str(tmp_path)]) == 0
  assert "No matching files" in captured.export_text()


def test_migrate_unknown_recipe(project, captured):
  assert main(["migrate", str(project), "--recipe", "nope"]) == 1
  assert "Invalid logshift configuration" in captured.export_text()


def test_migrate_uses_toml_excludes(project, captured, appender_source):
  (project / "pyproject.toml").write_text('[tool.logshift]\nexclude = ["src/MyAppender.java"]\n')
  assert main(["migrate", str(project)]) == 0
  assert (project / "src" / "MyAppender.java").read_text() == appender_source


def test_check_exit_codes(project, captured):
  assert main(["check", str(project)]) == 1
  assert "would migrate src/MyAppender.java" in captured.export_text()

  assert main(["migrate", str(project)]) == 0
  assert main(["check", str(project)]) == 0
  assert "nothing to migrate" in captured.export_text()
