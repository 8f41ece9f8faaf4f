"""
Tests for Config Persistence (TOML).

Verifies that:
1. MigrationConfig.load() picks up [tool.logshift] from pyproject.toml.
2. Explicit arguments override TOML settings; list settings are extended.
3. File traversal finds the toml in parent directories.
4. Invalid settings are reported as ValueError.
"""

import pytest

from logshift.config import MigrationConfig
from logshift.recipes import DEFAULT_RECIPE


@pytest.fixture
def toml_file(tmp_path):
  """Creates a dummy pyproject.toml in the temp dir."""
  fpath = tmp_path / "pyproject.toml"
  content = """
[project]
name = "legacy-service"

[tool.logshift]
include = ["src/**/*.java"]
exclude = ["**/generated/**"]
workers = 3
classpath = ["com.acme.logging.BaseLayout"]
"""
  fpath.write_text(content, encoding="utf-8")
  return fpath


def test_defaults():
  config = MigrationConfig()
  assert config.recipe == DEFAULT_RECIPE
  assert config.include == ["**/*.java"]
  assert config.exclude == []
  assert config.workers == 1
  assert config.encoding == "utf-8"


def test_load_defaults_from_toml(tmp_path, toml_file):
  """
  Scenario: User runs the CLI without flags inside a configured project.
  Expect: Config matches TOML values.
  """
  config = MigrationConfig.load(search_path=tmp_path)
  assert config.include == ["src/**/*.java"]
  assert config.exclude == ["**/generated/**"]
  assert config.workers == 3
  assert config.classpath == ["com.acme.logging.BaseLayout"]


def test_arguments_override_toml(tmp_path, toml_file):
  config = MigrationConfig.load(
    workers=8, exclude=["**/test/**"], classpath=["com.acme.Other"], encoding="latin-1", search_path=tmp_path
  )
  assert config.workers == 8
  assert config.encoding == "latin-1"
  assert config.exclude == ["**/generated/**", "**/test/**"]
  assert config.classpath == ["com.acme.logging.BaseLayout", "com.acme.Other"]


def test_toml_found_in_parent(tmp_path, toml_file):
  nested = tmp_path / "modules" / "core"
  nested.mkdir(parents=True)
  assert MigrationConfig.load(search_path=nested).workers == 3


def test_malformed_toml_falls_back_to_defaults(tmp_path):
  (tmp_path / "pyproject.toml").write_text("[tool.logshift\nworkers = ", encoding="utf-8")
  assert MigrationConfig.load(search_path=tmp_path).workers == 1


@pytest.mark.parametrize(
  "kwargs",
  [{"workers": 0}, {"recipe": "does-not-exist"}],
  ids=["zero-workers", "unknown-recipe"],
)
def test_invalid_settings(tmp_path, kwargs):
  with pytest.raises(ValueError, match="Invalid logshift configuration"):
    MigrationConfig.load(search_path=tmp_path, **kwargs)


def test_invalid_toml_value(tmp_path):
  (tmp_path / "pyproject.toml").write_text("[tool.logshift]\nworkers = -1\n", encoding="utf-8")
  with pytest.raises(ValueError):
    MigrationConfig.load(search_path=tmp_path)
