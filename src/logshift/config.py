"""
Migration Configuration Store.

``MigrationConfig`` collects the settings of a migration run. Values come
from the ``[tool.logshift]`` table of the nearest ``pyproject.toml`` and are
overridden by explicit arguments (usually CLI flags).

.. code-block:: toml

    [tool.logshift]
    recipe = "log4j-appender-to-logback"
    include = ["src/**/*.java"]
    exclude = ["**/generated/**"]
    workers = 4
    classpath = ["com.acme.logging.BaseLayout"]
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator

from logshift.recipes import DEFAULT_RECIPE, available_recipes

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib


class MigrationConfig(BaseModel):
  """
  Configuration container for the migration engine and the batch runner.
  """

  recipe: str = Field(DEFAULT_RECIPE, description="Name of the registered recipe to run.")
  include: List[str] = Field(default_factory=lambda: ["**/*.java"], description="Glob patterns of files to migrate.")
  exclude: List[str] = Field(default_factory=list, description="Glob patterns of files to skip.")
  workers: int = Field(1, ge=1, description="Number of files migrated concurrently.")
  encoding: str = Field("utf-8", description="Text encoding of source files.")
  classpath: List[str] = Field(
    default_factory=list, description="Extra fully-qualified type names the resolver should treat as known."
  )

  @field_validator("recipe")
  @classmethod
  def validate_recipe(cls, v: str) -> str:
    """
    Ensures the recipe is registered.

    Args:
        v (str): The recipe name.

    Returns:
        str: The normalized recipe name.

    Raises:
        ValueError: If no recipe is registered under that name.
    """
    v_clean = v.strip()
    known = available_recipes()
    if known and v_clean not in known:
      raise ValueError(f"Unknown recipe: '{v_clean}'. Available recipes: {known}")
    return v_clean

  @classmethod
  def load(
    cls,
    recipe: Optional[str] = None,
    include: Optional[List[str]] = None,
    exclude: Optional[List[str]] = None,
    workers: Optional[int] = None,
    encoding: Optional[str] = None,
    classpath: Optional[List[str]] = None,
    search_path: Optional[Path] = None,
  ) -> "MigrationConfig":
    """
    Loads configuration from pyproject.toml and overrides with explicit arguments.

    Args:
        recipe (Optional[str]): Override for the recipe name.
        include (Optional[List[str]]): Override for include globs.
        exclude (Optional[List[str]]): Extra exclude globs, appended to the file's.
        workers (Optional[int]): Override for the worker count.
        encoding (Optional[str]): Override for the source encoding.
        classpath (Optional[List[str]]): Extra known types, appended to the file's.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        MigrationConfig: The fully resolved configuration object.

    Raises:
        ValueError: If the merged settings are invalid.
    """
    toml_config, _ = _load_toml_settings(search_path or Path.cwd())

    settings: Dict[str, Any] = dict(toml_config)
    if recipe is not None:
      settings["recipe"] = recipe
    if include:
      settings["include"] = list(include)
    if exclude:
      settings["exclude"] = list(settings.get("exclude", [])) + list(exclude)
    if workers is not None:
      settings["workers"] = workers
    if encoding is not None:
      settings["encoding"] = encoding
    if classpath:
      settings["classpath"] = list(settings.get("classpath", [])) + list(classpath)

    try:
      return cls.model_validate(settings)
    except ValidationError as e:
      raise ValueError(f"Invalid logshift configuration: {e}")


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches ``start_path`` and its parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The ``[tool.logshift]`` table and the directory it was found in.
  """
  current = start_path.resolve()
  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError):
        return {}, None
      return data.get("tool", {}).get("logshift", {}), parent
  return {}, None
