"""
Bundled Recipes Package.

Importing this package imports every module in it, which runs their
``@register_recipe`` decorators and populates the recipe registry. Dropping a
new recipe module into this folder is enough to make it available to the
engine and the CLI.
"""

import importlib
import logging
import pkgutil
from pathlib import Path
from typing import List

from logshift.core.recipe import _RECIPE_REGISTRY, Recipe, register_recipe
from logshift.errors import RecipeNotFoundError

DEFAULT_RECIPE = "log4j-appender-to-logback"


def _auto_register_recipes() -> None:
  """
  Imports every module of this package so their recipes register.
  """
  pkg_path = str(Path(__file__).parent)
  for _, module_name, _ in pkgutil.iter_modules([pkg_path]):
    try:
      importlib.import_module(f".{module_name}", package=__name__)
    except Exception as e:
      # One broken recipe module must not take the others down with it.
      logging.warning(f"⚠️  Failed to load recipe module '{module_name}': {e}")


_auto_register_recipes()


def available_recipes() -> List[str]:
  """
  Returns the names of all registered recipes.

  Returns:
      List[str]: Registry keys, e.g. ``['log4j-appender-to-logback']``.
  """
  return sorted(_RECIPE_REGISTRY.keys())


def get_recipe(name: str) -> Recipe:
  """
  Instantiates a registered recipe.

  Raises:
      RecipeNotFoundError: If no recipe is registered under ``name``.
  """
  cls = _RECIPE_REGISTRY.get(name)
  if cls is None:
    known = ", ".join(available_recipes()) or "none"
    raise RecipeNotFoundError(f"Unknown recipe '{name}' (available: {known})")
  return cls()


__all__ = ["DEFAULT_RECIPE", "Recipe", "available_recipes", "get_recipe", "register_recipe"]
