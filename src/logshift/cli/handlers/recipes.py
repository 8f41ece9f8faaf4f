"""
Recipes Command Handler.

Lists the registered recipes with their display names and descriptions.
"""

from rich.table import Table

from logshift.recipes import available_recipes, get_recipe
from logshift.utils.console import console, log_warning


def handle_recipes() -> int:
  """
  Handles the 'recipes' command.

  Returns:
      int: Exit code (always 0).
  """
  names = available_recipes()
  if not names:
    log_warning("No recipes registered.")
    return 0

  table = Table(title="Available Recipes")
  table.add_column("Name", style="cyan")
  table.add_column("Title")
  table.add_column("Description", style="dim")
  for name in names:
    recipe = get_recipe(name)
    table.add_row(name, recipe.display_name, recipe.description)

  console.print(table)
  return 0
