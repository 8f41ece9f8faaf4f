"""
CLI Command Handlers Facade.

Re-exports the handlers from `logshift.cli.handlers` so the dispatcher and
tests have a single module to import and patch.
"""

from logshift.cli.handlers.migrate import _print_batch_summary, handle_check, handle_migrate
from logshift.cli.handlers.recipes import handle_recipes

__all__ = ["handle_migrate", "handle_check", "handle_recipes", "_print_batch_summary"]
