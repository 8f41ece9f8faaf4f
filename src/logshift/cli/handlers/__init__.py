from .migrate import _print_batch_summary, handle_check, handle_migrate
from .recipes import handle_recipes
