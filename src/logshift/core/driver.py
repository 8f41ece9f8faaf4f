"""
Compilation Unit Driver.

Runs one recipe over one compilation unit:

1. The applicability gate. Units that fail it are returned as-is.
2. The primary traversal, which edits matched classes in place and
   schedules deferred passes.
3. The deferred pass queue, drained once in scheduling order.
"""

import logging

from logshift.core.context import RewriteContext
from logshift.core.queue import DeferredPassQueue
from logshift.core.recipe import Recipe
from logshift.java.tree import CompilationUnit

logger = logging.getLogger(__name__)


class CompilationUnitDriver:
  """
  Wires gate, primary visitor and deferred queue for a recipe.

  Args:
      recipe: The rule to run.
      context: Collaborator services and tracer for the run.
  """

  def __init__(self, recipe: Recipe, context: RewriteContext) -> None:
    self.recipe = recipe
    self.context = context

  def run(self, unit: CompilationUnit) -> CompilationUnit:
    """
    Migrates one type-attributed compilation unit.

    Args:
        unit: The resolved tree.

    Returns:
        CompilationUnit: The edited tree, or ``unit`` itself when nothing applied.

    Raises:
        SynthesisError: If a template cannot be synthesized. No partial
            edits are returned in that case.
    """
    tracer = self.context.tracer
    gate = self.recipe.applicable_test()
    if not gate.applies(unit):
      tracer.log_inspection(repr(gate), "skipped", "unit does not reference the type")
      return unit

    queue = DeferredPassQueue()
    tracer.start_phase("Primary Visit", self.recipe.name)
    try:
      visited = self.recipe.visitor(self.context, queue).transform(unit)
    finally:
      tracer.end_phase()

    logger.debug("Recipe %s scheduled %d deferred passes", self.recipe.name, len(queue))
    tracer.start_phase("Deferred Passes", f"{len(queue)} scheduled")
    try:
      return queue.drain(visited, self.context)
    finally:
      tracer.end_phase()
