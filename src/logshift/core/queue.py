"""
Deferred Pass Queue.

Orchestrates the rewrite passes a rule schedules during its primary
traversal. Passes run strictly after that traversal, in the order they were
scheduled, each receiving the previous pass's output. A queue belongs to a
single run over a single compilation unit and is drained exactly once.
"""

import logging
from typing import Iterator, List

from logshift.core.context import RewriteContext
from logshift.core.passes.base import DeferredPass
from logshift.errors import QueueStateError
from logshift.java.tree import CompilationUnit

logger = logging.getLogger(__name__)


class DeferredPassQueue:
  """
  FIFO worklist of deferred passes.
  """

  def __init__(self) -> None:
    self._passes: List[DeferredPass] = []
    self._drained = False

  @property
  def drained(self) -> bool:
    return self._drained

  def schedule(self, rewrite_pass: DeferredPass) -> bool:
    """
    Appends a pass unless an equal one is already queued.

    Args:
        rewrite_pass: The pass to run after the primary traversal.

    Returns:
        bool: True if the pass was queued, False if it was a duplicate.

    Raises:
        QueueStateError: If the queue has already been drained.
    """
    if self._drained:
      raise QueueStateError(f"Cannot schedule '{rewrite_pass.describe()}' on a drained queue")
    if rewrite_pass in self._passes:
      return False
    self._passes.append(rewrite_pass)
    return True

  def drain(self, unit: CompilationUnit, context: RewriteContext) -> CompilationUnit:
    """
    Runs every queued pass in order over the whole unit.

    Args:
        unit: The tree produced by the primary traversal.
        context: Collaborator services for the run.

    Returns:
        CompilationUnit: The tree after the last pass.

    Raises:
        QueueStateError: If called a second time.
    """
    if self._drained:
      raise QueueStateError("Deferred pass queue has already been drained")
    self._drained = True

    current = unit
    for rewrite_pass in self._passes:
      description = rewrite_pass.describe()
      logger.debug("Running deferred pass: %s", description)
      result = rewrite_pass.transform(current, context)
      context.tracer.log_executed(description, result is not current)
      current = result
    return current

  def __len__(self) -> int:
    return len(self._passes)

  def __iter__(self) -> Iterator[DeferredPass]:
    return iter(list(self._passes))
