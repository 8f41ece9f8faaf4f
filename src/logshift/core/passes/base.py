"""
Interface definition for Deferred Passes.

A deferred pass is a named, parameterized rewrite request. Rule components
create passes while the primary traversal is running; the
``DeferredPassQueue`` runs them afterwards, each over the whole current tree.

Passes are frozen dataclasses, so two requests with the same parameters
compare equal and the queue can drop duplicates.
"""

from abc import ABC, abstractmethod
from typing import ClassVar

from logshift.core.context import RewriteContext
from logshift.enums import PassKind
from logshift.java.tree import CompilationUnit


class DeferredPass(ABC):
  """
  Abstract contract for a rewrite pass run after the primary traversal.
  """

  kind: ClassVar[PassKind]

  @abstractmethod
  def transform(self, unit: CompilationUnit, context: RewriteContext) -> CompilationUnit:
    """
    Executes the pass on the given compilation unit.

    Args:
        unit: The current tree (output of the previous pass).
        context: Collaborator services for the run.

    Returns:
        The transformed compilation unit.
    """
    pass

  @abstractmethod
  def describe(self) -> str:
    """Human-readable summary used in traces and logs."""
    pass
