"""
Recipe Base Class and Registry.

A recipe bundles one migration rule: its metadata, the applicability test
that gates it, and a factory for the primary visitor that performs the
in-place edits and schedules deferred passes.

Recipes register themselves by name with ``@register_recipe``; importing
``logshift.recipes`` loads every bundled recipe module.
"""

from abc import ABC, abstractmethod
from typing import ClassVar, Dict, Type

from logshift.core.context import RewriteContext
from logshift.core.gate import UsesType
from logshift.core.queue import DeferredPassQueue
from logshift.core.visitor import TreeTransformer


class Recipe(ABC):
  """
  Abstract migration rule.

  Attributes:
      name: Registry key, set by ``register_recipe``.
      display_name: Short title for listings.
      description: One-line summary of what the recipe does.
  """

  name: ClassVar[str] = ""
  display_name: ClassVar[str] = ""
  description: ClassVar[str] = ""

  @abstractmethod
  def applicable_test(self) -> UsesType:
    """Returns the gate deciding whether a unit is visited at all."""
    pass

  @abstractmethod
  def visitor(self, context: RewriteContext, queue: DeferredPassQueue) -> TreeTransformer:
    """
    Builds the primary visitor for one run.

    Args:
        context: Collaborator services for the run.
        queue: Queue the visitor schedules deferred passes on.

    Returns:
        TreeTransformer: A fresh visitor; it is used for a single traversal.
    """
    pass


_RECIPE_REGISTRY: Dict[str, Type[Recipe]] = {}


def register_recipe(name: str):
  def wrapper(cls):
    cls.name = name
    _RECIPE_REGISTRY[name] = cls
    return cls

  return wrapper
