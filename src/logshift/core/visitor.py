"""
Immutable Tree Transformer.

``TreeTransformer`` walks a Java CST depth-first and lets subclasses rewrite
nodes by kind, in the style of a LibCST ``CSTTransformer``:

- ``visit_<NodeClass>(node)`` runs before the children. Returning ``False``
  skips the subtree.
- ``leave_<NodeClass>(original, updated)`` runs after the children, receives
  the node rebuilt from the updated children, and returns its replacement.

Replacements may also be ``REMOVE`` (drop the node from a tuple field, or set
an optional field to ``None``) or a ``FlattenSentinel`` (splice several nodes
into a tuple field). Nodes whose children did not change are returned as-is,
so untouched subtrees are shared between the input and output trees.
"""

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from logshift.java.tree import JavaNode


class RemovalSentinel(Enum):
  REMOVE = "remove"


REMOVE = RemovalSentinel.REMOVE


@dataclass(frozen=True)
class FlattenSentinel:
  """Replacement standing for several sibling nodes."""

  nodes: Tuple[JavaNode, ...]


Replacement = Union[JavaNode, RemovalSentinel, FlattenSentinel]


class TreeTransformer:
  """Base class for tree-to-tree passes."""

  _stack: List[JavaNode]

  def transform(self, node: JavaNode) -> JavaNode:
    """
    Transforms ``node`` and its descendants.

    Args:
        node: Root of the tree to rewrite.

    Returns:
        JavaNode: The rewritten root (``node`` itself when nothing changed).

    Raises:
        ValueError: If the root is removed or flattened.
    """
    self._stack = []
    result = self._visit(node)
    if not isinstance(result, JavaNode):
      raise ValueError("The root node cannot be removed or flattened")
    return result

  @property
  def parent(self) -> Optional[JavaNode]:
    """The (original) parent of the node currently being visited."""
    return self._stack[-2] if len(self._stack) >= 2 else None

  def _visit(self, node: JavaNode) -> Replacement:
    kind = type(node).__name__
    self._stack.append(node)
    try:
      visitor = getattr(self, f"visit_{kind}", None)
      descend = visitor(node) if visitor is not None else True
      updated = self._visit_children(node) if descend is not False else node
      leaver = getattr(self, f"leave_{kind}", None)
      if leaver is None:
        return updated
      return leaver(node, updated)
    finally:
      self._stack.pop()

  def _visit_children(self, node: JavaNode) -> JavaNode:
    changes: Dict[str, Any] = {}
    for f in fields(node):
      value = getattr(node, f.name)
      if isinstance(value, JavaNode):
        result = self._visit(value)
        if isinstance(result, FlattenSentinel):
          raise ValueError(f"Cannot flatten into single-node field '{f.name}' of {type(node).__name__}")
        if result is REMOVE:
          changes[f.name] = None
        elif result is not value:
          changes[f.name] = result
      elif isinstance(value, tuple) and any(isinstance(item, JavaNode) for item in value):
        items: List[Any] = []
        changed = False
        for item in value:
          if not isinstance(item, JavaNode):
            items.append(item)
            continue
          result = self._visit(item)
          if result is REMOVE:
            changed = True
          elif isinstance(result, FlattenSentinel):
            changed = True
            items.extend(result.nodes)
          else:
            changed = changed or result is not item
            items.append(result)
        if changed:
          changes[f.name] = tuple(items)
    return replace(node, **changes) if changes else node
