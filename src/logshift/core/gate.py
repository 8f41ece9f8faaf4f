"""
Type Usage Gate.

Cheap pre-check run before a rule's traversal: does the unit mention the
legacy type anywhere? Units that do not are returned untouched, so most files
in a code base never pay for the full rewrite.
"""

from logshift.java.tree import CompilationUnit, Import, MethodName, NameTree, walk


class UsesType:
  """
  Applicability test matching units that reference ``fully_qualified_name``.

  A unit qualifies when any import, type reference or attributed method
  invocation carries the type's identity. Unresolved references never match.
  """

  def __init__(self, fully_qualified_name: str) -> None:
    self.fully_qualified_name = fully_qualified_name

  def applies(self, unit: CompilationUnit) -> bool:
    for node in walk(unit):
      if isinstance(node, Import):
        if not node.is_static and not node.is_wildcard and node.qualified_name == self.fully_qualified_name:
          return True
      elif isinstance(node, NameTree):
        if node.type is not None and node.type.fully_qualified_name == self.fully_qualified_name:
          return True
      elif isinstance(node, MethodName):
        method_type = node.method_type
        if method_type is not None and method_type.declaring_type.fully_qualified_name == self.fully_qualified_name:
          return True
    return False

  def __repr__(self) -> str:
    return f"UsesType({self.fully_qualified_name!r})"
