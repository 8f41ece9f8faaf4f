"""
Class Hierarchy Matcher.

Decides whether a class declaration directly extends a given type, by
comparing the resolved identity of its ``extends`` clause. Classes with no
``extends`` clause, or whose supertype could not be resolved, do not match.
"""

from dataclasses import dataclass
from typing import Optional

from logshift.core.interfaces import TypeResolver
from logshift.java.tree import ClassBody, ClassDeclaration, ExtendsClause


@dataclass(frozen=True)
class MatchContext:
  """
  Parts of a matched class handed to the rewrite components.

  Attributes:
      class_name: Simple name of the matched class.
      extends: The matched ``extends`` clause.
      body: The class body at match time.
  """

  class_name: str
  extends: ExtendsClause
  body: ClassBody


class ClassHierarchyMatcher:
  """Matches classes whose direct supertype is ``fully_qualified_name``."""

  def __init__(self, fully_qualified_name: str, resolver: Optional[TypeResolver] = None) -> None:
    self.fully_qualified_name = fully_qualified_name
    self.resolver = resolver

  def match(self, class_decl: ClassDeclaration) -> Optional[MatchContext]:
    """
    Tests one class declaration.

    Args:
        class_decl: Declaration whose ``extends`` clause has been attributed.

    Returns:
        Optional[MatchContext]: The match, or None.
    """
    extends = class_decl.extends
    if extends is None:
      return None
    if self.resolver is not None:
      identity = self.resolver.resolved_type(extends)
    else:
      identity = extends.type_tree.type
    if identity is None or identity.fully_qualified_name != self.fully_qualified_name:
      return None
    return MatchContext(class_decl.simple_name, extends, class_decl.body)
