"""
Method Body Policy.

Per-member decision table applied to the body of every class whose supertype
resolves, whether or not it extends the legacy appender base:

| method             | condition                   | result           |
|--------------------|-----------------------------|------------------|
| ``requiresLayout`` | any                         | removed          |
| ``close``          | body with no statements     | removed          |
| ``close``          | body with statements        | renamed ``stop`` |
| ``close``          | no body                     | renamed ``stop`` |
| anything else      |                             | unchanged        |

Renames touch the name token only; annotations, modifiers and comments are
kept. A removed method takes its leading comments with it.
"""

from dataclasses import replace
from typing import Dict, List, Mapping, Optional, Sequence

from logshift.core.tracer import TraceLogger
from logshift.java.tree import ClassBody, MethodDeclaration, leading_whitespace


class MethodBodyPolicy:
  """
  Removes and renames the direct methods of a class body.

  Args:
      remove: Method names removed unconditionally.
      rename: Old name to new name for methods that survive.
      remove_if_empty: Method names removed when their body has no statements.
      tracer: Event log for the run.
  """

  def __init__(
    self,
    remove: Sequence[str] = ("requiresLayout",),
    rename: Optional[Mapping[str, str]] = None,
    remove_if_empty: Sequence[str] = ("close",),
    tracer: Optional[TraceLogger] = None,
  ) -> None:
    self.remove = frozenset(remove)
    self.rename: Dict[str, str] = dict(rename) if rename is not None else {"close": "stop"}
    self.remove_if_empty = frozenset(remove_if_empty)
    self.tracer = tracer or TraceLogger()

  def decide(self, method: MethodDeclaration) -> Optional[MethodDeclaration]:
    """Returns the replacement for one method, or None to remove it."""
    name = method.simple_name
    if name in self.remove:
      return None
    if name in self.remove_if_empty and method.body is not None and not method.body.statements:
      return None
    if name in self.rename:
      return method.with_name(self.rename[name])
    return method

  def apply(self, body: ClassBody) -> ClassBody:
    """
    Applies the decision table to every direct member of ``body``.

    Nested types, fields and initializers are kept as they are. When leading
    members are removed, the first survivor takes over the indentation of the
    first removed one.
    """
    members: List = []
    inherited: Optional[str] = None
    changed = False
    for member in body.members:
      if not isinstance(member, MethodDeclaration):
        replacement = member
      else:
        replacement = self.decide(member)
        if replacement is None:
          changed = True
          self.tracer.log_mutation("MethodDeclaration", member.simple_name, "<removed>")
          if not members and inherited is None:
            inherited = leading_whitespace(member.prefix)
          continue
        if replacement is not member:
          changed = True
          self.tracer.log_mutation("MethodDeclaration", member.simple_name, replacement.simple_name)

      if not members and inherited is not None:
        own = replacement.prefix
        replacement = replacement.with_prefix(inherited + own[len(leading_whitespace(own)) :])
      members.append(replacement)

    if not changed:
      return body
    return replace(body, members=tuple(members))
