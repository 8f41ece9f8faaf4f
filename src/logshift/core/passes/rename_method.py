"""
Change Method Name Pass.

Renames invocations of one method, selected by declaring type, name and
arity with a pattern such as ``org.apache.log4j.Layout format(..)``. Only
calls whose resolved ``MethodType`` matches are renamed; same-named methods
on other types, and calls that could not be attributed, are left alone.
"""

import re
from dataclasses import dataclass, field
from typing import ClassVar, Optional

from logshift.core.context import RewriteContext
from logshift.core.passes.base import DeferredPass
from logshift.core.visitor import TreeTransformer
from logshift.enums import PassKind
from logshift.java.tree import CompilationUnit, MethodName, MethodType

_PATTERN = re.compile(r"^\s*(?P<owner>[\w$.]+)\s+(?P<name>[\w$]+)\s*\((?P<args>[^()]*)\)\s*$")


@dataclass(frozen=True)
class MethodMatcher:
  """
  Parsed method pattern.

  ``(..)`` matches any argument list; otherwise the comma-separated argument
  types only fix the arity (``()`` matches no-arg calls).
  """

  declaring_type: str
  name: str
  arity: Optional[int] = None

  @classmethod
  def parse(cls, pattern: str) -> "MethodMatcher":
    """
    Parses ``"<declaring fqn> <name>(<args>)"``.

    Raises:
        ValueError: If the pattern is malformed.
    """
    mo = _PATTERN.match(pattern)
    if mo is None:
      raise ValueError(f"Invalid method pattern: {pattern!r}")
    args = mo.group("args").strip()
    if args == "..":
      arity = None
    elif not args:
      arity = 0
    else:
      arity = args.count(",") + 1
    return cls(mo.group("owner"), mo.group("name"), arity)

  def matches(self, method_type: Optional[MethodType]) -> bool:
    if method_type is None:
      return False
    if method_type.declaring_type.fully_qualified_name != self.declaring_type or method_type.name != self.name:
      return False
    return self.arity is None or method_type.arity == self.arity


class _MethodRenamer(TreeTransformer):
  def __init__(self, matcher: MethodMatcher, new_name: str) -> None:
    self.matcher = matcher
    self.new_name = new_name
    self.count = 0

  def leave_MethodName(self, original: MethodName, updated: MethodName) -> MethodName:
    if not self.matcher.matches(updated.method_type):
      return updated
    self.count += 1
    return updated.with_name(self.new_name)


@dataclass(frozen=True)
class ChangeMethodName(DeferredPass):
  """
  Renames calls matching ``pattern`` to ``new_name``.

  Raises:
      ValueError: On construction, if ``pattern`` is malformed.
  """

  kind: ClassVar[PassKind] = PassKind.RENAME_METHOD

  pattern: str
  new_name: str
  matcher: MethodMatcher = field(init=False, compare=False, repr=False)

  def __post_init__(self) -> None:
    object.__setattr__(self, "matcher", MethodMatcher.parse(self.pattern))

  def transform(self, unit: CompilationUnit, context: RewriteContext) -> CompilationUnit:
    renamer = _MethodRenamer(self.matcher, self.new_name)
    result = renamer.transform(unit)
    if renamer.count:
      context.tracer.log_mutation("MethodInvocation", self.pattern, f"{self.new_name} (x{renamer.count})")
    return result

  def describe(self) -> str:
    return f"{self.kind.value} {self.pattern} -> {self.new_name}"
