"""
Change Type Pass.

Retargets every resolved reference to one type onto another: simple names
become the new simple name, qualified names the new fully-qualified name, and
method identities declared on or returning the old type follow along. The
old import is then dropped if unused and the new one added if needed.
"""

from dataclasses import dataclass
from typing import ClassVar

from logshift.core.context import RewriteContext
from logshift.core.passes.base import DeferredPass
from logshift.core.visitor import TreeTransformer
from logshift.enums import PassKind
from logshift.java.tree import CompilationUnit, Import, MethodName, MethodType, NameTree, PackageDeclaration, TypeIdentity


class _TypeChanger(TreeTransformer):
  def __init__(self, old: str, new: str) -> None:
    self.old = TypeIdentity(old)
    self.new = TypeIdentity(new)
    self.count = 0

  def visit_PackageDeclaration(self, node: PackageDeclaration) -> bool:
    return False

  def visit_Import(self, node: Import) -> bool:
    return False

  def leave_NameTree(self, original: NameTree, updated: NameTree) -> NameTree:
    if updated.type != self.old:
      return updated
    self.count += 1
    spelling = self.new.fully_qualified_name if updated.is_qualified else self.new.simple_name
    return NameTree.build(spelling, updated.prefix, self.new)

  def leave_MethodName(self, original: MethodName, updated: MethodName) -> MethodName:
    method_type = updated.method_type
    if method_type is None:
      return updated
    declaring = self.new if method_type.declaring_type == self.old else method_type.declaring_type
    returns = self.new if method_type.return_type == self.old else method_type.return_type
    if declaring is method_type.declaring_type and returns is method_type.return_type:
      return updated
    return MethodName(
      updated.token,
      MethodType(declaring_type=declaring, name=method_type.name, arity=method_type.arity, return_type=returns),
    )


@dataclass(frozen=True)
class ChangeType(DeferredPass):
  """
  Replaces references to ``old`` with references to ``new``.

  Attributes:
      old: Fully-qualified name of the type being replaced.
      new: Fully-qualified name of the replacement type.
  """

  kind: ClassVar[PassKind] = PassKind.CHANGE_TYPE

  old: str
  new: str

  def transform(self, unit: CompilationUnit, context: RewriteContext) -> CompilationUnit:
    changer = _TypeChanger(self.old, self.new)
    result = changer.transform(unit)
    if changer.count:
      context.tracer.log_mutation("TypeReference", self.old, f"{self.new} (x{changer.count})")

    removed = context.import_manager.maybe_remove_import(result, self.old)
    context.tracer.log_import("remove", self.old, removed is not result)
    added = context.import_manager.maybe_add_import(removed, self.new)
    context.tracer.log_import("add", self.new, added is not removed)
    return added

  def describe(self) -> str:
    return f"{self.kind.value} {self.old} -> {self.new}"
