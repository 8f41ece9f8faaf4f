"""
Import Passes.

Thin deferred wrappers over the ``ImportManager`` so import fixups can be
queued next to the structural passes and run after them, against the final
set of references.
"""

from dataclasses import dataclass
from typing import ClassVar

from logshift.core.context import RewriteContext
from logshift.core.passes.base import DeferredPass
from logshift.enums import PassKind
from logshift.java.tree import CompilationUnit


@dataclass(frozen=True)
class AddImport(DeferredPass):
  """Adds an import for ``type_name`` if the unit references it."""

  kind: ClassVar[PassKind] = PassKind.ADD_IMPORT

  type_name: str

  def transform(self, unit: CompilationUnit, context: RewriteContext) -> CompilationUnit:
    result = context.import_manager.maybe_add_import(unit, self.type_name)
    context.tracer.log_import("add", self.type_name, result is not unit)
    return result

  def describe(self) -> str:
    return f"{self.kind.value} {self.type_name}"


@dataclass(frozen=True)
class RemoveImport(DeferredPass):
  """Removes the import of ``type_name`` if nothing references it any more."""

  kind: ClassVar[PassKind] = PassKind.REMOVE_IMPORT

  type_name: str

  def transform(self, unit: CompilationUnit, context: RewriteContext) -> CompilationUnit:
    result = context.import_manager.maybe_remove_import(unit, self.type_name)
    context.tracer.log_import("remove", self.type_name, result is not unit)
    return result

  def describe(self) -> str:
    return f"{self.kind.value} {self.type_name}"
