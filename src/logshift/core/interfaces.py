"""
Collaborator Interfaces.

The migration core consumes parsing, type attribution, template synthesis,
import bookkeeping and printing as injected services. This module defines the
abstract contracts those services fulfil; ``logshift.java`` provides the
reference implementations.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from logshift.java.tree import CompilationUnit, JavaNode, TypeIdentity, TypeTree


class Parser(ABC):
  """Turns source text into a compilation unit."""

  @abstractmethod
  def parse(self, text: str) -> CompilationUnit:
    """
    Parses one source file.

    Args:
        text: Raw source code.

    Returns:
        CompilationUnit: The lossless syntax tree.

    Raises:
        ParseError: If the text is not a well-formed compilation unit.
    """
    pass


class TypeResolver(ABC):
  """Attaches type identities to references in a compilation unit."""

  @abstractmethod
  def resolve(self, unit: CompilationUnit) -> CompilationUnit:
    """Returns ``unit`` with identities attached to every reference it can resolve."""
    pass

  def resolved_type(self, node: JavaNode) -> Optional[TypeIdentity]:
    """
    Returns the identity attached to a type reference node.

    Args:
        node: A type reference (name, parameterized type or extends clause).

    Returns:
        Optional[TypeIdentity]: The identity, or None when the node carries none.
    """
    identity = getattr(node, "type", None)
    if identity is None:
      type_tree = getattr(node, "type_tree", None)
      identity = getattr(type_tree, "type", None)
    return identity if isinstance(identity, TypeIdentity) else None


class TemplateSynthesizer(ABC):
  """Builds type-attributed tree fragments from literal snippets."""

  @abstractmethod
  def synthesize(self, template: str, bound_types: Sequence[str]) -> TypeTree:
    """
    Parses ``template`` and binds its names to ``bound_types``.

    Args:
        template: Snippet such as ``AppenderBase<ILoggingEvent>``.
        bound_types: Fully-qualified names the snippet's simple names refer to.

    Returns:
        TypeTree: The fragment with identities attached.

    Raises:
        SynthesisError: If the snippet cannot be parsed or bound.
    """
    pass


class ImportManager(ABC):
  """Decides whether imports are added or removed."""

  @abstractmethod
  def maybe_add_import(self, unit: CompilationUnit, fully_qualified_name: str) -> CompilationUnit:
    """Adds an import if the type is referenced and not yet imported. Idempotent."""
    pass

  @abstractmethod
  def maybe_remove_import(self, unit: CompilationUnit, fully_qualified_name: str) -> CompilationUnit:
    """Removes the import of a type if nothing in the unit still references it."""
    pass


class Printer(ABC):
  """Serializes a compilation unit back to source text."""

  @abstractmethod
  def print(self, unit: CompilationUnit) -> str:
    pass
