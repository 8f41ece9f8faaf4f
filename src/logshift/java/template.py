"""
Type Template Synthesis.

Turns a type snippet such as ``AppenderBase<ILoggingEvent>`` into a
type-attributed tree fragment. Every name in the snippet must be bound to one
of the supplied fully-qualified names, and every supplied name must be used;
anything else is a programming error in the calling rule and raises
``SynthesisError`` before the tree is touched.
"""

from typing import Dict, List, Optional, Sequence

from logshift.core.interfaces import TemplateSynthesizer
from logshift.core.visitor import TreeTransformer
from logshift.errors import ParseError, SynthesisError
from logshift.java.parser import JavaParser
from logshift.java.tree import NameTree, TypeIdentity, TypeTree


class _Binder(TreeTransformer):
  def __init__(self, bindings: Dict[str, str]) -> None:
    self.bindings = bindings
    self.used: List[str] = []
    self.unbound: List[str] = []

  def leave_NameTree(self, original: NameTree, updated: NameTree) -> NameTree:
    fqn: Optional[str] = None
    if updated.is_qualified:
      if updated.name in self.bindings.values():
        fqn = updated.name
    else:
      fqn = self.bindings.get(updated.simple_name)
    if fqn is None:
      self.unbound.append(updated.name)
      return updated
    self.used.append(fqn)
    return NameTree(updated.tokens, TypeIdentity(fqn))


class TypeTemplateSynthesizer(TemplateSynthesizer):
  """Synthesizer collaborator backed by ``JavaParser.parse_type``."""

  def __init__(self, parser: Optional[JavaParser] = None) -> None:
    self.parser = parser or JavaParser()

  def synthesize(self, template: str, bound_types: Sequence[str]) -> TypeTree:
    """
    Parses ``template`` and binds its names.

    Args:
        template: Type snippet, e.g. ``AppenderBase<ILoggingEvent>``.
        bound_types: Fully-qualified names, matched to the snippet by simple name.

    Returns:
        TypeTree: The fragment, with no leading trivia.

    Raises:
        SynthesisError: If the snippet does not parse, a name is unbound, a
            binding is unused, or two bindings share a simple name.
    """
    bindings: Dict[str, str] = {}
    for fqn in bound_types:
      simple = fqn.rsplit(".", 1)[-1]
      if simple in bindings and bindings[simple] != fqn:
        raise SynthesisError(f"Ambiguous bindings for '{simple}': {bindings[simple]}, {fqn}")
      bindings[simple] = fqn

    try:
      fragment = self.parser.parse_type(template.strip())
    except ParseError as e:
      raise SynthesisError(f"Invalid type template {template!r}: {e}") from e

    binder = _Binder(bindings)
    fragment = binder.transform(fragment)
    if binder.unbound:
      raise SynthesisError(f"Unbound names in template {template!r}: {', '.join(binder.unbound)}")
    unused = [fqn for fqn in bindings.values() if fqn not in binder.used]
    if unused:
      raise SynthesisError(f"Unused bindings for template {template!r}: {', '.join(unused)}")
    return fragment.with_prefix("")
