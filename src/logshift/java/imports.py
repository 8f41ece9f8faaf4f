"""
Java Import Manager.

Adds and removes single-type imports while keeping the surrounding layout
intact:

- New imports are inserted in sorted position among the non-static imports
  and take over their neighbour's spacing.
- Removed imports hand their blank-line separation to the import that follows
  them, so import groups stay visually separated.
- Both operations are idempotent and reference-checked: an import is only
  added for a type referenced by its simple name, and only removed when no
  simple-name reference remains.
"""

import logging
from typing import Iterator, List

from logshift.core.interfaces import ImportManager
from logshift.java.tree import (
  CompilationUnit,
  Import,
  NameTree,
  TypeIdentity,
  leading_whitespace,
  walk,
)

logger = logging.getLogger(__name__)


def _body_names(unit: CompilationUnit) -> Iterator[NameTree]:
  """Yields the names outside the package and import declarations."""
  for member in unit.types:
    for node in walk(member):
      if isinstance(node, NameTree):
        yield node


def _has_comment(prefix: str) -> bool:
  return "//" in prefix or "/*" in prefix


def _newline(unit: CompilationUnit) -> str:
  return "\r\n" if "\r\n" in unit.to_text() else "\n"


def is_referenced(unit: CompilationUnit, fully_qualified_name: str) -> bool:
  """
  Checks whether a type is still referenced by its simple name.

  Unresolved names spelled like the type count as references, so an import is
  never dropped on the strength of a failed resolution.
  """
  simple = TypeIdentity(fully_qualified_name).simple_name
  for name in _body_names(unit):
    if name.is_qualified:
      continue
    if name.type is not None and name.type.fully_qualified_name == fully_qualified_name:
      return True
    if name.type is None and name.name == simple:
      return True
  return False


class JavaImportManager(ImportManager):
  """Import bookkeeping collaborator for Java compilation units."""

  def maybe_add_import(self, unit: CompilationUnit, fully_qualified_name: str) -> CompilationUnit:
    """
    Adds ``import <fqn>;`` when the unit uses the type by its simple name.

    Nothing is added for ``java.lang`` types, types of the unit's own package,
    types already covered by an explicit or on-demand import, or when another
    import already claims the simple name.
    """
    identity = TypeIdentity(fully_qualified_name)
    if identity.package_name in ("java.lang", unit.package_name):
      return unit

    for imp in unit.imports:
      if imp.is_static:
        continue
      if imp.is_wildcard and imp.qualified_name == identity.package_name:
        return unit
      if not imp.is_wildcard and imp.name.simple_name == identity.simple_name:
        if imp.qualified_name != fully_qualified_name:
          logger.debug("Not importing %s: simple name taken by %s", fully_qualified_name, imp.qualified_name)
        return unit

    referenced = any(
      not name.is_qualified and name.type == identity for name in _body_names(unit)
    )
    if not referenced:
      return unit

    newline = _newline(unit)
    imports: List[Import] = list(unit.imports)
    types = list(unit.types)

    if imports:
      regular = [i for i, imp in enumerate(imports) if not imp.is_static]
      position = next((i for i in regular if imports[i].qualified_name > fully_qualified_name), None)
      if position is not None:
        imports.insert(position, Import.build(fully_qualified_name, imports[position].prefix))
        imports[position + 1] = imports[position + 1].with_prefix(newline)
      else:
        position = regular[-1] + 1 if regular else len(imports)
        imports.insert(position, Import.build(fully_qualified_name, newline))
    elif unit.package is not None:
      imports.append(Import.build(fully_qualified_name, newline * 2))
    elif types:
      imports.append(Import.build(fully_qualified_name, types[0].prefix))
      types[0] = types[0].with_prefix(newline * 2)
    else:
      imports.append(Import.build(fully_qualified_name, unit.eof.prefix))
      return CompilationUnit(unit.package, tuple(imports), tuple(types), unit.eof.with_prefix(newline))

    logger.debug("Added import %s", fully_qualified_name)
    return CompilationUnit(unit.package, tuple(imports), tuple(types), unit.eof)

  def maybe_remove_import(self, unit: CompilationUnit, fully_qualified_name: str) -> CompilationUnit:
    """
    Removes ``import <fqn>;`` when nothing refers to the type by simple name.

    On-demand and static imports are never removed.
    """
    position = next(
      (
        i
        for i, imp in enumerate(unit.imports)
        if not imp.is_static and not imp.is_wildcard and imp.qualified_name == fully_qualified_name
      ),
      None,
    )
    if position is None or is_referenced(unit, fully_qualified_name):
      return unit

    removed = unit.imports[position]
    spacing = leading_whitespace(removed.prefix)
    imports = list(unit.imports[:position] + unit.imports[position + 1 :])
    types = list(unit.types)

    if position < len(imports):
      following = imports[position]
      if not _has_comment(following.prefix) and spacing.count("\n") > following.prefix.count("\n"):
        imports[position] = following.with_prefix(spacing)
    elif not imports and unit.package is None and types:
      first = types[0]
      types[0] = first.with_prefix(spacing + first.prefix[len(leading_whitespace(first.prefix)) :])

    logger.debug("Removed import %s", fully_qualified_name)
    return CompilationUnit(unit.package, tuple(imports), tuple(types), unit.eof)
