"""
Classpath Type Resolver.

Attaches ``TypeIdentity`` values to type references and ``MethodType`` values
to invoked method names, using only the compilation unit itself and a
``Classpath`` of known types.

Simple names are resolved in Java's lookup order:

1. Types declared in the unit (including nested types).
2. Single-type imports.
3. Known types of the unit's own package.
4. Known types of on-demand (wildcard) imports.
5. ``java.lang``.

Anything the resolver cannot prove is left without an identity. Callers treat
a missing identity as "no match", so an incomplete classpath can only make
the migration do less, never do the wrong thing.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from logshift.core.interfaces import TypeResolver
from logshift.core.visitor import FlattenSentinel, TreeTransformer
from logshift.java.classpath import Classpath
from logshift.java.tree import (
  ClassDeclaration,
  CompilationUnit,
  Element,
  Import,
  MethodDeclaration,
  MethodName,
  MethodType,
  NameTree,
  PackageDeclaration,
  ParameterizedType,
  Statement,
  Token,
  TypeIdentity,
  walk,
)

logger = logging.getLogger(__name__)

_DECLARATOR_ENDINGS = frozenset({"=", ";", ",", ")", ":"})


@dataclass
class _ClassInfo:
  """Members of a class declared in the unit being resolved."""

  name: str
  extends: Optional[str] = None
  fields: Dict[str, str] = field(default_factory=dict)
  methods: Dict[str, Optional[str]] = field(default_factory=dict)


def _is_dot(element: Element) -> bool:
  return isinstance(element, Token) and element.is_(".")


def _looks_fully_qualified(parts: Sequence[str]) -> bool:
  """``com.acme.Widget``: lower-case package segments followed by a CamelCase name."""
  if len(parts) < 3:
    return False
  last = parts[-1]
  return all(p[:1].islower() for p in parts[:-1]) and last[:1].isupper() and not last.isupper()


def declared_variables(elements: Sequence[Element], resolve) -> Dict[str, str]:
  """
  Finds variable declarations in a flat element run.

  Recognises ``Type name`` followed by ``=``, ``;``, ``,``, ``)`` or ``:``
  (fields, locals, parameters, enhanced-for and pattern variables). Array
  declarations are skipped.

  Args:
      elements: Elements of a statement or a parameter list.
      resolve: Callable mapping a ``NameTree`` to a fully-qualified name or None.

  Returns:
      Dict[str, str]: Variable name to fully-qualified type.
  """
  found: Dict[str, str] = {}
  for index in range(len(elements) - 1):
    type_element = elements[index]
    if isinstance(type_element, ParameterizedType):
      type_name = type_element.clazz
    elif isinstance(type_element, NameTree):
      type_name = type_element
    else:
      continue
    if index and _is_dot(elements[index - 1]):
      continue
    variable = elements[index + 1]
    if not isinstance(variable, NameTree) or variable.is_qualified:
      continue
    following = elements[index + 2] if index + 2 < len(elements) else None
    if following is not None and not (isinstance(following, Token) and following.text in _DECLARATOR_ENDINGS):
      continue
    fqn = resolve(type_name)
    if fqn is not None:
      found[variable.name] = fqn
  return found


class _Scope:
  """Type-name lookup tables for one compilation unit."""

  def __init__(self, unit: CompilationUnit, classpath: Classpath) -> None:
    self.classpath = classpath
    self.package = unit.package_name
    self.declared: Dict[str, str] = {}
    self.declared_names: set = set()
    self.explicit: Dict[str, str] = {}
    self.wildcards: List[str] = []
    self.classes: Dict[str, _ClassInfo] = {}

    for imp in unit.imports:
      if imp.is_static:
        continue
      if imp.is_wildcard:
        self.wildcards.append(imp.qualified_name)
      else:
        self.explicit.setdefault(imp.name.simple_name, imp.qualified_name)

    declarations: List[Tuple[str, ClassDeclaration]] = []
    self._collect(unit.types, self.package, declarations)
    for fqn, decl in declarations:
      self.classes[fqn] = self._describe(fqn, decl)

  def _collect(self, members, owner: str, out: List[Tuple[str, ClassDeclaration]]) -> None:
    for member in members:
      if isinstance(member, ClassDeclaration):
        fqn = f"{owner}.{member.simple_name}" if owner else member.simple_name
        self.declared.setdefault(member.simple_name, fqn)
        self.declared_names.add(fqn)
        out.append((fqn, member))
        self._collect(member.body.members, fqn, out)

  def _describe(self, fqn: str, decl: ClassDeclaration) -> _ClassInfo:
    info = _ClassInfo(fqn)
    if decl.extends is not None:
      type_tree = decl.extends.type_tree
      info.extends = self.resolve(type_tree.clazz if isinstance(type_tree, ParameterizedType) else type_tree)
    for member in decl.body.members:
      if isinstance(member, Statement):
        info.fields.update(declared_variables(member.elements, self.resolve))
      elif isinstance(member, MethodDeclaration):
        info.methods[member.simple_name] = self._return_type(member)
    return info

  def _return_type(self, method: MethodDeclaration) -> Optional[str]:
    if method.modifiers:
      last = method.modifiers[-1]
      if isinstance(last, ParameterizedType):
        return self.resolve(last.clazz)
      if isinstance(last, NameTree):
        return self.resolve(last)
    return None

  def exists(self, fqn: str) -> bool:
    return fqn in self.declared_names or self.classpath.knows(fqn)

  def resolve_simple(self, name: str) -> Optional[str]:
    if name in self.declared:
      return self.declared[name]
    if name in self.explicit:
      return self.explicit[name]
    candidate = f"{self.package}.{name}" if self.package else name
    if self.classpath.knows(candidate):
      return candidate
    for package in self.wildcards:
      candidate = f"{package}.{name}"
      if self.classpath.knows(candidate):
        return candidate
    candidate = f"java.lang.{name}"
    if self.classpath.knows(candidate):
      return candidate
    return None

  def resolve_parts(self, parts: Sequence[str]) -> Optional[str]:
    if len(parts) == 1:
      return self.resolve_simple(parts[0])
    full = ".".join(parts)
    if self.exists(full):
      return full
    head = self.resolve_simple(parts[0])
    if head is not None:
      candidate = ".".join((head,) + tuple(parts[1:]))
      if self.exists(candidate):
        return candidate
    if _looks_fully_qualified(parts):
      return full
    return None

  def resolve(self, name: NameTree) -> Optional[str]:
    return self.resolve_parts(name.parts)

  # --- Member lookup ---

  def find_field(self, owner: str, name: str) -> Optional[str]:
    seen = set()
    current: Optional[str] = owner
    while current in self.classes and current not in seen:
      seen.add(current)
      info = self.classes[current]
      if name in info.fields:
        return info.fields[name]
      current = info.extends
    if current is None:
      return None
    return self.classpath.field_type(current, name)

  def find_method(self, owner: str, name: str) -> Optional[Tuple[str, Optional[str]]]:
    seen = set()
    current: Optional[str] = owner
    while current in self.classes and current not in seen:
      seen.add(current)
      info = self.classes[current]
      if name in info.methods:
        return current, info.methods[name]
      current = info.extends
    if current is None:
      return None
    return self.classpath.find_method(current, name)


class _AttributionTransformer(TreeTransformer):
  """Single pass that attaches identities bottom-up."""

  def __init__(self, scope: _Scope) -> None:
    self.scope = scope
    self.class_stack: List[str] = []
    self.variable_stack: List[Dict[str, str]] = []

  # --- Declarations ---

  def visit_PackageDeclaration(self, node: PackageDeclaration) -> bool:
    return False

  def visit_Import(self, node: Import) -> bool:
    return False

  def leave_Import(self, original: Import, updated: Import):
    if updated.is_static or updated.is_wildcard:
      return updated
    identity = TypeIdentity(updated.qualified_name)
    return Import(
      updated.keyword, updated.static, NameTree(updated.name.tokens, identity), updated.wildcard, updated.semicolon
    )

  def visit_ClassDeclaration(self, node: ClassDeclaration) -> bool:
    owner = self.class_stack[-1] if self.class_stack else self.scope.package
    self.class_stack.append(f"{owner}.{node.simple_name}" if owner else node.simple_name)
    return True

  def leave_ClassDeclaration(self, original: ClassDeclaration, updated: ClassDeclaration):
    self.class_stack.pop()
    return updated

  def visit_MethodDeclaration(self, node: MethodDeclaration) -> bool:
    variables = declared_variables(node.parameters, self.scope.resolve)
    if node.body is not None:
      for child in walk(node.body):
        if isinstance(child, Statement):
          variables.update(declared_variables(child.elements, self.scope.resolve))
    self.variable_stack.append(variables)
    return True

  def leave_MethodDeclaration(self, original: MethodDeclaration, updated: MethodDeclaration):
    self.variable_stack.pop()
    return updated

  # --- References ---

  def leave_NameTree(self, original: NameTree, updated: NameTree):
    if updated.type is not None:
      return updated
    fqn = self.scope.resolve(updated)
    if fqn is not None:
      return NameTree(updated.tokens, TypeIdentity(fqn))
    if updated.is_qualified and isinstance(self.parent, Statement):
      return self._split_type_prefix(updated)
    return updated

  def _split_type_prefix(self, name: NameTree):
    """Splits ``Layout.LINE_SEP`` into a typed ``Layout``, ``.`` and ``LINE_SEP``."""
    parts = name.parts
    for count in range(len(parts) - 1, 0, -1):
      fqn = self.scope.resolve_parts(parts[:count])
      if fqn is None:
        continue
      boundary = 2 * count - 1
      head = NameTree(name.tokens[:boundary], TypeIdentity(fqn))
      rest = NameTree(name.tokens[boundary + 1 :])
      return FlattenSentinel((head, name.tokens[boundary], rest))
    return name

  def leave_Statement(self, original: Statement, updated: Statement):
    elements = list(updated.elements)
    changed = False
    for index, element in enumerate(elements):
      if not isinstance(element, MethodName) or element.method_type is not None:
        continue
      method_type = self._attribute_call(elements, index)
      if method_type is not None:
        elements[index] = MethodName(element.token, method_type)
        changed = True
    if not changed:
      return updated
    return Statement(tuple(elements))

  # --- Method attribution ---

  def _attribute_call(self, elements: List[Element], index: int) -> Optional[MethodType]:
    name = elements[index].name
    if index >= 2 and _is_dot(elements[index - 1]):
      owner = self._expression_type(elements, index - 2)
    elif index and _is_dot(elements[index - 1]):
      owner = None
    else:
      owner = self.class_stack[-1] if self.class_stack else None
    if owner is None:
      logger.debug("Unresolved receiver for call to %s", name)
      return None

    found = self.scope.find_method(owner, name)
    if found is not None:
      declaring, returns = found
    elif owner in self.scope.classes:
      # Implicit or ``this`` calls to unknown inherited methods stay unresolved.
      return None
    else:
      declaring, returns = owner, None
    return MethodType(
      declaring_type=TypeIdentity(declaring),
      name=name,
      arity=self._arity(elements, index),
      return_type=TypeIdentity(returns) if returns else None,
    )

  def _expression_type(self, elements: List[Element], end: int) -> Optional[str]:
    """Static type of the receiver expression ending at ``elements[end]``."""
    element = elements[end]
    if isinstance(element, (NameTree, ParameterizedType)):
      if element.type is not None:
        return element.type.fully_qualified_name
      if not isinstance(element, NameTree) or element.is_qualified:
        return None
      if end >= 2 and _is_dot(elements[end - 1]):
        owner = self._expression_type(elements, end - 2)
        return self.scope.find_field(owner, element.name) if owner else None
      return self._variable_type(element.name)
    if not isinstance(element, Token):
      return None
    if element.is_("this"):
      return self.class_stack[-1] if self.class_stack else None
    if element.is_("super"):
      info = self.scope.classes.get(self.class_stack[-1]) if self.class_stack else None
      return info.extends if info else None
    if element.is_(")"):
      opening = self._matching_open(elements, end)
      if opening is not None and opening > 0:
        call = elements[opening - 1]
        if isinstance(call, MethodName) and call.method_type and call.method_type.return_type:
          return call.method_type.return_type.fully_qualified_name
    return None

  def _variable_type(self, name: str) -> Optional[str]:
    for variables in reversed(self.variable_stack):
      if name in variables:
        return variables[name]
    for owner in reversed(self.class_stack):
      fqn = self.scope.find_field(owner, name)
      if fqn is not None:
        return fqn
    return None

  @staticmethod
  def _matching_open(elements: List[Element], close: int) -> Optional[int]:
    depth = 0
    for position in range(close, -1, -1):
      element = elements[position]
      if isinstance(element, Token) and element.is_(")"):
        depth += 1
      elif isinstance(element, Token) and element.is_("("):
        depth -= 1
        if depth == 0:
          return position
    return None

  @staticmethod
  def _arity(elements: List[Element], index: int) -> int:
    """Counts the top-level arguments of the call whose name is at ``index``."""
    depth = 0
    commas = 0
    has_arguments = False
    for element in elements[index + 1 :]:
      if isinstance(element, Token) and element.is_("("):
        depth += 1
        if depth == 1:
          continue
      elif isinstance(element, Token) and element.is_(")"):
        depth -= 1
        if depth == 0:
          break
      if depth == 1 and isinstance(element, Token) and element.is_(","):
        commas += 1
        continue
      if depth >= 1:
        has_arguments = True
    return commas + 1 if has_arguments else 0


class ClasspathTypeResolver(TypeResolver):
  """
  Resolver collaborator backed by a ``Classpath`` of type stubs.

  Args:
      classpath: Known types. Defaults to the built-in log4j/logback stubs.
  """

  def __init__(self, classpath: Optional[Classpath] = None) -> None:
    self.classpath = classpath or Classpath()

  def resolve(self, unit: CompilationUnit) -> CompilationUnit:
    scope = _Scope(unit, self.classpath)
    return _AttributionTransformer(scope).transform(unit)
