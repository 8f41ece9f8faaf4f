"""
Java Parser.

Parses Java source with tree-sitter and converts the concrete parse into the
CST object model defined in ``tree.py``.

tree-sitter reports byte ranges but keeps no trivia, so the conversion walks
the leaves in source order and gives each token the bytes between the end of
the previous token and its own start (whitespace and comments) as its prefix.
An unmodified tree therefore prints back byte-for-byte.

Declarations are converted structurally (package, imports, type declarations,
methods, class bodies, blocks). Inside statements only names, generic type
references, invoked method names, nested blocks and local types are kept as
nodes; every other leaf becomes a plain token.
"""

from typing import List, Optional, Tuple

import tree_sitter
import tree_sitter_java

from logshift.core.interfaces import Parser
from logshift.errors import ParseError
from logshift.java.tree import (
  Block,
  ClassBody,
  ClassDeclaration,
  CompilationUnit,
  Element,
  ExtendsClause,
  Import,
  Member,
  MethodDeclaration,
  MethodName,
  NameTree,
  PackageDeclaration,
  ParameterizedType,
  Statement,
  Token,
  TokenKind,
  TypeTree,
)

_JAVA_LANGUAGE = tree_sitter.Language(tree_sitter_java.language())

_COMMENTS = frozenset({"line_comment", "block_comment", "comment"})
_NAME_NODES = frozenset({"identifier", "type_identifier", "scoped_identifier", "scoped_type_identifier", "field_access"})
_NAME_LEAVES = frozenset({"identifier", "type_identifier", "."})
_TYPE_DECLARATIONS = frozenset(
  {
    "class_declaration",
    "interface_declaration",
    "enum_declaration",
    "record_declaration",
    "annotation_type_declaration",
  }
)
_METHOD_DECLARATIONS = frozenset(
  {"method_declaration", "constructor_declaration", "annotation_type_element_declaration"}
)
_HEADER_NODES = frozenset({"type_parameters", "formal_parameters"})
_NUMBER_LITERALS = frozenset(
  {
    "decimal_integer_literal",
    "hex_integer_literal",
    "octal_integer_literal",
    "binary_integer_literal",
    "decimal_floating_point_literal",
    "hex_floating_point_literal",
  }
)
# Literals tree-sitter splits into fragments; each is kept as one token.
_ATOMIC_NODES = frozenset({"string_literal", "character_literal"})

# ``parse_type`` parses its snippet as the type of a field in this holder class.
_TYPE_HOLDER = ("class TypeHolder { ", " value; }")


def _children(node: tree_sitter.Node) -> List[tree_sitter.Node]:
  return [child for child in node.children if child.type not in _COMMENTS]


def _same(node: tree_sitter.Node, other: Optional[tree_sitter.Node]) -> bool:
  """Compares against an optional field node; absent fields match nothing."""
  return other is not None and node == other


def _is_name(node: tree_sitter.Node) -> bool:
  """True if every leaf under ``node`` is an identifier or a ``.``."""
  stack = [node]
  while stack:
    current = stack.pop()
    if current.type in _COMMENTS:
      continue
    if current.child_count == 0:
      if current.type not in _NAME_LEAVES:
        return False
    elif current.type not in _NAME_NODES:
      return False
    else:
      stack.extend(current.children)
  return True


def _is_type_tree(node: tree_sitter.Node) -> bool:
  if node.type in ("type_identifier", "scoped_type_identifier"):
    return _is_name(node)
  if node.type == "generic_type":
    return _is_name(_children(node)[0])
  return False


def _is_braced(children: List[tree_sitter.Node]) -> bool:
  return len(children) >= 2 and children[0].type == "{" and children[-1].type == "}"


def _token_kind(node: tree_sitter.Node, text: str) -> TokenKind:
  if node.type in ("identifier", "type_identifier"):
    return TokenKind.IDENTIFIER
  if node.type == "string_literal":
    return TokenKind.TEXT_BLOCK if text.startswith('"""') else TokenKind.STRING
  if node.type == "character_literal":
    return TokenKind.CHAR
  if node.type in _NUMBER_LITERALS:
    return TokenKind.NUMBER
  if text.lstrip("@")[:1].isalpha():
    return TokenKind.KEYWORD
  return TokenKind.OPERATOR


def _first_error(node: tree_sitter.Node) -> tree_sitter.Node:
  """Returns the first ERROR or MISSING node below ``node``, in source order."""
  stack = [node]
  while stack:
    current = stack.pop()
    if current.type == "ERROR" or current.is_missing:
      return current
    stack.extend(reversed([c for c in current.children if c.has_error or c.is_missing]))
  return node


class _TreeBuilder:
  """
  Converts one tree-sitter parse into CST nodes.

  Tokens must be created in source order: ``offset`` is the end of the last
  token handed out, and the gap up to the next token becomes its prefix.
  """

  def __init__(self, source: bytes, offset: int = 0) -> None:
    self.source = source
    self.offset = offset

  def _slice(self, start: int, end: int) -> str:
    return self.source[start:end].decode("utf-8")

  def token(self, node: tree_sitter.Node) -> Token:
    leading = self._slice(self.offset, node.start_byte)
    text = self._slice(node.start_byte, node.end_byte)
    self.offset = node.end_byte
    row, column = node.start_point
    return Token(_token_kind(node, text), text, leading, row + 1, column + 1)

  def eof(self) -> Token:
    leading = self._slice(self.offset, len(self.source))
    self.offset = len(self.source)
    return Token(TokenKind.EOF, "", leading)

  def name_tree(self, node: tree_sitter.Node) -> NameTree:
    leaves: List[tree_sitter.Node] = []
    stack = [node]
    while stack:
      current = stack.pop()
      if current.type in _COMMENTS:
        continue
      if current.child_count == 0:
        leaves.append(current)
      else:
        stack.extend(reversed(current.children))
    return NameTree(tuple(self.token(leaf) for leaf in leaves))

  def type_tree(self, node: tree_sitter.Node) -> TypeTree:
    if node.type != "generic_type":
      return self.name_tree(node)
    children = _children(node)
    clazz = self.name_tree(children[0])
    arguments: List[Element] = []
    for child in children[1:]:
      arguments.extend(self.elements(child))
    return ParameterizedType(clazz, tuple(arguments))

  # --- Compilation unit ---

  def compilation_unit(self, root: tree_sitter.Node) -> CompilationUnit:
    package: Optional[PackageDeclaration] = None
    imports: List[Import] = []
    types: List[Member] = []
    for child in _children(root):
      if child.type == "package_declaration" and package is None and not imports and not types:
        package = self.package(child)
      elif child.type == "import_declaration" and not types:
        imports.append(self.import_(child))
      else:
        types.append(self.member(child))
    return CompilationUnit(package, tuple(imports), tuple(types), self.eof())

  def package(self, node: tree_sitter.Node) -> PackageDeclaration:
    modifiers: List[Element] = []
    keyword = name = semicolon = None
    for child in _children(node):
      if child.type == "package":
        keyword = self.token(child)
      elif child.type == ";":
        semicolon = self.token(child)
      elif keyword is None:
        modifiers.extend(self.elements(child))
      else:
        name = self.name_tree(child)
    return PackageDeclaration(tuple(modifiers), keyword, name, semicolon)

  def import_(self, node: tree_sitter.Node) -> Import:
    keyword = static = name = semicolon = None
    wildcard: List[Token] = []
    for child in _children(node):
      if child.type == "import":
        keyword = self.token(child)
      elif child.type == "static":
        static = self.token(child)
      elif child.type in (".", "asterisk"):
        wildcard.append(self.token(child))
      elif child.type == ";":
        semicolon = self.token(child)
      else:
        name = self.name_tree(child)
    return Import(keyword, static, name, tuple(wildcard), semicolon)

  # --- Declarations ---

  def member(self, node: tree_sitter.Node) -> Member:
    if node.type in _TYPE_DECLARATIONS:
      return self.type_declaration(node)
    if node.type in _METHOD_DECLARATIONS:
      return self.method(node)
    return Statement(tuple(self.elements(node)))

  def type_declaration(self, node: tree_sitter.Node) -> ClassDeclaration:
    name_node = node.child_by_field_name("name")
    body_node = node.child_by_field_name("body")
    modifiers: List[Element] = []
    header: List[Element] = []
    tail: List[Element] = []
    kind = name = body = None
    extends: Optional[ExtendsClause] = None
    for child in _children(node):
      if kind is None:
        if child.type == "modifiers":
          modifiers.extend(self.elements(child))
        else:
          kind = self.token(child)
      elif _same(child, name_node):
        name = self.token(child)
      elif _same(child, body_node):
        body = self.class_body(child)
      elif child.type == "superclass" and self._is_extends(child):
        keyword, type_node = _children(child)
        extends = ExtendsClause(self.token(keyword), self.type_tree(type_node))
      elif extends is None and not tail and child.type in _HEADER_NODES:
        header.extend(self.elements(child))
      else:
        tail.extend(self.elements(child))
    return ClassDeclaration(tuple(modifiers), kind, name, tuple(header), extends, tuple(tail), body)

  @staticmethod
  def _is_extends(node: tree_sitter.Node) -> bool:
    children = _children(node)
    return len(children) == 2 and _is_type_tree(children[1])

  def class_body(self, node: tree_sitter.Node) -> ClassBody:
    children = _children(node)
    open_brace = self.token(children[0])
    members: List[Member] = []
    if node.type == "enum_body":
      self._enum_members(children[1:-1], members)
    else:
      members.extend(self.member(child) for child in children[1:-1])
    return ClassBody(open_brace, tuple(members), self.token(children[-1]))

  def _enum_members(self, children: List[tree_sitter.Node], members: List[Member]) -> None:
    """Constants (through the ``;``) form the first member, then the body declarations follow."""
    constants: List[Element] = []
    for child in children:
      if child.type != "enum_body_declarations":
        constants.extend(self.elements(child))
        continue
      declarations = _children(child)
      constants.append(self.token(declarations[0]))
      members.append(Statement(tuple(constants)))
      constants = []
      members.extend(self.member(d) for d in declarations[1:])
    if constants:
      members.append(Statement(tuple(constants)))

  def method(self, node: tree_sitter.Node) -> MethodDeclaration:
    name_node = node.child_by_field_name("name")
    parameters_node = node.child_by_field_name("parameters")
    body_node = node.child_by_field_name("body")
    children = _children(node)
    modifiers: List[Element] = []
    parameters: List[Element] = []
    tail: List[Element] = []
    name = body = terminator = None
    for index, child in enumerate(children):
      if name is None:
        if _same(child, name_node):
          name = self.token(child)
        else:
          modifiers.extend(self.elements(child))
      elif _same(child, body_node):
        body = self.block(child)
      elif _same(child, parameters_node) or (parameters_node is None and not tail and child.type in ("(", ")")):
        # Annotation elements have a bare ``()`` instead of formal parameters.
        parameters.extend(self.elements(child))
      elif child.type == ";" and index == len(children) - 1:
        terminator = self.token(child)
      else:
        tail.extend(self.elements(child))
    return MethodDeclaration(tuple(modifiers), name, tuple(parameters), tuple(tail), body, terminator)

  # --- Statements and elements ---

  def block(self, node: tree_sitter.Node) -> Block:
    """
    Converts any brace-delimited node (blocks, anonymous class bodies, switch
    blocks, array initializers). Each named child starts a statement; anonymous
    tokens such as separators join the statement before them.
    """
    children = _children(node)
    open_brace = self.token(children[0])
    statements: List[List[Element]] = []
    for child in children[1:-1]:
      elements = self.elements(child)
      if child.is_named or not statements:
        statements.append(elements)
      else:
        statements[-1].extend(elements)
    close_brace = self.token(children[-1])
    return Block(open_brace, tuple(Statement(tuple(s)) for s in statements), close_brace)

  def elements(self, node: tree_sitter.Node) -> List[Element]:
    if node.type in _COMMENTS:
      return []
    if node.type in _NAME_NODES and _is_name(node):
      return [self.name_tree(node)]
    if node.child_count == 0 or node.type in _ATOMIC_NODES:
      return [self.token(node)]
    if node.type == "generic_type" and _is_type_tree(node):
      return [self.type_tree(node)]
    if node.type in _TYPE_DECLARATIONS:
      return [self.type_declaration(node)]
    if node.type == "method_invocation":
      return self._invocation(node)

    children = _children(node)
    if _is_braced(children):
      return [self.block(node)]
    elements: List[Element] = []
    for child in children:
      elements.extend(self.elements(child))
    return elements

  def _invocation(self, node: tree_sitter.Node) -> List[Element]:
    name_node = node.child_by_field_name("name")
    elements: List[Element] = []
    for child in _children(node):
      if _same(child, name_node):
        elements.append(MethodName(self.token(child)))
      else:
        elements.extend(self.elements(child))
    return elements


class JavaParser(Parser):
  """
  Parser collaborator for Java sources, backed by tree-sitter-java.

  Each call builds its own ``tree_sitter.Parser``, so one instance can be
  shared between threads.
  """

  def _parse(self, source: bytes, column_offset: int = 0) -> tree_sitter.Tree:
    tree = tree_sitter.Parser(_JAVA_LANGUAGE).parse(source)
    if tree.root_node.has_error:
      node = _first_error(tree.root_node)
      row, column = node.start_point
      if node.is_missing:
        message = f"Expected '{node.type}'"
      else:
        found = source[node.start_byte : node.end_byte].decode("utf-8").strip().splitlines()
        message = f"Unexpected '{found[0][:40]}'" if found else "Syntax error"
      raise ParseError(message, row + 1, column + 1 - (column_offset if row == 0 else 0))
    return tree

  def parse(self, text: str) -> CompilationUnit:
    """
    Parses a Java compilation unit.

    Args:
        text: Java source code.

    Returns:
        CompilationUnit: Lossless syntax tree of the file.

    Raises:
        ParseError: If tree-sitter reports a syntax error or a missing token.
    """
    source = text.encode("utf-8")
    tree = self._parse(source)
    return _TreeBuilder(source).compilation_unit(tree.root_node)

  def parse_type(self, text: str) -> TypeTree:
    """
    Parses a standalone class type such as ``AppenderBase<ILoggingEvent>``.

    Raises:
        ParseError: If the text is not exactly one class type reference.
    """
    head, foot = _TYPE_HOLDER
    start = len(head.encode("utf-8"))
    end = start + len(text.encode("utf-8"))
    source = (head + text + foot).encode("utf-8")
    tree = self._parse(source, column_offset=start)

    type_node = self._holder_field_type(tree.root_node)
    if type_node is None or (type_node.start_byte, type_node.end_byte) != (start, end):
      raise ParseError("Expected a single type reference", 1, 1)
    if not _is_type_tree(type_node):
      raise ParseError(f"Expected a class type, found {type_node.type}", 1, 1)
    return _TreeBuilder(source, offset=start).type_tree(type_node)

  @staticmethod
  def _holder_field_type(root: tree_sitter.Node) -> Optional[tree_sitter.Node]:
    declarations: Tuple[tree_sitter.Node, ...] = tuple(root.named_children)
    if len(declarations) != 1 or declarations[0].type != "class_declaration":
      return None
    body = declarations[0].child_by_field_name("body")
    fields = [child for child in body.named_children if child.type == "field_declaration"]
    if len(fields) != 1:
      return None
    return fields[0].child_by_field_name("type")
