"""
Java Concrete Syntax Tree Nodes.

This module defines the immutable data structures representing a parsed Java
compilation unit. The hierarchy is intentionally shallow:

- Structure the migration rules care about (package, imports, type declarations,
  members, blocks, statements) is modelled with dedicated nodes.
- Everything else is kept as an ordered run of *elements* (tokens, names, calls,
  nested blocks), which is enough for type substitution and call renaming.

The parser builds these nodes from a tree-sitter parse. Every token owns its
leading trivia (whitespace and comments, i.e. the source bytes between it and
the previous token) in ``prefix``, so ``to_text()`` reproduces the original
source byte-for-byte. Nodes are frozen dataclasses; edits create new nodes via
``dataclasses.replace`` and share all untouched subtrees.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Iterator, Optional, Tuple, Union


class TokenKind(str, Enum):
  """Lexical category of a leaf token."""

  TEXT_BLOCK = "TEXT_BLOCK"
  STRING = "STRING"
  CHAR = "CHAR"
  NUMBER = "NUMBER"
  IDENTIFIER = "IDENTIFIER"
  KEYWORD = "KEYWORD"
  OPERATOR = "OPERATOR"
  EOF = "EOF"


@dataclass(frozen=True)
class TypeIdentity:
  """
  A resolved, fully-qualified type name.

  Two identities are equal iff their fully-qualified names are equal.
  """

  fully_qualified_name: str

  @property
  def simple_name(self) -> str:
    return self.fully_qualified_name.rsplit(".", 1)[-1]

  @property
  def package_name(self) -> str:
    if "." not in self.fully_qualified_name:
      return ""
    return self.fully_qualified_name.rsplit(".", 1)[0]

  def __str__(self) -> str:
    return self.fully_qualified_name


@dataclass(frozen=True)
class MethodType:
  """
  Resolved identity of an invoked method.

  Attributes:
      declaring_type: The type declaring the method.
      name: The simple method name.
      arity: Number of arguments at the call site.
      return_type: Resolved return type, if known.
  """

  declaring_type: TypeIdentity
  name: str
  arity: int = 0
  return_type: Optional[TypeIdentity] = None


class JavaNode(ABC):
  """Abstract base class for all Java CST nodes."""

  @abstractmethod
  def to_text(self) -> str:
    pass

  @property
  @abstractmethod
  def prefix(self) -> str:
    pass

  @abstractmethod
  def with_prefix(self, prefix: str) -> "JavaNode":
    pass


@dataclass(frozen=True)
class Token(JavaNode):
  """A lexical leaf, carrying its leading trivia."""

  kind: TokenKind
  text: str
  leading: str = ""
  line: int = field(default=0, compare=False, repr=False)
  col: int = field(default=0, compare=False, repr=False)

  @property
  def prefix(self) -> str:
    return self.leading

  def with_prefix(self, prefix: str) -> "Token":
    return replace(self, leading=prefix)

  def with_text(self, text: str) -> "Token":
    return replace(self, text=text)

  def is_(self, text: str) -> bool:
    """True if this is a keyword, operator or identifier token spelled ``text``."""
    return self.text == text and self.kind in (TokenKind.OPERATOR, TokenKind.KEYWORD, TokenKind.IDENTIFIER)

  def to_text(self) -> str:
    return self.leading + self.text


@dataclass(frozen=True)
class NameTree(JavaNode):
  """
  A simple or dotted name (``Layout``, ``org.apache.log4j.Layout``).

  ``tokens`` alternates identifiers and ``.`` operators. ``type`` is attached by
  the type resolver when the whole name denotes a type.
  """

  tokens: Tuple[Token, ...]
  type: Optional[TypeIdentity] = None

  @property
  def parts(self) -> Tuple[str, ...]:
    return tuple(t.text for t in self.tokens if t.kind == TokenKind.IDENTIFIER)

  @property
  def name(self) -> str:
    return ".".join(self.parts)

  @property
  def simple_name(self) -> str:
    return self.parts[-1]

  @property
  def is_qualified(self) -> bool:
    return len(self.parts) > 1

  @property
  def prefix(self) -> str:
    return self.tokens[0].prefix

  def with_prefix(self, prefix: str) -> "NameTree":
    return replace(self, tokens=(self.tokens[0].with_prefix(prefix),) + self.tokens[1:])

  def to_text(self) -> str:
    return "".join(t.to_text() for t in self.tokens)

  @classmethod
  def build(cls, dotted: str, prefix: str = "", type: Optional[TypeIdentity] = None) -> "NameTree":
    """
    Builds a name from its dotted spelling.

    Args:
        dotted: Name such as ``ch.qos.logback.core.AppenderBase``.
        prefix: Leading trivia for the first token.
        type: Identity to attach.

    Returns:
        NameTree: The compact (whitespace-free) name node.
    """
    tokens = []
    for index, part in enumerate(dotted.split(".")):
      if index:
        tokens.append(Token(TokenKind.OPERATOR, "."))
      tokens.append(Token(TokenKind.IDENTIFIER, part, prefix if index == 0 else ""))
    return cls(tokens=tuple(tokens), type=type)


@dataclass(frozen=True)
class ParameterizedType(JavaNode):
  """A generic type reference such as ``AppenderBase<ILoggingEvent>``."""

  clazz: NameTree
  arguments: Tuple["Element", ...]

  @property
  def type(self) -> Optional[TypeIdentity]:
    return self.clazz.type

  @property
  def prefix(self) -> str:
    return self.clazz.prefix

  def with_prefix(self, prefix: str) -> "ParameterizedType":
    return replace(self, clazz=self.clazz.with_prefix(prefix))

  def to_text(self) -> str:
    return self.clazz.to_text() + "".join(a.to_text() for a in self.arguments)


@dataclass(frozen=True)
class MethodName(JavaNode):
  """The identifier of a method invocation, with its resolved method type."""

  token: Token
  method_type: Optional[MethodType] = None

  @property
  def name(self) -> str:
    return self.token.text

  @property
  def prefix(self) -> str:
    return self.token.prefix

  def with_prefix(self, prefix: str) -> "MethodName":
    return replace(self, token=self.token.with_prefix(prefix))

  def with_name(self, name: str) -> "MethodName":
    method_type = replace(self.method_type, name=name) if self.method_type else None
    return replace(self, token=self.token.with_text(name), method_type=method_type)

  def to_text(self) -> str:
    return self.token.to_text()


@dataclass(frozen=True)
class Statement(JavaNode):
  """An ordered run of elements: a field, a local statement, enum constants."""

  elements: Tuple["Element", ...]

  @property
  def prefix(self) -> str:
    return self.elements[0].prefix

  def with_prefix(self, prefix: str) -> "Statement":
    return replace(self, elements=(self.elements[0].with_prefix(prefix),) + self.elements[1:])

  def to_text(self) -> str:
    return "".join(e.to_text() for e in self.elements)


@dataclass(frozen=True)
class Block(JavaNode):
  """A brace-delimited sequence of statements."""

  open: Token
  statements: Tuple[Statement, ...]
  close: Token

  @property
  def prefix(self) -> str:
    return self.open.prefix

  def with_prefix(self, prefix: str) -> "Block":
    return replace(self, open=self.open.with_prefix(prefix))

  def to_text(self) -> str:
    return self.open.to_text() + "".join(s.to_text() for s in self.statements) + self.close.to_text()


@dataclass(frozen=True)
class ExtendsClause(JavaNode):
  """The ``extends`` clause of a class declaration."""

  keyword: Token
  type_tree: "TypeTree"

  @property
  def prefix(self) -> str:
    return self.keyword.prefix

  def with_prefix(self, prefix: str) -> "ExtendsClause":
    return replace(self, keyword=self.keyword.with_prefix(prefix))

  def to_text(self) -> str:
    return self.keyword.to_text() + self.type_tree.to_text()


@dataclass(frozen=True)
class MethodDeclaration(JavaNode):
  """
  A method or constructor declaration.

  ``modifiers`` holds annotations, modifiers, type parameters and the return
  type; ``body`` is ``None`` for abstract, interface and native methods, in
  which case ``terminator`` holds the ``;``.
  """

  modifiers: Tuple["Element", ...]
  name: Token
  parameters: Tuple["Element", ...]
  tail: Tuple["Element", ...] = ()
  body: Optional[Block] = None
  terminator: Optional[Token] = None

  @property
  def simple_name(self) -> str:
    return self.name.text

  @property
  def prefix(self) -> str:
    return self.modifiers[0].prefix if self.modifiers else self.name.prefix

  def with_prefix(self, prefix: str) -> "MethodDeclaration":
    if self.modifiers:
      return replace(self, modifiers=(self.modifiers[0].with_prefix(prefix),) + self.modifiers[1:])
    return replace(self, name=self.name.with_prefix(prefix))

  def with_name(self, name: str) -> "MethodDeclaration":
    return replace(self, name=self.name.with_text(name))

  def to_text(self) -> str:
    parts = [e.to_text() for e in self.modifiers]
    parts.append(self.name.to_text())
    parts.extend(e.to_text() for e in self.parameters)
    parts.extend(e.to_text() for e in self.tail)
    if self.body is not None:
      parts.append(self.body.to_text())
    if self.terminator is not None:
      parts.append(self.terminator.to_text())
    return "".join(parts)


@dataclass(frozen=True)
class ClassBody(JavaNode):
  """The brace-delimited member list of a type declaration."""

  open: Token
  members: Tuple["Member", ...]
  close: Token

  @property
  def prefix(self) -> str:
    return self.open.prefix

  def with_prefix(self, prefix: str) -> "ClassBody":
    return replace(self, open=self.open.with_prefix(prefix))

  def to_text(self) -> str:
    return self.open.to_text() + "".join(m.to_text() for m in self.members) + self.close.to_text()


@dataclass(frozen=True)
class ClassDeclaration(JavaNode):
  """
  A class, interface, enum, record or annotation type declaration.

  ``extends`` is only populated for classes; interface ``extends`` lists and
  ``implements``/``permits`` clauses are kept as elements in ``tail``.
  """

  modifiers: Tuple["Element", ...]
  kind: Token
  name: Token
  header: Tuple["Element", ...]
  extends: Optional[ExtendsClause]
  tail: Tuple["Element", ...]
  body: ClassBody

  @property
  def simple_name(self) -> str:
    return self.name.text

  @property
  def prefix(self) -> str:
    return self.modifiers[0].prefix if self.modifiers else self.kind.prefix

  def with_prefix(self, prefix: str) -> "ClassDeclaration":
    if self.modifiers:
      return replace(self, modifiers=(self.modifiers[0].with_prefix(prefix),) + self.modifiers[1:])
    return replace(self, kind=self.kind.with_prefix(prefix))

  def to_text(self) -> str:
    parts = [e.to_text() for e in self.modifiers]
    parts.append(self.kind.to_text())
    parts.append(self.name.to_text())
    parts.extend(e.to_text() for e in self.header)
    if self.extends is not None:
      parts.append(self.extends.to_text())
    parts.extend(e.to_text() for e in self.tail)
    parts.append(self.body.to_text())
    return "".join(parts)


@dataclass(frozen=True)
class Import(JavaNode):
  """A single-type, on-demand or static import declaration."""

  keyword: Token
  static: Optional[Token]
  name: NameTree
  wildcard: Tuple[Token, ...]
  semicolon: Token

  @property
  def qualified_name(self) -> str:
    return self.name.name

  @property
  def is_wildcard(self) -> bool:
    return bool(self.wildcard)

  @property
  def is_static(self) -> bool:
    return self.static is not None

  @property
  def prefix(self) -> str:
    return self.keyword.prefix

  def with_prefix(self, prefix: str) -> "Import":
    return replace(self, keyword=self.keyword.with_prefix(prefix))

  def to_text(self) -> str:
    parts = [self.keyword.to_text()]
    if self.static is not None:
      parts.append(self.static.to_text())
    parts.append(self.name.to_text())
    parts.extend(t.to_text() for t in self.wildcard)
    parts.append(self.semicolon.to_text())
    return "".join(parts)

  @classmethod
  def build(cls, fully_qualified_name: str, prefix: str = "") -> "Import":
    """Builds a single-type import for ``fully_qualified_name``."""
    return cls(
      keyword=Token(TokenKind.KEYWORD, "import", prefix),
      static=None,
      name=NameTree.build(fully_qualified_name, " ", TypeIdentity(fully_qualified_name)),
      wildcard=(),
      semicolon=Token(TokenKind.OPERATOR, ";"),
    )


@dataclass(frozen=True)
class PackageDeclaration(JavaNode):
  """The ``package`` declaration, with any package annotations."""

  modifiers: Tuple["Element", ...]
  keyword: Token
  name: NameTree
  semicolon: Token

  @property
  def prefix(self) -> str:
    return self.modifiers[0].prefix if self.modifiers else self.keyword.prefix

  def with_prefix(self, prefix: str) -> "PackageDeclaration":
    if self.modifiers:
      return replace(self, modifiers=(self.modifiers[0].with_prefix(prefix),) + self.modifiers[1:])
    return replace(self, keyword=self.keyword.with_prefix(prefix))

  def to_text(self) -> str:
    return (
      "".join(e.to_text() for e in self.modifiers)
      + self.keyword.to_text()
      + self.name.to_text()
      + self.semicolon.to_text()
    )


@dataclass(frozen=True)
class CompilationUnit(JavaNode):
  """
  Root node for one source file.

  ``eof`` is an empty token holding the trailing trivia of the file.
  """

  package: Optional[PackageDeclaration]
  imports: Tuple[Import, ...]
  types: Tuple["Member", ...]
  eof: Token

  @property
  def package_name(self) -> str:
    return self.package.name.name if self.package is not None else ""

  @property
  def prefix(self) -> str:
    if self.package is not None:
      return self.package.prefix
    if self.imports:
      return self.imports[0].prefix
    if self.types:
      return self.types[0].prefix
    return self.eof.prefix

  def with_prefix(self, prefix: str) -> "CompilationUnit":
    if self.package is not None:
      return replace(self, package=self.package.with_prefix(prefix))
    if self.imports:
      return replace(self, imports=(self.imports[0].with_prefix(prefix),) + self.imports[1:])
    if self.types:
      return replace(self, types=(self.types[0].with_prefix(prefix),) + self.types[1:])
    return replace(self, eof=self.eof.with_prefix(prefix))

  def to_text(self) -> str:
    parts = []
    if self.package is not None:
      parts.append(self.package.to_text())
    parts.extend(i.to_text() for i in self.imports)
    parts.extend(t.to_text() for t in self.types)
    parts.append(self.eof.to_text())
    return "".join(parts)


TypeTree = Union[NameTree, ParameterizedType]
Element = Union[Token, NameTree, ParameterizedType, MethodName, Block, ClassDeclaration]
Member = Union[MethodDeclaration, ClassDeclaration, Statement]


def iter_children(node: JavaNode) -> Iterator[JavaNode]:
  """
  Yields the direct child nodes of ``node`` in source order.

  Args:
      node: Any CST node.

  Yields:
      JavaNode: Each child, whether held directly or inside a tuple field.
  """
  for f in fields(node):
    value = getattr(node, f.name)
    if isinstance(value, JavaNode):
      yield value
    elif isinstance(value, tuple):
      for item in value:
        if isinstance(item, JavaNode):
          yield item


def walk(node: JavaNode) -> Iterator[JavaNode]:
  """Yields ``node`` and all of its descendants, pre-order."""
  stack = [node]
  while stack:
    current = stack.pop()
    yield current
    stack.extend(reversed(list(iter_children(current))))


def leading_whitespace(prefix: str) -> str:
  """Returns the whitespace run at the start of a trivia string."""
  return prefix[: len(prefix) - len(prefix.lstrip())]
