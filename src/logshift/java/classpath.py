"""
Static Type Knowledge.

The resolver cannot compile the project, so it works from a small classpath of
type stubs: which fully-qualified names exist, their supertypes, the fields they
expose and the return types of their methods. The default stubs cover
``java.lang`` and the log4j / logback types involved in appender migration;
callers can add more names through ``MigrationConfig.classpath``.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, Optional, Set, Tuple


@dataclass(frozen=True)
class TypeStub:
  """
  Declared shape of a known type.

  Attributes:
      name: Fully-qualified name.
      supertype: Fully-qualified name of the superclass, if any.
      fields: Field name to fully-qualified field type.
      methods: Method name to fully-qualified return type (None for void/primitive).
  """

  name: str
  supertype: Optional[str] = None
  fields: Dict[str, str] = field(default_factory=dict)
  methods: Dict[str, Optional[str]] = field(default_factory=dict)


_JAVA_LANG = [
  "AutoCloseable",
  "Boolean",
  "Character",
  "Class",
  "Deprecated",
  "Double",
  "Enum",
  "Error",
  "Exception",
  "Float",
  "FunctionalInterface",
  "IllegalArgumentException",
  "IllegalStateException",
  "Integer",
  "Iterable",
  "Long",
  "Math",
  "Number",
  "Object",
  "Override",
  "Runnable",
  "RuntimeException",
  "String",
  "StringBuffer",
  "StringBuilder",
  "SuppressWarnings",
  "System",
  "Thread",
  "Throwable",
]

DEFAULT_STUBS: Tuple[TypeStub, ...] = tuple(TypeStub(f"java.lang.{name}") for name in _JAVA_LANG) + (
  # log4j 1.x
  TypeStub("org.apache.log4j.Appender"),
  TypeStub(
    "org.apache.log4j.AppenderSkeleton",
    fields={
      "layout": "org.apache.log4j.Layout",
      "name": "java.lang.String",
      "threshold": "org.apache.log4j.Priority",
      "errorHandler": "org.apache.log4j.spi.ErrorHandler",
    },
    methods={
      "activateOptions": None,
      "append": None,
      "close": None,
      "doAppend": None,
      "getErrorHandler": "org.apache.log4j.spi.ErrorHandler",
      "getLayout": "org.apache.log4j.Layout",
      "getName": "java.lang.String",
      "getThreshold": "org.apache.log4j.Priority",
      "isAsSevereAsThreshold": None,
      "requiresLayout": None,
      "setLayout": None,
      "setName": None,
      "setThreshold": None,
    },
  ),
  TypeStub("org.apache.log4j.WriterAppender", supertype="org.apache.log4j.AppenderSkeleton"),
  TypeStub("org.apache.log4j.ConsoleAppender", supertype="org.apache.log4j.WriterAppender"),
  TypeStub("org.apache.log4j.FileAppender", supertype="org.apache.log4j.WriterAppender"),
  TypeStub(
    "org.apache.log4j.Layout",
    fields={"LINE_SEP": "java.lang.String"},
    methods={
      "activateOptions": None,
      "format": "java.lang.String",
      "getContentType": "java.lang.String",
      "getFooter": "java.lang.String",
      "getHeader": "java.lang.String",
      "ignoresThrowable": None,
    },
  ),
  TypeStub(
    "org.apache.log4j.PatternLayout",
    supertype="org.apache.log4j.Layout",
    methods={"getConversionPattern": "java.lang.String", "setConversionPattern": None},
  ),
  TypeStub("org.apache.log4j.EnhancedPatternLayout", supertype="org.apache.log4j.Layout"),
  TypeStub("org.apache.log4j.SimpleLayout", supertype="org.apache.log4j.Layout"),
  TypeStub("org.apache.log4j.HTMLLayout", supertype="org.apache.log4j.Layout"),
  TypeStub("org.apache.log4j.Priority"),
  TypeStub("org.apache.log4j.Level", supertype="org.apache.log4j.Priority"),
  TypeStub("org.apache.log4j.Logger"),
  TypeStub("org.apache.log4j.LogManager"),
  TypeStub(
    "org.apache.log4j.spi.LoggingEvent",
    methods={
      "getLevel": "org.apache.log4j.Level",
      "getLoggerName": "java.lang.String",
      "getMessage": "java.lang.Object",
      "getRenderedMessage": "java.lang.String",
      "getThreadName": "java.lang.String",
      "getTimeStamp": None,
    },
  ),
  TypeStub("org.apache.log4j.spi.ErrorHandler"),
  TypeStub("org.apache.log4j.spi.Filter"),
  # logback
  TypeStub(
    "ch.qos.logback.core.AppenderBase",
    methods={"append": None, "getName": "java.lang.String", "start": None, "stop": None},
  ),
  TypeStub("ch.qos.logback.core.UnsynchronizedAppenderBase"),
  TypeStub("ch.qos.logback.core.Layout"),
  TypeStub(
    "ch.qos.logback.core.LayoutBase",
    methods={"doLayout": "java.lang.String", "getContentType": "java.lang.String"},
  ),
  TypeStub(
    "ch.qos.logback.classic.spi.ILoggingEvent",
    methods={
      "getFormattedMessage": "java.lang.String",
      "getLevel": "ch.qos.logback.classic.Level",
      "getLoggerName": "java.lang.String",
      "getMessage": "java.lang.String",
      "getThreadName": "java.lang.String",
      "getTimeStamp": None,
    },
  ),
  TypeStub("ch.qos.logback.classic.Level"),
  TypeStub("ch.qos.logback.classic.PatternLayout", supertype="ch.qos.logback.core.LayoutBase"),
)


class Classpath:
  """Lookup facade over a set of type stubs."""

  def __init__(self, stubs: Iterable[TypeStub] = DEFAULT_STUBS, extra_types: Iterable[str] = ()) -> None:
    self._stubs: Dict[str, TypeStub] = {stub.name: stub for stub in stubs}
    for name in extra_types:
      self._stubs.setdefault(name, TypeStub(name))

  def knows(self, fully_qualified_name: str) -> bool:
    return fully_qualified_name in self._stubs

  def supertypes(self, fully_qualified_name: str) -> Iterator[str]:
    """Yields ``fully_qualified_name`` and then each known ancestor, nearest first."""
    seen: Set[str] = set()
    current: Optional[str] = fully_qualified_name
    while current is not None and current not in seen:
      seen.add(current)
      yield current
      stub = self._stubs.get(current)
      current = stub.supertype if stub else None

  def field_type(self, owner: str, field_name: str) -> Optional[str]:
    """Returns the type of a field declared on ``owner`` or one of its ancestors."""
    for name in self.supertypes(owner):
      stub = self._stubs.get(name)
      if stub and field_name in stub.fields:
        return stub.fields[field_name]
    return None

  def find_method(self, owner: str, method_name: str) -> Optional[Tuple[str, Optional[str]]]:
    """
    Locates the declaration of a method visible on ``owner``.

    Args:
        owner: Fully-qualified receiver type.
        method_name: Simple method name.

    Returns:
        Optional[Tuple[str, Optional[str]]]: ``(declaring type, return type)``,
        or None when no known ancestor declares the method.
    """
    for name in self.supertypes(owner):
      stub = self._stubs.get(name)
      if stub and method_name in stub.methods:
        return name, stub.methods[method_name]
    return None
