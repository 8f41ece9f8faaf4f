"""
Tests for the Classpath Type Resolver.

Verifies:
1. Simple names resolve through declared types, imports, same package,
   wildcard imports and java.lang, in that order.
2. Qualified names and type-prefixed field accesses.
3. Method invocations get declaring type, arity and return type.
4. Anything unknown stays unresolved.
"""

from logshift.java.classpath import Classpath
from logshift.java.parser import JavaParser
from logshift.java.resolver import ClasspathTypeResolver
from logshift.java.tree import MethodName, NameTree, walk


def typed_names(unit):
  return {n.name: n.type.fully_qualified_name for n in walk(unit) if isinstance(n, NameTree) and n.type}


def calls(unit):
  return {n.name: n.method_type for n in walk(unit) if isinstance(n, MethodName)}


def test_explicit_import_resolves_extends(resolve_unit):
  unit = resolve_unit(
    "import org.apache.log4j.AppenderSkeleton;\nclass A extends AppenderSkeleton {}"
  )
  extends = unit.types[0].extends
  assert extends.type_tree.type.fully_qualified_name == "org.apache.log4j.AppenderSkeleton"
  assert unit.imports[0].name.type.fully_qualified_name == "org.apache.log4j.AppenderSkeleton"


def test_wildcard_import_resolves_known_types(resolve_unit):
  unit = resolve_unit("import org.apache.log4j.*;\nclass A extends AppenderSkeleton {}")
  assert unit.types[0].extends.type_tree.type.fully_qualified_name == "org.apache.log4j.AppenderSkeleton"


def test_same_package_resolution(resolve_unit):
  unit = resolve_unit("package org.apache.log4j;\nclass A extends AppenderSkeleton {}")
  assert unit.types[0].extends.type_tree.type.fully_qualified_name == "org.apache.log4j.AppenderSkeleton"


def test_fully_qualified_extends(resolve_unit):
  unit = resolve_unit("class A extends org.apache.log4j.AppenderSkeleton {}")
  assert unit.types[0].extends.type_tree.type.fully_qualified_name == "org.apache.log4j.AppenderSkeleton"


def test_declared_type_shadows_import(resolve_unit):
  """
  A class declared in the unit wins over a single-type import of the same simple name.
  """
  unit = resolve_unit(
    "package p;\nimport org.apache.log4j.AppenderSkeleton;\n"
    "class A extends AppenderSkeleton {}\nclass AppenderSkeleton {}"
  )
  assert unit.types[0].extends.type_tree.type.fully_qualified_name == "p.AppenderSkeleton"


def test_unknown_types_stay_unresolved(resolve_unit):
  unit = resolve_unit("class A extends AppenderSkeleton {}")
  assert unit.types[0].extends.type_tree.type is None


def test_java_lang_resolution(resolve_unit):
  unit = resolve_unit("class A { String name; }")
  assert typed_names(unit)["String"] == "java.lang.String"


def test_type_prefix_of_field_access_is_split(resolve_unit):
  """
  Input: `Layout.LINE_SEP` in an expression.
  Expect: a typed `Layout` name followed by an untyped `LINE_SEP`.
  """
  unit = resolve_unit(
    "import org.apache.log4j.Layout;\nclass A { String s = Layout.LINE_SEP; }"
  )
  assert typed_names(unit)["Layout"] == "org.apache.log4j.Layout"
  assert "Layout.LINE_SEP" not in {n.name for n in walk(unit) if isinstance(n, NameTree)}
  assert unit.to_text() == "import org.apache.log4j.Layout;\nclass A { String s = Layout.LINE_SEP; }"


def test_call_on_inherited_field(resolve_unit):
  """
  Input: `layout.format(event)` in an AppenderSkeleton subclass.
  Expect: declared on org.apache.log4j.Layout with one argument.
  """
  unit = resolve_unit(
    "import org.apache.log4j.AppenderSkeleton;\nimport org.apache.log4j.spi.LoggingEvent;\n"
    "class A extends AppenderSkeleton {\n"
    "  protected void append(LoggingEvent event) { System.out.print(layout.format(event)); }\n"
    "}"
  )
  method_type = calls(unit)["format"]
  assert method_type.declaring_type.fully_qualified_name == "org.apache.log4j.Layout"
  assert method_type.arity == 1
  assert method_type.return_type.fully_qualified_name == "java.lang.String"


def test_call_on_inherited_getter_chain(resolve_unit):
  unit = resolve_unit(
    "import org.apache.log4j.AppenderSkeleton;\n"
    "class A extends AppenderSkeleton {\n"
    "  String render(Object e) { return this.getLayout().format(e); }\n"
    "}"
  )
  found = calls(unit)
  assert found["getLayout"].declaring_type.fully_qualified_name == "org.apache.log4j.AppenderSkeleton"
  assert found["getLayout"].arity == 0
  assert found["format"].declaring_type.fully_qualified_name == "org.apache.log4j.Layout"


def test_call_on_local_and_parameter_variables(resolve_unit):
  unit = resolve_unit(
    "import org.apache.log4j.PatternLayout;\nimport org.apache.log4j.spi.LoggingEvent;\n"
    "class A {\n"
    "  String m(LoggingEvent e) {\n"
    "    PatternLayout p = new PatternLayout();\n"
    "    return p.format(e) + e.getRenderedMessage();\n"
    "  }\n"
    "}"
  )
  found = calls(unit)
  # format is inherited from Layout
  assert found["format"].declaring_type.fully_qualified_name == "org.apache.log4j.Layout"
  assert found["getRenderedMessage"].declaring_type.fully_qualified_name == "org.apache.log4j.spi.LoggingEvent"


def test_call_on_declared_field(resolve_unit):
  unit = resolve_unit(
    "import org.apache.log4j.Layout;\n"
    "class A {\n"
    "  private Layout myLayout;\n"
    "  String m(Object e, Object f) { return myLayout.format(e, f); }\n"
    "}"
  )
  method_type = calls(unit)["format"]
  assert method_type.declaring_type.fully_qualified_name == "org.apache.log4j.Layout"
  assert method_type.arity == 2


def test_unrelated_receiver_is_not_attributed_to_layout(resolve_unit):
  unit = resolve_unit(
    "class A {\n"
    "  String m(java.text.SimpleDateFormat fmt, Object d) { return fmt.format(d); }\n"
    "}"
  )
  method_type = calls(unit)["format"]
  assert method_type.declaring_type.fully_qualified_name == "java.text.SimpleDateFormat"


def test_unknown_receiver_stays_unresolved(resolve_unit):
  unit = resolve_unit("class A { String m() { return thing.format(x); } }")
  assert calls(unit)["format"] is None


def test_extra_classpath_types():
  resolver = ClasspathTypeResolver(Classpath(extra_types=["com.acme.Base"]))
  unit = resolver.resolve(JavaParser().parse("import com.acme.*;\nclass A extends Base {}"))
  assert unit.types[0].extends.type_tree.type.fully_qualified_name == "com.acme.Base"


def test_resolution_preserves_text(resolve_unit, appender_source):
  assert resolve_unit(appender_source).to_text() == appender_source
