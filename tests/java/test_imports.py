"""
Tests for the Java Import Manager.

Verifies:
1. Adds are sorted, idempotent and reference-checked.
2. Removes only happen for unreferenced, explicit imports.
3. Blank-line grouping survives both operations.
"""

from logshift.core.visitor import TreeTransformer
from logshift.java.imports import JavaImportManager, is_referenced
from logshift.java.parser import JavaParser
from logshift.java.resolver import ClasspathTypeResolver
from logshift.java.tree import NameTree, TypeIdentity

APPENDER_BASE = "ch.qos.logback.core.AppenderBase"


class _Retype(TreeTransformer):
  """Attaches a type to every simple name spelled ``simple``."""

  def __init__(self, simple, fqn):
    self.simple = simple
    self.fqn = fqn

  def leave_NameTree(self, original, updated):
    if updated.name == self.simple:
      return NameTree(updated.tokens, TypeIdentity(self.fqn))
    return updated


def resolved(code, retype=None):
  unit = ClasspathTypeResolver().resolve(JavaParser().parse(code))
  if retype:
    unit = _Retype(*retype).transform(unit)
  return unit


def test_add_is_skipped_without_reference():
  unit = resolved("package p;\n\nclass A {}\n")
  assert JavaImportManager().maybe_add_import(unit, APPENDER_BASE) is unit


def test_add_inserts_sorted_and_is_idempotent():
  unit = resolved(
    "package p;\n\nimport org.apache.log4j.Layout;\n\nclass A extends AppenderBase {\n  Layout l;\n}\n",
    retype=("AppenderBase", APPENDER_BASE),
  )
  manager = JavaImportManager()
  added = manager.maybe_add_import(unit, APPENDER_BASE)
  assert added.to_text() == (
    "package p;\n\nimport ch.qos.logback.core.AppenderBase;\nimport org.apache.log4j.Layout;\n\n"
    "class A extends AppenderBase {\n  Layout l;\n}\n"
  )
  assert manager.maybe_add_import(added, APPENDER_BASE) is added


def test_add_skips_java_lang_same_package_and_wildcards():
  manager = JavaImportManager()
  unit = resolved("package ch.qos.logback.core;\n\nclass A extends AppenderBase {}\n")
  assert manager.maybe_add_import(unit, APPENDER_BASE) is unit
  unit = resolved("import ch.qos.logback.core.*;\n\nclass A extends AppenderBase {}\n")
  assert manager.maybe_add_import(unit, APPENDER_BASE) is unit
  unit = resolved("class A { String s; }")
  assert manager.maybe_add_import(unit, "java.lang.String") is unit


def test_add_without_imports_after_package():
  unit = resolved("package p;\n\nclass A { Layout m; }\n", retype=("Layout", "org.apache.log4j.Layout"))
  added = JavaImportManager().maybe_add_import(unit, "org.apache.log4j.Layout")
  assert added.to_text() == "package p;\n\nimport org.apache.log4j.Layout;\n\nclass A { Layout m; }\n"


def test_add_without_package_or_imports():
  unit = resolved("/** Doc. */\nclass A { Layout m; }\n", retype=("Layout", "org.apache.log4j.Layout"))
  added = JavaImportManager().maybe_add_import(unit, "org.apache.log4j.Layout")
  assert added.to_text() == "/** Doc. */\nimport org.apache.log4j.Layout;\n\nclass A { Layout m; }\n"


def test_add_uses_crlf_when_file_does():
  unit = resolved(
    "package p;\r\n\r\nimport org.apache.log4j.Layout;\r\n\r\nclass A { Layout l; Level v; }\r\n",
    retype=("Level", "org.apache.log4j.Level"),
  )
  added = JavaImportManager().maybe_add_import(unit, "org.apache.log4j.Level")
  assert "import org.apache.log4j.Layout;\r\nimport org.apache.log4j.Level;\r\n\r\nclass" in added.to_text()


def test_remove_unreferenced_import_keeps_group_spacing():
  unit = resolved(
    "package p;\n\nimport org.apache.log4j.AppenderSkeleton;\nimport org.apache.log4j.Layout;\n\nclass A { Layout l; }\n"
  )
  removed = JavaImportManager().maybe_remove_import(unit, "org.apache.log4j.AppenderSkeleton")
  assert removed.to_text() == "package p;\n\nimport org.apache.log4j.Layout;\n\nclass A { Layout l; }\n"


def test_remove_is_skipped_while_referenced():
  unit = resolved("import org.apache.log4j.Layout;\n\nclass A { Layout l; }\n")
  assert is_referenced(unit, "org.apache.log4j.Layout")
  assert JavaImportManager().maybe_remove_import(unit, "org.apache.log4j.Layout") is unit


def test_remove_only_import_without_package():
  unit = resolved("import org.apache.log4j.Layout;\n\nclass A {}\n")
  removed = JavaImportManager().maybe_remove_import(unit, "org.apache.log4j.Layout")
  assert removed.to_text() == "class A {}\n"


def test_wildcard_and_static_imports_are_never_removed():
  manager = JavaImportManager()
  unit = resolved("import org.apache.log4j.*;\nimport static org.apache.log4j.Level.INFO;\n\nclass A {}\n")
  assert manager.maybe_remove_import(unit, "org.apache.log4j") is unit
  assert manager.maybe_remove_import(unit, "org.apache.log4j.Level.INFO") is unit
