"""
Tests for the applicability gate and the class hierarchy matcher.

Verifies:
1. The gate fires on imports, resolved type references and method identities.
2. Unresolved references never open the gate.
3. The matcher only accepts classes whose direct supertype resolves to the target.
"""

import pytest

from logshift.core.gate import UsesType
from logshift.core.matcher import ClassHierarchyMatcher
from logshift.java.resolver import ClasspathTypeResolver

SKELETON = "org.apache.log4j.AppenderSkeleton"


@pytest.mark.parametrize(
  "code",
  [
    "import org.apache.log4j.AppenderSkeleton;\nclass A {}",
    "class A extends org.apache.log4j.AppenderSkeleton {}",
    "import org.apache.log4j.*;\nclass A extends AppenderSkeleton {}",
  ],
  ids=["import", "qualified-extends", "wildcard-extends"],
)
def test_gate_applies(resolve_unit, code):
  assert UsesType(SKELETON).applies(resolve_unit(code))


@pytest.mark.parametrize(
  "code",
  [
    "class A {}",
    "class A extends AppenderSkeleton {}",
    "import ch.qos.logback.core.AppenderBase;\nclass A extends AppenderBase {}",
  ],
  ids=["empty", "unresolved", "other-type"],
)
def test_gate_rejects(resolve_unit, code):
  assert not UsesType(SKELETON).applies(resolve_unit(code))


def test_gate_sees_attributed_method_calls(resolve_unit):
  """
  Scenario: Layout is never named; it is only the return type of getLayout().
  Expectation: The format() call is attributed to Layout, which opens the gate.
  """
  code = (
    "import org.apache.log4j.AppenderSkeleton;\n"
    "class A extends AppenderSkeleton {\n"
    "  String render(Object e) { return getLayout().format(e); }\n"
    "}\n"
  )
  assert UsesType("org.apache.log4j.Layout").applies(resolve_unit(code))


def test_gate_repr():
  assert repr(UsesType(SKELETON)) == "UsesType('org.apache.log4j.AppenderSkeleton')"


def test_matcher_returns_context(resolve_unit, appender_source):
  class_decl = resolve_unit(appender_source).types[0]
  ctx = ClassHierarchyMatcher(SKELETON).match(class_decl)
  assert ctx is not None
  assert ctx.class_name == "MyAppender"
  assert ctx.extends.type_tree.to_text().strip() == "AppenderSkeleton"
  assert ctx.body is class_decl.body


def test_matcher_with_resolver(resolve_unit, appender_source):
  class_decl = resolve_unit(appender_source).types[0]
  matcher = ClassHierarchyMatcher(SKELETON, resolver=ClasspathTypeResolver())
  assert matcher.match(class_decl) is not None


@pytest.mark.parametrize(
  "code",
  [
    "class A {}",
    "class A extends AppenderSkeleton {}",
    "import org.apache.log4j.AppenderSkeleton;\nclass B extends AppenderSkeleton {}\nclass A extends B {}",
    "import org.apache.log4j.AppenderSkeleton;\ninterface A extends AppenderSkeleton {}",
  ],
  ids=["no-extends", "unresolved", "indirect-subclass", "interface"],
)
def test_matcher_rejects(resolve_unit, code):
  unit = resolve_unit(code)
  class_decl = unit.types[-1]
  assert ClassHierarchyMatcher(SKELETON).match(class_decl) is None
