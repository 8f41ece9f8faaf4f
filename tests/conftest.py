"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Shared Java sources for end-to-end migration tests.
- Recipe registry isolation so tests registering throwaway recipes do not leak.
- Console isolation so CLI tests capture output in memory.
"""

import sys
from pathlib import Path

import pytest

# Add src to path so we can import 'logshift' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

import logshift.recipes  # noqa: E402
from logshift.core.recipe import _RECIPE_REGISTRY  # noqa: E402
from logshift.java.parser import JavaParser  # noqa: E402
from logshift.java.resolver import ClasspathTypeResolver  # noqa: E402
from logshift.utils.console import reset_console  # noqa: E402

APPENDER_SOURCE = """package com.example;

import org.apache.log4j.AppenderSkeleton;
import org.apache.log4j.spi.LoggingEvent;

public class MyAppender extends AppenderSkeleton {
    @Override
    protected void append(LoggingEvent event) {
    }

    @Override
    public boolean requiresLayout() {
        return true;
    }

    @Override
    public void close() {
    }
}
"""

MIGRATED_APPENDER_SOURCE = """package com.example;

import ch.qos.logback.classic.spi.ILoggingEvent;
import ch.qos.logback.core.AppenderBase;

public class MyAppender extends AppenderBase<ILoggingEvent> {
    @Override
    protected void append(ILoggingEvent event) {
    }
}
"""


def _resolve(code: str):
  return ClasspathTypeResolver().resolve(JavaParser().parse(code))


@pytest.fixture
def resolve_unit():
  """Parses and type-attributes a compilation unit with the default classpath."""
  return _resolve


@pytest.fixture
def appender_source() -> str:
  return APPENDER_SOURCE


@pytest.fixture
def migrated_appender_source() -> str:
  return MIGRATED_APPENDER_SOURCE


@pytest.fixture(autouse=True)
def isolate_recipe_registry():
  """
  Ensures recipes registered by individual tests do not leak between tests.
  """
  original_registry = _RECIPE_REGISTRY.copy()
  yield
  _RECIPE_REGISTRY.clear()
  _RECIPE_REGISTRY.update(original_registry)


@pytest.fixture(autouse=True)
def isolate_console():
  yield
  reset_console()
