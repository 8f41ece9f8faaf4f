"""
Tests for the Deferred Pass Queue.
"""

from dataclasses import dataclass, replace
from typing import ClassVar, List

import pytest

from logshift.core.context import RewriteContext
from logshift.core.passes import AddImport, DeferredPass
from logshift.core.queue import DeferredPassQueue
from logshift.core.tracer import TraceEventType
from logshift.enums import PassKind
from logshift.errors import QueueStateError
from logshift.java.imports import JavaImportManager
from logshift.java.parser import JavaParser
from logshift.java.resolver import ClasspathTypeResolver
from logshift.java.template import TypeTemplateSynthesizer


@dataclass(frozen=True)
class Recording(DeferredPass):
  """Appends its label to a shared log and returns the unit untouched."""

  kind: ClassVar[PassKind] = PassKind.ADD_IMPORT

  label: str
  log: List[str]

  def transform(self, unit, context):
    self.log.append(self.label)
    return unit

  def describe(self):
    return f"record {self.label}"


@pytest.fixture
def context():
  return RewriteContext(ClasspathTypeResolver(), TypeTemplateSynthesizer(), JavaImportManager())


@pytest.fixture
def unit():
  return JavaParser().parse("class A {}")


def test_fifo_order(context, unit):
  log = []
  queue = DeferredPassQueue()
  for label in ["first", "second", "third"]:
    assert queue.schedule(Recording(label, log))
  assert len(queue) == 3

  assert queue.drain(unit, context) is unit
  assert log == ["first", "second", "third"]
  executed = [e for e in context.tracer.export() if e["type"] == TraceEventType.PASS_EXECUTED]
  assert [e["description"] for e in executed] == ["Ran record first", "Ran record second", "Ran record third"]
  assert all(e["metadata"]["changed"] is False for e in executed)


def test_equal_passes_are_deduplicated():
  queue = DeferredPassQueue()
  assert queue.schedule(AddImport("a.B"))
  assert not queue.schedule(AddImport("a.B"))
  assert queue.schedule(AddImport("a.C"))
  assert list(queue) == [AddImport("a.B"), AddImport("a.C")]


def test_empty_queue_returns_unit(context, unit):
  assert DeferredPassQueue().drain(unit, context) is unit


def test_drain_is_once_only(context, unit):
  queue = DeferredPassQueue()
  queue.drain(unit, context)
  assert queue.drained
  with pytest.raises(QueueStateError):
    queue.drain(unit, context)
  with pytest.raises(QueueStateError):
    queue.schedule(AddImport("a.B"))


def test_each_pass_sees_previous_output(context, unit):
  @dataclass(frozen=True)
  class Rename(DeferredPass):
    kind: ClassVar[PassKind] = PassKind.RENAME_METHOD
    suffix: str

    def transform(self, unit, context):
      cls = unit.types[0]
      renamed = replace(cls, name=cls.name.with_text(cls.name.text + self.suffix))
      return replace(unit, types=(renamed,))

    def describe(self):
      return self.suffix

  queue = DeferredPassQueue()
  queue.schedule(Rename("1"))
  queue.schedule(Rename("2"))
  assert queue.drain(unit, context).types[0].simple_name == "A12"
