"""
Migration Trace Logger.

Records the step-by-step execution of one migration run:

1. Lifecycle phases (parse, resolve, primary visit, deferred passes, print).
2. Rule decisions (class matched, member kept/removed/renamed).
3. Tree mutations (extends clause replaced, method renamed).
4. Deferred pass scheduling and execution, import actions.

The output is a list of event dictionaries suitable for JSON serialization.
Each engine run owns its own logger.
"""

import time
import uuid
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class TraceEventType(str, Enum):
  PHASE_START = "phase_start"
  PHASE_END = "phase_end"
  MUTATION = "mutation"
  PASS_SCHEDULED = "pass_scheduled"
  PASS_EXECUTED = "pass_executed"
  IMPORT_ACTION = "import_action"
  WARNING = "warning"
  INSPECTION = "inspection"


@dataclass
class TraceEvent:
  id: str
  type: TraceEventType
  timestamp: float
  description: str
  parent_id: Optional[str] = None
  metadata: Dict[str, Any] = field(default_factory=dict)


class TraceLogger:
  """
  Records migration events.
  Injected into the engine, the driver and the rule components.
  """

  def __init__(self) -> None:
    self._events: List[TraceEvent] = []
    self._active_phases: List[str] = []  # Stack of phase IDs

  def start_phase(self, name: str, description: str = "") -> str:
    """Starts a nested phase (e.g. 'Deferred Passes'). Returns the phase ID."""
    phase_id = str(uuid.uuid4())
    parent = self._active_phases[-1] if self._active_phases else None
    self._events.append(
      TraceEvent(
        id=phase_id,
        type=TraceEventType.PHASE_START,
        timestamp=time.time(),
        description=name,
        parent_id=parent,
        metadata={"detail": description},
      )
    )
    self._active_phases.append(phase_id)
    return phase_id

  def end_phase(self) -> None:
    """Ends the current active phase."""
    if not self._active_phases:
      return
    phase_id = self._active_phases.pop()
    self._events.append(
      TraceEvent(
        id=str(uuid.uuid4()),
        type=TraceEventType.PHASE_END,
        timestamp=time.time(),
        description="End Phase",
        parent_id=phase_id,
      )
    )

  def log_mutation(self, node_type: str, before: str, after: str) -> None:
    """Logs a tree transformation."""
    self._log_simple(TraceEventType.MUTATION, f"Transformed {node_type}", {"before": before, "after": after})

  def log_scheduled(self, description: str) -> None:
    self._log_simple(TraceEventType.PASS_SCHEDULED, f"Scheduled {description}", {})

  def log_executed(self, description: str, changed: bool) -> None:
    self._log_simple(TraceEventType.PASS_EXECUTED, f"Ran {description}", {"changed": changed})

  def log_import(self, action: str, fully_qualified_name: str, applied: bool) -> None:
    self._log_simple(
      TraceEventType.IMPORT_ACTION,
      f"{action} import {fully_qualified_name}",
      {"action": action, "type": fully_qualified_name, "applied": applied},
    )

  def log_warning(self, message: str) -> None:
    self._log_simple(TraceEventType.WARNING, message, {"level": "warning"})

  def log_inspection(self, node_str: str, outcome: str, detail: str = "") -> None:
    """Logs a decision point where no change occurred."""
    self._log_simple(TraceEventType.INSPECTION, f"Inspecting '{node_str}'", {"outcome": outcome, "detail": detail})

  def _log_simple(self, evt_type: TraceEventType, desc: str, meta: Dict[str, Any]) -> None:
    parent = self._active_phases[-1] if self._active_phases else None
    self._events.append(
      TraceEvent(
        id=str(uuid.uuid4()), type=evt_type, timestamp=time.time(), description=desc, parent_id=parent, metadata=meta
      )
    )

  @property
  def events(self) -> List[TraceEvent]:
    return list(self._events)

  def export(self) -> List[Dict[str, Any]]:
    """Returns list of dicts for JSON serialization."""
    return [asdict(e) for e in self._events]
