"""
Rewrite Trace.

A ``TraceLogger`` belongs to one run. Each ``TraversalEngine.visit`` starts a
fresh one for the rule's per-call decisions, and ``TransformEngine.run`` wraps
that in its own pipeline phases via ``extend``.

Exported events are plain dicts, ready for ``json.dump``.
"""

import time
import uuid
from enum import Enum
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field, asdict, replace


class TraceEventType(str, Enum):
  PHASE_START = "phase_start"
  PHASE_END = "phase_end"
  CALL_REWRITTEN = "call_rewritten"
  CALL_SKIPPED = "call_skipped"
  WARNING = "warning"


@dataclass
class TraceEvent:
  id: str
  type: TraceEventType
  timestamp: float
  description: str
  parent_id: Optional[str] = None
  metadata: Dict[str, Any] = field(default_factory=dict)


class TraceLogger:
  def __init__(self):
    self._events: List[TraceEvent] = []
    self._active_phases: List[str] = []

  def start_phase(self, name: str, detail: str = "") -> str:
    """Opens a phase nested in the current one. Returns its id."""
    phase_id = str(uuid.uuid4())
    self._append(TraceEventType.PHASE_START, name, {"detail": detail}, event_id=phase_id)
    self._active_phases.append(phase_id)
    return phase_id

  def end_phase(self):
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

  def log_rewrite(self, callee: str, before: str, after: str):
    """Records a call whose first argument was replaced."""
    self._append(TraceEventType.CALL_REWRITTEN, f"Rewrote '{callee}'", {"before": before, "after": after})

  def log_skip(self, callee: str, reason: str):
    """Records a call that was inspected and left untouched."""
    self._append(TraceEventType.CALL_SKIPPED, f"Skipped '{callee}'", {"reason": reason})

  def log_warning(self, message: str):
    self._append(TraceEventType.WARNING, message, {})

  def extend(self, other: "TraceLogger"):
    """
    Appends the events of another logger. Its top-level events are nested
    under this logger's active phase.
    """
    parent = self._active_phases[-1] if self._active_phases else None
    for event in other._events:
      self._events.append(replace(event, parent_id=event.parent_id or parent))

  def count(self, evt_type: TraceEventType) -> int:
    return sum(1 for e in self._events if e.type == evt_type)

  def export(self) -> List[Dict[str, Any]]:
    return [asdict(e) for e in self._events]

  def _append(self, evt_type: TraceEventType, desc: str, meta: Dict[str, Any], event_id: Optional[str] = None):
    parent = self._active_phases[-1] if self._active_phases else None
    self._events.append(
      TraceEvent(
        id=event_id or str(uuid.uuid4()),
        type=evt_type,
        timestamp=time.time(),
        description=desc,
        parent_id=parent,
        metadata=meta,
      )
    )
