"""
Tests for the Tracing System.
"""

import json

from console_rewriter.core.tracer import TraceLogger, TraceEventType


def test_phase_nesting():
  logger = TraceLogger()

  p1 = logger.start_phase("Parent")
  logger.start_phase("Child")
  logger.end_phase()  # End Child
  logger.end_phase()  # End Parent

  events = logger.export()

  # Start P, Start C, End C, End P
  assert len(events) == 4
  assert events[0]["id"] == p1
  assert events[0]["type"] == TraceEventType.PHASE_START
  assert events[1]["parent_id"] == p1
  assert events[2]["type"] == TraceEventType.PHASE_END
  assert events[3]["parent_id"] == p1


def test_end_phase_without_start_is_noop():
  logger = TraceLogger()
  logger.end_phase()
  assert logger.export() == []


def test_events_attach_to_active_phase():
  logger = TraceLogger()
  phase = logger.start_phase("Rewrite Engine")
  logger.log_rewrite("console.log", '"a"', '"from_plugin"')
  logger.log_skip("foo.bar", "callee does not match")

  rewrite, skip = logger.export()[1:]

  assert rewrite["parent_id"] == phase
  assert rewrite["description"] == "Rewrote 'console.log'"
  assert rewrite["metadata"] == {"before": '"a"', "after": '"from_plugin"'}
  assert skip["type"] == TraceEventType.CALL_SKIPPED
  assert skip["metadata"] == {"reason": "callee does not match"}


def test_count_by_type():
  logger = TraceLogger()
  logger.log_skip("a", "no arguments")
  logger.log_skip("b", "no arguments")
  logger.log_rewrite("console.log", "x", '"y"')

  assert logger.count(TraceEventType.CALL_SKIPPED) == 2
  assert logger.count(TraceEventType.CALL_REWRITTEN) == 1
  assert logger.count(TraceEventType.PHASE_START) == 0


def test_warning_event():
  logger = TraceLogger()
  logger.log_warning("Parse Error: boom")

  (event,) = logger.export()
  assert event["type"] == TraceEventType.WARNING
  assert event["parent_id"] is None
  assert event["description"] == "Parse Error: boom"


def test_extend_nests_top_level_events_under_active_phase():
  run = TraceLogger()
  run.log_skip("foo", "callee does not match")
  inner = run.start_phase("Inner")
  run.log_rewrite("console.log", "1", '"from_plugin"')
  run.end_phase()

  pipeline = TraceLogger()
  outer = pipeline.start_phase("Rewrite Engine")
  pipeline.extend(run)
  pipeline.end_phase()

  events = pipeline.export()
  assert len(events) == 1 + 4 + 1
  assert events[1]["parent_id"] == outer
  assert events[2]["parent_id"] == outer
  assert events[3]["parent_id"] == inner
  assert events[4]["parent_id"] == inner
  # source logger is left as it was
  assert run.export()[0]["parent_id"] is None


def test_export_is_json_serializable():
  logger = TraceLogger()
  logger.start_phase("Phase", "detail")
  logger.log_rewrite("console.log", "a", "b")
  logger.end_phase()

  payload = json.loads(json.dumps(logger.export()))
  assert payload[0]["type"] == "phase_start"
  assert payload[0]["metadata"]["detail"] == "detail"
  assert payload[1]["type"] == "call_rewritten"
