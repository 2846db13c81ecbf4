"""
Tests for the Traversal Engine and the default TransformVisitor.

Covers the end-to-end scenarios (source in, source out), traversal
completeness under nesting, counter isolation across runs, and trivia
preservation around the rewritten literal.
"""

import pytest
import libcst as cst

from console_rewriter.config import RuntimeConfig
from console_rewriter.core.tracer import TraceEventType
from console_rewriter.core.traversal import TraversalEngine
from console_rewriter.core.visitor import TransformVisitor


def _rewrite(code: str) -> str:
  return TransformVisitor().visit(cst.parse_module(code)).code


@pytest.mark.parametrize(
  "source, expected",
  [
    ('console.log("hello")', 'console.log("from_plugin")'),
    ("console.error(1, 2)", 'console.error("from_plugin", 2)'),
    ('foo.log("hello")', 'foo.log("hello")'),
    ("console.log()", "console.log()"),
    ('outer(console.log("x"))', 'outer(console.log("from_plugin"))'),
  ],
)
def test_scenarios(source, expected):
  assert _rewrite(source) == expected


def test_base_engine_is_identity():
  code = 'console.log("hello")\nfoo(bar(1), baz=2)\n'
  engine = TraversalEngine()

  result = engine.visit(cst.parse_module(code))

  assert result.code == code
  assert engine.calls_inspected == 3
  assert engine.calls_rewritten == 0


def test_every_call_reaches_override_point():
  code = """
a(b(c(1)), console.log(d()))

def f():
    return [console.warn(x) for x in g()]

class K:
    attr = console.info(h(i(j())))
"""
  visitor = TransformVisitor()
  result = visitor.visit(cst.parse_module(code))

  # a b c console.log d console.warn g console.info h i j
  assert visitor.calls_inspected == 11
  assert visitor.calls_rewritten == 3
  assert 'console.log("from_plugin")' in result.code
  assert 'console.warn("from_plugin")' in result.code
  assert 'console.info("from_plugin")' in result.code
  assert "b(c(1))" in result.code


def test_nested_console_calls_rewrite_both_levels():
  code = "console.log(console.error(1), 2)"
  assert _rewrite(code) == 'console.log("from_plugin", 2)'

  visitor = TransformVisitor()
  visitor.visit(cst.parse_module(code))
  # Inner call is rewritten first, then replaced wholesale by the outer rewrite
  assert visitor.calls_inspected == 2
  assert visitor.calls_rewritten == 2


def test_counters_reset_between_runs():
  visitor = TransformVisitor()

  visitor.visit(cst.parse_module("console.log(1)\nconsole.log(2)\nfoo()\n"))
  assert visitor.calls_inspected == 3
  first_nodes = visitor.nodes_visited

  visitor.visit(cst.parse_module("console.log(1)\n"))
  assert visitor.calls_inspected == 1
  assert visitor.calls_rewritten == 1
  assert 0 < visitor.nodes_visited < first_nodes


def test_repeated_visits_leave_no_residual_trace():
  visitor = TransformVisitor()

  for _ in range(3):
    visitor.visit(cst.parse_module('console.log("a")\nfoo()\n'))

  assert len(visitor.tracer.export()) == 2
  assert visitor.tracer.count(TraceEventType.CALL_REWRITTEN) == 1
  assert visitor.tracer.count(TraceEventType.CALL_SKIPPED) == 1


def test_separate_visitors_do_not_share_a_trace():
  first = TransformVisitor()
  first.visit(cst.parse_module('console.log("a")\n'))

  second = TransformVisitor()
  second.visit(cst.parse_module("foo()\n"))

  assert first.tracer is not second.tracer
  assert [e["type"] for e in second.tracer.export()] == [TraceEventType.CALL_SKIPPED]


def test_rerunning_on_output_is_idempotent():
  code = "console.log('a')\nconsole.error(x, y)\n"
  once = _rewrite(code)
  visitor = TransformVisitor()
  twice = visitor.visit(cst.parse_module(once)).code

  assert twice == once
  assert visitor.calls_rewritten == 0


def test_trivia_is_preserved():
  code = """# header comment
def main():
    console.log(  "hello" ,  x )  # trailing
    value = foo.log("keep")  # untouched
"""
  expected = """# header comment
def main():
    console.log(  "from_plugin" ,  x )  # trailing
    value = foo.log("keep")  # untouched
"""
  assert _rewrite(code) == expected


def test_multiline_call_keeps_layout():
  code = 'console.log(\n    "first",\n    "second",\n)\n'
  expected = 'console.log(\n    "from_plugin",\n    "second",\n)\n'
  assert _rewrite(code) == expected


def test_visit_accepts_non_module_root():
  node = cst.parse_expression('outer(console.log("x"))')
  result = TransformVisitor().visit(node)

  assert isinstance(result, cst.Call)
  assert cst.Module([]).code_for_node(result) == 'outer(console.log("from_plugin"))'


def test_visitor_uses_config_values():
  config = RuntimeConfig(target_object="log", replacement_value="masked")
  result = TransformVisitor(config).visit(cst.parse_module("log.write(secret)\nconsole.log(1)\n"))

  assert result.code == 'log.write("masked")\nconsole.log(1)\n'


def test_subclass_can_replace_structurally():
  """
  The override point may return a different node kind entirely.
  """

  class DropConsole(TraversalEngine):
    def rewrite_call(self, original_node, updated_node):
      func = updated_node.func
      if isinstance(func, cst.Attribute) and isinstance(func.value, cst.Name) and func.value.value == "console":
        return cst.Name("None")
      return updated_node

  engine = DropConsole()
  result = engine.visit(cst.parse_module("x = console.log(1)\ny = foo(2)\n"))

  assert result.code == "x = None\ny = foo(2)\n"
  assert engine.calls_rewritten == 1
