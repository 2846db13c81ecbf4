"""
Orchestration Engine for the console rewrite.

``TransformEngine`` is the host around the visitor. A run consists of:

1.  **Visitor Resolution**: looking up ``RuntimeConfig.visitor_class_name`` in
    the visitor registry.
2.  **Ingestion**: parsing the source into a LibCST ``Module``.
3.  **Rewrite**: a single ``visit(root)`` call on a fresh visitor instance.
4.  **Emission**: printing the tree back to source with ``Module.code``.

Any failure in steps 1-2 (or an invalid replacement literal) is reported in the
``ConversionResult`` and the input is returned unchanged. The engine itself
never raises.
"""

import libcst as cst
from typing import Optional

from console_rewriter.config import RuntimeConfig
from console_rewriter.core.conversion_result import ConversionResult
from console_rewriter.core.registry import available_visitors, get_visitor
from console_rewriter.core.tracer import TraceEventType, TraceLogger
from console_rewriter.utils.console import logger


class TransformEngine:
  """
  Runs one visitor over one compilation unit.
  """

  def __init__(self, config: Optional[RuntimeConfig] = None) -> None:
    """
    Args:
        config: Runtime configuration. Loaded from ``pyproject.toml`` (or
            defaults) when omitted.
    """
    self.config = config or RuntimeConfig.load()

  def parse(self, code: str) -> cst.Module:
    """
    Parses source string into a LibCST Module.

    Raises:
        libcst.ParserSyntaxError: If the input code cannot be parsed.
    """
    return cst.parse_module(code)

  def to_source(self, tree: cst.Module) -> str:
    return tree.code

  def run(self, code: str) -> ConversionResult:
    """
    Executes the parse -> visit -> print pipeline.

    Args:
        code (str): The input source string.

    Returns:
        ConversionResult: Rewritten code, counters and trace events.
    """
    tracer = TraceLogger()
    visitor_name = self.config.visitor_class_name

    logger.debug(f"[Engine] Starting run with visitor '{visitor_name}'")
    tracer.start_phase("Rewrite Pipeline", visitor_name)

    visitor_cls = get_visitor(visitor_name)
    if visitor_cls is None:
      msg = f"Unknown visitor '{visitor_name}'. Registered: {', '.join(available_visitors())}"
      tracer.log_warning(msg)
      tracer.end_phase()
      return ConversionResult(code=code, errors=[msg], success=False, trace_events=tracer.export())

    try:
      visitor = visitor_cls(self.config)
    except ValueError as e:
      tracer.log_warning(f"Visitor setup failed: {e}")
      tracer.end_phase()
      return ConversionResult(
        code=code,
        errors=[f"Visitor Error: {e}"],
        success=False,
        trace_events=tracer.export(),
      )

    tracer.start_phase("Preprocessing", "Parsing")
    try:
      tree = self.parse(code)
    except cst.ParserSyntaxError as e:
      tracer.log_warning(f"Parse Error: {e}")
      tracer.end_phase()
      tracer.end_phase()
      return ConversionResult(
        code=code,
        errors=[f"Parse Error: {e}"],
        success=False,
        trace_events=tracer.export(),
      )
    tracer.end_phase()

    tracer.start_phase("Rewrite Engine", "Visitor Traversal")
    tree = visitor.visit(tree)
    tracer.extend(visitor.tracer)
    tracer.end_phase()

    final_code = self.to_source(tree)
    tracer.end_phase()

    logger.debug(
      f"[Engine] Inspected {visitor.calls_inspected} calls, rewrote {visitor.calls_rewritten}, "
      f"skipped {tracer.count(TraceEventType.CALL_SKIPPED)}"
    )
    return ConversionResult(
      code=final_code,
      success=True,
      trace_events=tracer.export(),
      calls_inspected=visitor.calls_inspected,
      calls_rewritten=visitor.calls_rewritten,
    )
