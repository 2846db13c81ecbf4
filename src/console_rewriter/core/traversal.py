"""
Generic Traversal Engine.

``TraversalEngine`` walks a LibCST tree depth-first and gives every node kind
the default "visit children, splice the results back, return the node"
behaviour inherited from ``libcst.CSTTransformer``. Subclasses hook in at a
single point, ``rewrite_call``, which receives every ``Call`` after its own
arguments and callee have been visited. Nested calls such as
``outer(console.log("x"))`` are therefore rewritten inside-out.

The engine keeps per-run counters so callers can check that every call in the
tree reached the override point:

- ``nodes_visited``: every node entered by the walk.
- ``calls_inspected``: every ``Call`` handed to ``rewrite_call``.
- ``calls_rewritten``: calls for which ``rewrite_call`` returned a new node.

It also holds a ``tracer`` for the current run. Counters and tracer are
replaced at the start of every ``visit``.
"""

from typing import Optional
import libcst as cst

from console_rewriter.config import RuntimeConfig
from console_rewriter.core.tracer import TraceLogger


class TraversalEngine(cst.CSTTransformer):
  """
  Depth-first transformer with a single ``Call`` override point.
  """

  def __init__(self, config: Optional[RuntimeConfig] = None) -> None:
    """
    Args:
        config: Runtime options for subclasses. Defaults to ``RuntimeConfig()``.
    """
    super().__init__()
    self.config = config or RuntimeConfig()
    self._reset_counters()

  def _reset_counters(self) -> None:
    self.nodes_visited = 0
    self.calls_inspected = 0
    self.calls_rewritten = 0
    self.tracer = TraceLogger()

  def visit(self, node: cst.CSTNode) -> cst.CSTNode:
    """
    Transforms the tree rooted at `node` and returns the resulting root.

    Counters and the tracer are reset first, so a single engine instance can
    be reused across compilation units without carrying state between them.

    Args:
        node: Any LibCST node, typically the ``cst.Module`` from the parser.

    Returns:
        The root after traversal. Untouched subtrees print identically.
    """
    self._reset_counters()
    return node.visit(self)

  def on_visit(self, node: cst.CSTNode) -> bool:
    self.nodes_visited += 1
    return super().on_visit(node)

  def leave_Call(self, original_node: cst.Call, updated_node: cst.Call) -> cst.BaseExpression:
    self.calls_inspected += 1
    result = self.rewrite_call(original_node, updated_node)
    if result is not updated_node:
      self.calls_rewritten += 1
    return result

  def rewrite_call(self, original_node: cst.Call, updated_node: cst.Call) -> cst.BaseExpression:
    """
    Override point for call expressions. Default is pass-through.

    Args:
        original_node: The call as it appeared in the input tree.
        updated_node: The call with its children already visited.

    Returns:
        The node to splice into the parent. Returning `updated_node`
        unchanged marks the call as not rewritten.
    """
    return updated_node
