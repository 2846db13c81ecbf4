"""
The default visitor: the traversal engine with the console rule attached.
"""

from typing import Optional
import libcst as cst

from console_rewriter.config import RuntimeConfig
from console_rewriter.core.rules import ConsoleArgumentRule
from console_rewriter.core.traversal import TraversalEngine


class TransformVisitor(TraversalEngine):
  """
  Rewrites the first argument of every ``console.<method>(...)`` call in a tree.

  Example:

  .. code-block:: python

      import libcst as cst
      from console_rewriter.core.visitor import TransformVisitor

      tree = cst.parse_module('console.log("hello")')
      print(TransformVisitor().visit(tree).code)
      # console.log("from_plugin")
  """

  def __init__(self, config: Optional[RuntimeConfig] = None, rule: Optional[ConsoleArgumentRule] = None) -> None:
    super().__init__(config)
    self.rule = rule or ConsoleArgumentRule(
      target_object=self.config.target_object,
      replacement_value=self.config.replacement_value,
    )

  def rewrite_call(self, original_node: cst.Call, updated_node: cst.Call) -> cst.BaseExpression:
    return self.rule.apply(updated_node, self.tracer)
