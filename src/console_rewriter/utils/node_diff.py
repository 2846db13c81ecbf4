"""
Source rendering for detached LibCST nodes.

Nodes pulled out of a tree (or built by a rewrite rule) have no module of their
own, so they are rendered against an empty module for trace logs.
"""

import libcst as cst

# LibCST requires a module context to generate code for a node
_RENDER_CTX = cst.parse_module("")


def capture_node_source(node: cst.CSTNode) -> str:
  """
  Renders a LibCST node into its Python source code string representation.

  Args:
      node: The CST node to serialise.

  Returns:
      str: The Python code string.
  """
  try:
    return _RENDER_CTX.code_for_node(node)
  except Exception:
    return f"<Unrepresentable Node: {type(node).__name__}>"


def diff_nodes(original: cst.CSTNode, modified: cst.CSTNode) -> tuple[str, str, bool]:
  """
  Renders two nodes and reports whether their source differs.

  Args:
      original: The node before transformation.
      modified: The node after transformation.

  Returns:
      tuple: (source_before, source_after, has_changed)
  """
  src_before = capture_node_source(original)
  src_after = capture_node_source(modified)
  return src_before, src_after, src_before != src_after
