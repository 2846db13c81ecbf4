"""
console-rewriter Package.

A single-rule LibCST transformer: every call of the form ``console.<method>(...)``
gets its first argument replaced with the string literal ``"from_plugin"``.

Usage
-----

Simple String Conversion
^^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import console_rewriter
    print(console_rewriter.transform('console.log("hello")'))
    # console.log("from_plugin")

Advanced Usage (Engine)
^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from console_rewriter import TransformEngine, RuntimeConfig

    config = RuntimeConfig(replacement_value="redacted")
    res = TransformEngine(config=config).run('console.warn(secret, 1)')

    if res.success:
        print(res.code)  # console.warn("redacted", 1)
    else:
        print(f"Errors: {res.errors}")
"""

from typing import Optional

from console_rewriter.config import RuntimeConfig
from console_rewriter.core.conversion_result import ConversionResult
from console_rewriter.core.engine import TransformEngine
from console_rewriter.core.rules import ConsoleArgumentRule
from console_rewriter.core.traversal import TraversalEngine
from console_rewriter.core.visitor import TransformVisitor

__version__ = "0.1.0"


def transform(
  code: str,
  target_object: Optional[str] = None,
  replacement_value: Optional[str] = None,
  visitor: Optional[str] = None,
) -> str:
  """
  Rewrites a string of source code.

  Unset options fall back to ``[tool.console_rewriter]`` in the nearest
  ``pyproject.toml``, then to the built-in defaults.

  Args:
      code (str): The source code to rewrite.
      target_object (str, optional): Object name to match (default ``console``).
      replacement_value (str, optional): Replacement literal content (default ``from_plugin``).
      visitor (str, optional): Registered visitor name (default ``TransformVisitor``).

  Returns:
      str: The rewritten source code.

  Raises:
      ValueError: If the source cannot be parsed or the visitor is unknown.
  """
  config = RuntimeConfig.load(
    visitor_class_name=visitor,
    target_object=target_object,
    replacement_value=replacement_value,
  )
  result = TransformEngine(config=config).run(code)

  if not result.success:
    error_msg = "\n".join(result.errors)
    raise ValueError(f"Transform failed:\n{error_msg}")

  return result.code


__all__ = [
  "ConsoleArgumentRule",
  "ConversionResult",
  "RuntimeConfig",
  "TransformEngine",
  "TransformVisitor",
  "TraversalEngine",
  "transform",
  "__version__",
]
