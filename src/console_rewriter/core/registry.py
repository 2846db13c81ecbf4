"""
Visitor Registry.

Maps visitor names to ``TraversalEngine`` subclasses. The engine picks the
visitor named by ``RuntimeConfig.visitor_class_name`` (``TransformVisitor`` by
default), so alternative visitors can be selected from ``pyproject.toml`` or
the CLI without touching the pipeline.

Registering a custom visitor:

.. code-block:: python

    from console_rewriter.core.registry import register_visitor
    from console_rewriter.core.traversal import TraversalEngine

    @register_visitor("NoopVisitor")
    class NoopVisitor(TraversalEngine):
      pass
"""

from typing import Callable, Dict, List, Optional, Type

from console_rewriter.core.traversal import TraversalEngine
from console_rewriter.utils.console import log_warning

VisitorType = Type[TraversalEngine]

_VISITORS: Dict[str, VisitorType] = {}
_BUILTINS_LOADED = False


def register_visitor(name: Optional[str] = None) -> Callable[[VisitorType], VisitorType]:
  """
  Decorator registering a visitor class under `name` (defaults to the class name).

  Raises:
      TypeError: If the decorated class is not a ``TraversalEngine`` subclass.
  """

  def decorator(cls: VisitorType) -> VisitorType:
    if not (isinstance(cls, type) and issubclass(cls, TraversalEngine)):
      raise TypeError(f"Visitor '{cls!r}' must subclass TraversalEngine")
    key = name or cls.__name__
    if key in _VISITORS and _VISITORS[key] is not cls:
      log_warning(f"Visitor '{key}' re-registered, replacing {_VISITORS[key].__name__}")
    _VISITORS[key] = cls
    return cls

  return decorator


def _load_builtins() -> None:
  global _BUILTINS_LOADED
  if _BUILTINS_LOADED:
    return
  from console_rewriter.core.visitor import TransformVisitor

  _VISITORS.setdefault("TransformVisitor", TransformVisitor)
  _BUILTINS_LOADED = True


def get_visitor(name: str) -> Optional[VisitorType]:
  """
  Looks up a visitor class by name.

  Returns:
      The registered class, or None if no visitor has that name.
  """
  _load_builtins()
  return _VISITORS.get(name)


def available_visitors() -> List[str]:
  _load_builtins()
  return sorted(_VISITORS)


def clear_visitors() -> None:
  """Resets the registry to the built-in visitors. Primarily for testing."""
  global _BUILTINS_LOADED
  _VISITORS.clear()
  _BUILTINS_LOADED = False
