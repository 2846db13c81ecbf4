"""
Visitors Command Handler.
"""

from rich.table import Table

from console_rewriter.config import DEFAULT_VISITOR
from console_rewriter.core.registry import available_visitors, get_visitor
from console_rewriter.utils.console import console


def handle_visitors() -> int:
  """
  Prints the registered visitors as a table, marking the default.

  Returns:
      int: Exit code (always 0).
  """
  table = Table(title="Registered Visitors")
  table.add_column("Name", style="cyan")
  table.add_column("Class")
  table.add_column("Default", justify="center")

  for name in available_visitors():
    cls = get_visitor(name)
    qualname = f"{cls.__module__}.{cls.__qualname__}" if cls else "?"
    table.add_row(name, qualname, "✓" if name == DEFAULT_VISITOR else "")

  console.print(table)
  return 0
