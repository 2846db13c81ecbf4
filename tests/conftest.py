"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Visitor registry isolation so tests registering custom visitors do not leak.
- A recording console for asserting on log output.
"""

import io
import sys
import pytest
from pathlib import Path

from rich.console import Console

# Add src to path so we can import 'console_rewriter' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from console_rewriter.core.registry import clear_visitors  # noqa: E402
from console_rewriter.utils.console import reset_console, set_console  # noqa: E402


@pytest.fixture(autouse=True)
def isolate_visitor_registry():
  """Restores the built-in visitor registry around each test."""
  clear_visitors()
  yield
  clear_visitors()


@pytest.fixture
def recorded_console():
  """
  Routes console output and package logging into an in-memory recorder.

  Yields:
      Console: Call ``export_text()`` to read what was printed.
  """
  recorder = Console(record=True, width=200, file=io.StringIO())
  set_console(recorder)
  yield recorder
  reset_console()
