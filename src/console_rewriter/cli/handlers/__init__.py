from .convert import handle_convert, _convert_single_file, _print_batch_summary
from .visitors import handle_visitors

__all__ = [
  "_convert_single_file",
  "_print_batch_summary",
  "handle_convert",
  "handle_visitors",
]
