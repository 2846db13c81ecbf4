"""
Console Call-Argument Replacement Rule.

Matches calls of the shape ``<object>.<anything>(...)`` where ``<object>`` is the
bare identifier ``console`` (configurable) and replaces the first positional
argument with a fixed string literal:

    console.log("hello")    ->  console.log("from_plugin")
    console.error(1, 2)     ->  console.error("from_plugin", 2)
    foo.log("hello")        ->  foo.log("hello")
    console.log()           ->  console.log()

The match is purely syntactic. No scope or import resolution is attempted, so a
local variable that happens to be called ``console`` also matches.
"""

from typing import Optional
import libcst as cst

from console_rewriter.config import REPLACEMENT_VALUE, TARGET_OBJECT
from console_rewriter.core.tracer import TraceLogger
from console_rewriter.utils.node_diff import capture_node_source, diff_nodes

_SIMPLE_ESCAPES = {
  "\\": "\\\\",
  '"': '\\"',
  "\n": "\\n",
  "\r": "\\r",
  "\t": "\\t",
}


def quote_string_literal(value: str) -> str:
  """
  Builds the double-quoted source form of `value`.

  Args:
      value: The decoded string content.

  Returns:
      str: Raw literal text, e.g. ``'"from_plugin"'``.

  Raises:
      ValueError: If the quoted form does not decode back to `value`.
  """
  parts = []
  for ch in value:
    if ch in _SIMPLE_ESCAPES:
      parts.append(_SIMPLE_ESCAPES[ch])
    elif ord(ch) < 0x20 or ord(ch) == 0x7F:
      parts.append(f"\\x{ord(ch):02x}")
    else:
      parts.append(ch)
  raw = '"' + "".join(parts) + '"'

  if cst.SimpleString(raw).evaluated_value != value:
    raise ValueError(f"Cannot build a string literal for {value!r}")
  return raw


class ConsoleArgumentRule:
  """
  Predicate and mutation for ``console.<method>(first, ...)`` calls.
  """

  def __init__(self, target_object: str = TARGET_OBJECT, replacement_value: str = REPLACEMENT_VALUE) -> None:
    """
    Args:
        target_object: Identifier the callee's object must be named.
        replacement_value: Decoded content of the literal written into argument 0.
    """
    self.target_object = target_object
    self.replacement_value = replacement_value
    self.replacement_raw = quote_string_literal(replacement_value)

  def matches(self, call: cst.Call) -> bool:
    """
    True iff the callee is an attribute access off a bare ``Name`` equal to
    the target object. The attribute name is not constrained.
    """
    func = call.func
    if not isinstance(func, cst.Attribute):
      return False
    obj = func.value
    return isinstance(obj, cst.Name) and obj.value == self.target_object

  def build_replacement(self, original: cst.BaseExpression) -> cst.SimpleString:
    """Replacement literal wearing the parentheses of `original`."""
    return cst.SimpleString(
      self.replacement_raw,
      lpar=getattr(original, "lpar", ()),
      rpar=getattr(original, "rpar", ()),
    )

  def apply(self, call: cst.Call, tracer: Optional[TraceLogger] = None) -> cst.Call:
    """
    Rewrites the first argument of a matching call.

    Non-matching calls, calls without arguments, calls whose first argument is
    starred and calls already carrying the replacement literal are returned
    as-is (the same object).

    Args:
        call: The call expression, children already visited.
        tracer: Receives one event per call. Nothing is recorded when omitted.

    Returns:
        cst.Call: Either `call` itself or a copy with argument 0 replaced.
    """
    reason = None
    if not self.matches(call):
      reason = "callee does not match"
    elif not call.args:
      reason = "no arguments"
    elif call.args[0].star:
      reason = f"first argument is '{call.args[0].star}' unpacking"

    if reason is not None:
      if tracer is not None:
        tracer.log_skip(capture_node_source(call.func), reason)
      return call

    first = call.args[0]
    new_value = self.build_replacement(first.value)
    before, after, changed = diff_nodes(first.value, new_value)
    if not changed:
      if tracer is not None:
        tracer.log_skip(capture_node_source(call.func), "already rewritten")
      return call

    # keyword, comma and whitespace of the original argument survive
    new_call = call.with_changes(args=[first.with_changes(value=new_value), *call.args[1:]])
    if tracer is not None:
      tracer.log_rewrite(capture_node_source(call.func), before, after)
    return new_call
