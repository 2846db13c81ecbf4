"""
Convert Command Handler.

Implements `console-rewriter convert`:
1. Configuration loading (pyproject.toml + CLI overrides).
2. Rewriting each input file through the Engine.
3. Output writing, trace dumping and the batch summary.
"""

import json
from pathlib import Path
from typing import Optional, Dict, Any

from rich.markup import escape
from rich.table import Table

from console_rewriter.core.engine import TransformEngine
from console_rewriter.core.conversion_result import ConversionResult
from console_rewriter.config import RuntimeConfig
from console_rewriter.utils.console import (
  console,
  log_info,
  log_success,
  log_error,
  log_warning,
)


def handle_convert(
  input_path: Path,
  output_path: Optional[Path],
  visitor: Optional[str],
  target_object: Optional[str],
  replacement: Optional[str],
  overrides: Dict[str, Any],
  json_trace_path: Optional[Path] = None,
) -> int:
  """
  Handles the 'convert' command execution.

  Args:
      input_path: Path to the source file or directory to rewrite.
      output_path: Path where rewritten code should be saved.
      visitor: Override for the registered visitor name.
      target_object: Override for the matched object name.
      replacement: Override for the replacement literal content.
      overrides: Generic ``key=value`` configuration overrides.
      json_trace_path: Optional path to dump execution trace JSON.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  if not input_path.exists():
    log_error(f"Input not found: {input_path}")
    return 1

  try:
    config = RuntimeConfig.load(
      visitor_class_name=visitor,
      target_object=target_object,
      replacement_value=replacement,
      overrides=overrides,
      search_path=input_path if input_path.is_dir() else input_path.parent,
    )
  except ValueError as e:
    log_error(f"Invalid configuration: {escape(str(e))}")
    return 1

  engine = TransformEngine(config=config)
  batch_results: Dict[str, ConversionResult] = {}

  if input_path.is_file():
    result = _convert_single_file(input_path, output_path, engine, json_trace_path)
    batch_results[input_path.name] = result
    if not result.success:
      return 1

  elif input_path.is_dir():
    if not output_path:
      log_error("Directory conversion requires --out destination directory.")
      return 1

    py_files = sorted(input_path.rglob("*.py"))
    if not py_files:
      log_warning(f"No .py files found in {input_path}")
      return 0

    log_info(f"Processing {len(py_files)} files from {input_path}...")

    for src_file in py_files:
      rel_path = src_file.relative_to(input_path)
      dest_file = output_path / rel_path

      # One trace per file, written next to its output
      batch_trace = dest_file.with_suffix(".trace.json") if json_trace_path else None

      result = _convert_single_file(src_file, dest_file, engine, batch_trace)
      batch_results[str(rel_path)] = result

  _print_batch_summary(batch_results)
  if any(not r.success for r in batch_results.values()):
    return 1
  return 0


def _convert_single_file(
  input_path: Path,
  output_path: Optional[Path],
  engine: TransformEngine,
  json_trace_path: Optional[Path] = None,
) -> ConversionResult:
  """
  Rewrites a single file.

  Args:
      input_path: Source file path.
      output_path: Destination file path. Prints to stdout when None.
      engine: Configured engine shared across the batch.
      json_trace_path: Path to save trace event logs.

  Returns:
      ConversionResult: Result object containing status and code.
  """
  try:
    with open(input_path, "rt", encoding="utf-8") as f:
      code = f.read()
  except (OSError, UnicodeDecodeError) as e:
    log_error(f"Failed to read {input_path}: {escape(str(e))}")
    return ConversionResult(success=False, errors=[str(e)])

  result = engine.run(code)

  if json_trace_path and result.trace_events:
    try:
      json_trace_path.parent.mkdir(parents=True, exist_ok=True)
      with open(json_trace_path, "wt", encoding="utf-8") as f:
        json.dump(result.trace_events, f, indent=2)
      log_info(f"Trace saved to [path]{json_trace_path}[/path]")
    except OSError as e:
      log_error(f"Failed to write trace: {escape(str(e))}")

  if not result.success:
    for err in result.errors:
      log_error(f"{input_path}: {escape(err)}")
    return result

  if output_path:
    try:
      output_path.parent.mkdir(parents=True, exist_ok=True)
      with open(output_path, "wt", encoding="utf-8") as f:
        f.write(result.code)
    except OSError as e:
      log_error(f"Failed to write {output_path}: {escape(str(e))}")
      return ConversionResult(code=result.code, success=False, errors=[str(e)])
    log_success(
      f"Rewrote {result.calls_rewritten} call(s): [path]{input_path}[/path] -> [path]{output_path}[/path]"
    )
  else:
    print(result.code, end="")

  return result


def _print_batch_summary(results: Dict[str, ConversionResult]) -> None:
  """
  Renders a summary table of conversion results to the console.

  Args:
      results: Dictionary mapping filenames to conversion results.
  """
  total = len(results)
  successes = sum(1 for r in results.values() if r.success and not r.has_errors)
  failures = total - successes

  if failures == 0:
    if total > 1:
      log_success(f"Batch Complete: {successes}/{total} files rewritten.")
    return

  table = Table(title="Rewrite Report")
  table.add_column("File", style="cyan")
  table.add_column("Status", justify="center")
  table.add_column("Issues", style="red")

  for filename, res in results.items():
    if res.success and not res.has_errors:
      continue
    status = "❌ Failed" if not res.success else "⚠️ Warnings"
    issues = "; ".join(res.errors) if res.errors else "Unknown Error"
    table.add_row(escape(filename), status, escape(issues))

  console.print(table)
  console.print(f"\n[bold]Summary:[/bold] {successes} Passed, {failures} with Issues.")
