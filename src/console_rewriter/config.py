"""
Runtime Configuration Store.

Resolves the options of a rewrite run from three layers, lowest priority first:

1. Built-in defaults (``TransformVisitor``, ``console``, ``from_plugin``).
2. The ``[tool.console_rewriter]`` table of the nearest ``pyproject.toml``.
3. Explicit arguments (CLI flags or programmatic overrides).
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
from pydantic import BaseModel, Field, field_validator

from console_rewriter.utils.console import log_warning

if sys.version_info >= (3, 11):
  import tomllib
else:
  try:
    import tomli as tomllib
  except ImportError:
    tomllib = None  # type: ignore

DEFAULT_VISITOR = "TransformVisitor"
TARGET_OBJECT = "console"
REPLACEMENT_VALUE = "from_plugin"

_TOML_SECTION = "console_rewriter"


class RuntimeConfig(BaseModel):
  """
  Configuration container for the rewrite engine.
  """

  visitor_class_name: str = Field(DEFAULT_VISITOR, description="Registered visitor to run over each tree.")
  target_object: str = Field(TARGET_OBJECT, description="Identifier whose method calls get their first argument replaced.")
  replacement_value: str = Field(REPLACEMENT_VALUE, description="Decoded content of the replacement string literal.")

  @field_validator("target_object")
  @classmethod
  def validate_target_object(cls, v: str) -> str:
    """
    Ensures the target object is a plain identifier.

    Args:
        v (str): The raw object name.

    Returns:
        str: The stripped name.

    Raises:
        ValueError: If the name is not a valid Python identifier.
    """
    v_clean = v.strip()
    if not v_clean.isidentifier():
      raise ValueError(f"Target object must be an identifier, got: '{v}'")
    return v_clean

  @field_validator("visitor_class_name")
  @classmethod
  def validate_visitor_name(cls, v: str) -> str:
    v_clean = v.strip()
    if not v_clean:
      raise ValueError("Visitor class name must not be empty.")
    return v_clean

  @classmethod
  def load(
    cls,
    visitor_class_name: Optional[str] = None,
    target_object: Optional[str] = None,
    replacement_value: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
    search_path: Optional[Path] = None,
  ) -> "RuntimeConfig":
    """
    Loads configuration from pyproject.toml and overrides with CLI arguments.

    Args:
        visitor_class_name (Optional[str]): Override for the registered visitor.
        target_object (Optional[str]): Override for the matched object name.
        replacement_value (Optional[str]): Override for the replacement literal content.
        overrides (Optional[Dict]): Generic ``key=value`` overrides (lower priority
            than the explicit keyword arguments above).
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        RuntimeConfig: The fully resolved configuration object.
    """
    start_dir = search_path or Path.cwd()
    toml_config, _ = _load_toml_settings(start_dir)

    merged: Dict[str, Any] = {}
    for key in cls.model_fields:
      if key in toml_config:
        merged[key] = toml_config[key]

    for key, val in (overrides or {}).items():
      if key not in cls.model_fields:
        log_warning(f"Ignoring unknown config key: '{key}'")
        continue
      merged[key] = val

    if visitor_class_name is not None:
      merged["visitor_class_name"] = visitor_class_name
    if target_object is not None:
      merged["target_object"] = target_object
    if replacement_value is not None:
      merged["replacement_value"] = replacement_value

    return cls(**merged)


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches the start directory and its parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory it was found in.
  """
  if not tomllib:
    return {}, None

  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.exists() and toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError) as e:
        log_warning(f"Could not read {toml_path}: {e}")
        return {}, None

      tool_section = data.get("tool", {})
      return tool_section.get(_TOML_SECTION, {}), parent

  return {}, None


def parse_cli_key_values(items: Optional[List[str]]) -> Dict[str, str]:
  """
  Parses a list of 'key=value' strings into a dictionary.

  Values are kept verbatim (only surrounding whitespace is stripped), since
  every option is a string. ``replacement_value=1e3`` stays ``"1e3"``.

  Args:
      items (Optional[List[str]]): List of raw CLI strings directly from argparse.

  Returns:
      Dict[str, str]: Parsed dictionary.
  """
  if not items:
    return {}

  config = {}
  for item in items:
    if "=" not in item:
      log_warning(f"Ignoring invalid config format: '{item}'. Expected 'key=value'.")
      continue

    key, val_str = item.split("=", 1)
    config[key.strip()] = val_str.strip()

  return config
