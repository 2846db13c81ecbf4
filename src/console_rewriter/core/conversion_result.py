"""
Data structures representing the output of a rewrite run.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class ConversionResult(BaseModel):
  """
  Container for the results of a rewrite job.
  """

  code: str = Field(default="", description="The rewritten source code (the input, unchanged, on failure).")
  errors: List[str] = Field(default_factory=list, description="List of error messages encountered.")
  success: bool = Field(
    default=True,
    description="True if the source was parsed and traversed.",
  )
  trace_events: List[Dict[str, Any]] = Field(default_factory=list, description="Execution trace log data.")
  calls_inspected: int = Field(default=0, description="Call expressions that reached the rewrite rule.")
  calls_rewritten: int = Field(default=0, description="Call expressions whose first argument was replaced.")

  @property
  def has_errors(self) -> bool:
    """
    Check if the result contains any error messages.

    Returns:
        True if one or more errors are present.
    """
    return len(self.errors) > 0
