"""
Data structures representing the output of a migration run.

This module defines the `MigrationResult` Pydantic model, which encapsulates
the migrated code, its status, any errors encountered, and the execution trace.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from logshift.enums import MigrationStatus


class MigrationResult(BaseModel):
  """
  Container for the results of migrating one compilation unit.
  """

  path: Optional[str] = Field(default=None, description="Source file, when the unit came from disk.")
  status: MigrationStatus = Field(default=MigrationStatus.UNCHANGED, description="Outcome of the run.")
  code: str = Field(default="", description="The resulting source code (the input, unless edited).")
  errors: List[str] = Field(default_factory=list, description="List of error messages encountered.")
  trace_events: List[Dict[str, Any]] = Field(default_factory=list, description="Execution trace log data.")

  @property
  def changed(self) -> bool:
    """True if the unit was edited."""
    return self.status == MigrationStatus.EDITED

  @property
  def has_errors(self) -> bool:
    """
    Check if the result contains any error messages.

    Returns:
        True if one or more errors are present.
    """
    return len(self.errors) > 0
