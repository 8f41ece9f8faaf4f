"""
Exception hierarchy for logshift.

Only conditions that abort a compilation unit are exceptions. Unresolved
types and missing bodies or ``extends`` clauses are ordinary outcomes and are
handled where they occur.
"""

from typing import Optional


class LogshiftError(Exception):
  """Base exception for all logshift errors."""

  pass


class ParseError(LogshiftError):
  """Raised when source text cannot be parsed into a compilation unit."""

  def __init__(self, message: str, line: Optional[int] = None, col: Optional[int] = None) -> None:
    self.message = message
    self.line = line
    self.col = col
    if line is not None:
      message = f"{message} (line {line}, col {col})"
    super().__init__(message)


class SynthesisError(LogshiftError):
  """Raised when a template cannot be turned into a type-attributed fragment."""

  pass


class QueueStateError(LogshiftError):
  """Raised when a deferred pass queue is used after it has been drained."""

  pass


class RecipeNotFoundError(LogshiftError):
  """Raised when a recipe name is not registered."""

  pass
