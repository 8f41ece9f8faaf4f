"""
Enumerations for logshift.

Shared string enumerations for result statuses and deferred pass kinds.
"""

from enum import Enum


class MigrationStatus(str, Enum):
  """Outcome of migrating one compilation unit."""

  EDITED = "edited"
  UNCHANGED = "unchanged"
  FAILED = "failed"


class PassKind(str, Enum):
  """
  Kinds of rewrite request a rule can defer until after its primary traversal.
  """

  RENAME_METHOD = "rename-method"
  CHANGE_TYPE = "change-type"
  ADD_IMPORT = "add-import"
  REMOVE_IMPORT = "remove-import"
