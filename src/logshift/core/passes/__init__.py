"""
Deferred rewrite passes scheduled by rule components.
"""

from logshift.core.passes.base import DeferredPass
from logshift.core.passes.change_type import ChangeType
from logshift.core.passes.imports import AddImport, RemoveImport
from logshift.core.passes.rename_method import ChangeMethodName, MethodMatcher

__all__ = ["DeferredPass", "ChangeType", "ChangeMethodName", "MethodMatcher", "AddImport", "RemoveImport"]
