"""
Rewrite Context Module.

This module provides the `RewriteContext` container, which hands the
collaborator services and the per-run tracer to the primary visitor and to
every deferred pass, so rule components never construct services themselves.
"""

from typing import Optional

from logshift.core.interfaces import ImportManager, TemplateSynthesizer, TypeResolver
from logshift.core.tracer import TraceLogger


class RewriteContext:
  """
  Shared services for one migration run.
  """

  def __init__(
    self,
    resolver: TypeResolver,
    synthesizer: TemplateSynthesizer,
    import_manager: ImportManager,
    tracer: Optional[TraceLogger] = None,
  ):
    """
    Initializes the context.

    Args:
        resolver: Type attribution service.
        synthesizer: Builds type-attributed fragments from snippets.
        import_manager: Adds and removes imports.
        tracer: Event log for this run. A fresh one is created if omitted.
    """
    self.resolver = resolver
    self.synthesizer = synthesizer
    self.import_manager = import_manager
    self.tracer = tracer or TraceLogger()
