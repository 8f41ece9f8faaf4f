"""
Extends Clause Rewriter.

Swaps the supertype of a matched class for a synthesized, type-attributed
reference and queues the companion passes that the new supertype implies
(method renames, type substitutions, import fixups).

The template is synthesized before anything is scheduled, so a broken
template leaves both the class and the queue untouched.
"""

from dataclasses import replace
from typing import Optional, Sequence

from logshift.core.interfaces import TemplateSynthesizer
from logshift.core.matcher import MatchContext
from logshift.core.passes.base import DeferredPass
from logshift.core.queue import DeferredPassQueue
from logshift.core.tracer import TraceLogger
from logshift.java.tree import ClassDeclaration, ExtendsClause


class ExtendsClauseRewriter:
  """
  Replaces the ``extends`` type of matched classes.

  Args:
      template: Snippet of the new supertype, e.g. ``AppenderBase<ILoggingEvent>``.
      bound_types: Fully-qualified names bound to the snippet's simple names.
      companions: Passes to schedule, in order, for every rewritten class.
      synthesizer: Template synthesis service.
      queue: The run's deferred pass queue.
      tracer: Event log for the run.
  """

  def __init__(
    self,
    template: str,
    bound_types: Sequence[str],
    companions: Sequence[DeferredPass],
    synthesizer: TemplateSynthesizer,
    queue: DeferredPassQueue,
    tracer: Optional[TraceLogger] = None,
  ) -> None:
    self.template = template
    self.bound_types = tuple(bound_types)
    self.companions = tuple(companions)
    self.synthesizer = synthesizer
    self.queue = queue
    self.tracer = tracer or TraceLogger()

  def rewrite(self, class_decl: ClassDeclaration, ctx: MatchContext) -> ClassDeclaration:
    """
    Rewrites one matched class declaration.

    Args:
        class_decl: The declaration to edit.
        ctx: The match produced for it.

    Returns:
        ClassDeclaration: The declaration with its new ``extends`` clause.

    Raises:
        SynthesisError: If the template cannot be synthesized.
    """
    old_type = ctx.extends.type_tree
    fragment = self.synthesizer.synthesize(self.template, self.bound_types)
    fragment = fragment.with_prefix(old_type.prefix)
    extends = ExtendsClause(ctx.extends.keyword, fragment)

    for rewrite_pass in self.companions:
      if self.queue.schedule(rewrite_pass):
        self.tracer.log_scheduled(rewrite_pass.describe())

    self.tracer.log_mutation(f"ExtendsClause of {ctx.class_name}", old_type.to_text().strip(), fragment.to_text().strip())
    return replace(class_decl, extends=extends)
