"""
Log4j Appender to Logback Migration.

Migrates custom appenders built on log4j 1.x's ``AppenderSkeleton`` to
logback's ``AppenderBase<ILoggingEvent>``:

- ``extends AppenderSkeleton`` becomes ``extends AppenderBase<ILoggingEvent>``.
- ``requiresLayout()`` is deleted (logback appenders have no such hook).
- ``close()`` becomes ``stop()``, or is deleted when its body is empty.
- ``LoggingEvent`` references become ``ILoggingEvent``, ``Layout`` references
  become ``LayoutBase``, and ``Layout.format(..)`` calls become ``doLayout(..)``.
- Imports follow the new references.

The method rules apply to every class whose supertype resolves, not only to
the retargeted ones.
"""

from dataclasses import replace

from logshift.core.context import RewriteContext
from logshift.core.extends import ExtendsClauseRewriter
from logshift.core.gate import UsesType
from logshift.core.interfaces import TypeResolver
from logshift.core.matcher import ClassHierarchyMatcher
from logshift.core.passes import AddImport, ChangeMethodName, ChangeType, RemoveImport
from logshift.core.policy import MethodBodyPolicy
from logshift.core.queue import DeferredPassQueue
from logshift.core.recipe import Recipe, register_recipe
from logshift.core.visitor import TreeTransformer
from logshift.java.tree import ClassDeclaration

APPENDER_SKELETON = "org.apache.log4j.AppenderSkeleton"
APPENDER_BASE = "ch.qos.logback.core.AppenderBase"
LOG4J_LAYOUT = "org.apache.log4j.Layout"
LOG4J_LOGGING_EVENT = "org.apache.log4j.spi.LoggingEvent"
LOGBACK_LAYOUT_BASE = "ch.qos.logback.core.LayoutBase"
LOGBACK_LOGGING_EVENT = "ch.qos.logback.classic.spi.ILoggingEvent"

EXTENDS_TEMPLATE = "AppenderBase<ILoggingEvent>"

# The rename matches on the log4j Layout type, so it runs before Layout is retargeted.
COMPANION_PASSES = (
  ChangeMethodName(f"{LOG4J_LAYOUT} format(..)", "doLayout"),
  ChangeType(LOG4J_LOGGING_EVENT, LOGBACK_LOGGING_EVENT),
  ChangeType(LOG4J_LAYOUT, LOGBACK_LAYOUT_BASE),
  RemoveImport(APPENDER_SKELETON),
  AddImport(APPENDER_BASE),
  AddImport(LOGBACK_LOGGING_EVENT),
)


class AppenderMigrationVisitor(TreeTransformer):
  """
  Primary traversal over the class declarations of a unit.

  Classes that extend ``AppenderSkeleton`` get the logback supertype. The
  method table applies to every class whose supertype resolves, matched or
  not, so it also sees the class after its extends clause was rewritten.
  Classes are handled on the way back up, so nested and local appenders are
  matched and rewritten independently of their enclosing class.
  """

  def __init__(
    self,
    matcher: ClassHierarchyMatcher,
    rewriter: ExtendsClauseRewriter,
    policy: MethodBodyPolicy,
    resolver: TypeResolver,
  ) -> None:
    self.matcher = matcher
    self.rewriter = rewriter
    self.policy = policy
    self.resolver = resolver

  def leave_ClassDeclaration(self, original: ClassDeclaration, updated: ClassDeclaration) -> ClassDeclaration:
    if updated.extends is None or self.resolver.resolved_type(updated.extends) is None:
      return updated
    ctx = self.matcher.match(updated)
    rewritten = self.rewriter.rewrite(updated, ctx) if ctx is not None else updated
    return replace(rewritten, body=self.policy.apply(rewritten.body))


@register_recipe("log4j-appender-to-logback")
class Log4jAppenderToLogback(Recipe):
  display_name = "Migrate from Log4j appender"
  description = "Migrates custom Log4j appender components to `logback-classic`."

  def applicable_test(self) -> UsesType:
    return UsesType(APPENDER_SKELETON)

  def visitor(self, context: RewriteContext, queue: DeferredPassQueue) -> AppenderMigrationVisitor:
    return AppenderMigrationVisitor(
      matcher=ClassHierarchyMatcher(APPENDER_SKELETON, context.resolver),
      rewriter=ExtendsClauseRewriter(
        template=EXTENDS_TEMPLATE,
        bound_types=(APPENDER_BASE, LOGBACK_LOGGING_EVENT),
        companions=COMPANION_PASSES,
        synthesizer=context.synthesizer,
        queue=queue,
        tracer=context.tracer,
      ),
      policy=MethodBodyPolicy(tracer=context.tracer),
      resolver=context.resolver,
    )
