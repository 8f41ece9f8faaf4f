"""
Orchestration Engine for one Compilation Unit.

This module provides the `MigrationEngine`, which turns source text into
migrated source text for a single file:

1.  **Parsing**: source text into a lossless Java syntax tree.
2.  **Attribution**: the type resolver attaches identities to references.
3.  **Migration**: the `CompilationUnitDriver` runs the recipe (gate, primary
    visit, deferred passes).
4.  **Printing**: the tree back into text.

A parse or synthesis failure aborts the unit and the original text is
returned with status ``failed``. A unit the recipe does not touch is returned
byte-for-byte as it came in.
"""

from typing import Optional

from logshift.config import MigrationConfig
from logshift.core.context import RewriteContext
from logshift.core.driver import CompilationUnitDriver
from logshift.core.interfaces import ImportManager, Parser, Printer, TemplateSynthesizer, TypeResolver
from logshift.core.recipe import Recipe
from logshift.core.result import MigrationResult
from logshift.core.tracer import TraceLogger
from logshift.enums import MigrationStatus
from logshift.errors import ParseError, SynthesisError
from logshift.java.classpath import Classpath
from logshift.java.imports import JavaImportManager
from logshift.java.parser import JavaParser
from logshift.java.printer import JavaPrinter
from logshift.java.resolver import ClasspathTypeResolver
from logshift.java.template import TypeTemplateSynthesizer
from logshift.recipes import get_recipe


class MigrationEngine:
  """
  Runs one recipe over single compilation units.

  Collaborators default to the Java reference implementations; any of them
  can be injected. The engine holds no per-run state, so one instance can be
  shared by a worker pool.
  """

  def __init__(
    self,
    recipe: Optional[Recipe] = None,
    config: Optional[MigrationConfig] = None,
    parser: Optional[Parser] = None,
    resolver: Optional[TypeResolver] = None,
    synthesizer: Optional[TemplateSynthesizer] = None,
    import_manager: Optional[ImportManager] = None,
    printer: Optional[Printer] = None,
  ):
    """
    Initializes the Engine.

    Args:
        recipe (Recipe, optional): Rule to run. Defaults to the configured recipe.
        config (MigrationConfig, optional): Settings. Defaults to built-in defaults.
        parser (Parser, optional): Source parser.
        resolver (TypeResolver, optional): Type attribution. Defaults to a
            classpath resolver extended with ``config.classpath``.
        synthesizer (TemplateSynthesizer, optional): Template synthesis.
        import_manager (ImportManager, optional): Import bookkeeping.
        printer (Printer, optional): Tree serializer.
    """
    self.config = config or MigrationConfig()
    self.recipe = recipe or get_recipe(self.config.recipe)
    self.parser = parser or JavaParser()
    self.resolver = resolver or ClasspathTypeResolver(Classpath(extra_types=self.config.classpath))
    self.synthesizer = synthesizer or TypeTemplateSynthesizer()
    self.import_manager = import_manager or JavaImportManager()
    self.printer = printer or JavaPrinter()

  def run(self, code: str, path: Optional[str] = None) -> MigrationResult:
    """
    Migrates one compilation unit.

    Args:
        code (str): The input source string.
        path (str, optional): Where the code came from, recorded in the result.

    Returns:
        MigrationResult: The migrated code, status, errors and trace.
    """
    tracer = TraceLogger()
    tracer.start_phase("Migration Pipeline", self.recipe.name)

    tracer.start_phase("Parsing", "Source -> CST")
    try:
      unit = self.parser.parse(code)
    except ParseError as e:
      tracer.end_phase()
      return self._failed(code, path, f"Parse Error: {e}", tracer)
    tracer.end_phase()

    tracer.start_phase("Type Attribution", type(self.resolver).__name__)
    unit = self.resolver.resolve(unit)
    tracer.end_phase()

    context = RewriteContext(self.resolver, self.synthesizer, self.import_manager, tracer)
    try:
      migrated = CompilationUnitDriver(self.recipe, context).run(unit)
    except SynthesisError as e:
      return self._failed(code, path, f"Synthesis Error: {e}", tracer)

    if migrated is unit:
      tracer.end_phase()
      return MigrationResult(
        path=path, status=MigrationStatus.UNCHANGED, code=code, trace_events=tracer.export()
      )

    tracer.start_phase("Printing", "CST -> Source")
    output = self.printer.print(migrated)
    tracer.end_phase()
    tracer.end_phase()

    status = MigrationStatus.EDITED if output != code else MigrationStatus.UNCHANGED
    return MigrationResult(path=path, status=status, code=output, trace_events=tracer.export())

  @staticmethod
  def _failed(code: str, path: Optional[str], message: str, tracer: TraceLogger) -> MigrationResult:
    tracer.log_warning(message)
    tracer.end_phase()
    return MigrationResult(
      path=path,
      status=MigrationStatus.FAILED,
      code=code,
      errors=[message],
      trace_events=tracer.export(),
    )
