"""
logshift Package.

Automated, type-aware source migrations for Java logging code. The bundled
recipe moves custom log4j 1.x appenders (``extends AppenderSkeleton``) onto
logback's ``AppenderBase<ILoggingEvent>``.

Usage
-----

Simple String Migration
^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import logshift
    new_code = logshift.migrate(java_source)

Advanced Usage (Engine)
^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from logshift import MigrationConfig, MigrationEngine

    engine = MigrationEngine(config=MigrationConfig(classpath=["com.acme.CustomLayout"]))
    res = engine.run(java_source, path="MyAppender.java")

    if res.has_errors:
        print(f"Errors: {res.errors}")
    else:
        print(res.code)
"""

__version__ = "0.0.1"

from logshift.config import MigrationConfig
from logshift.core.engine import MigrationEngine
from logshift.core.result import MigrationResult
from logshift.recipes import DEFAULT_RECIPE, get_recipe


def migrate(code: str, recipe: str = DEFAULT_RECIPE) -> str:
  """
  Migrates a string of Java source code with one recipe.

  This is a convenience wrapper around `MigrationEngine`. For files and
  directories, use `logshift.core.batch.BatchMigrator` or the CLI.

  Args:
      code (str): The Java compilation unit.
      recipe (str): Name of a registered recipe.

  Returns:
      str: The migrated source, or ``code`` unchanged if nothing applied.

  Raises:
      ValueError: If the code cannot be migrated (parse or synthesis failure).
  """
  engine = MigrationEngine(recipe=get_recipe(recipe), config=MigrationConfig(recipe=recipe))
  result = engine.run(code)
  if result.has_errors:
    raise ValueError(f"Migration failed: {'; '.join(result.errors)}")
  return result.code


__all__ = ["MigrationConfig", "MigrationEngine", "MigrationResult", "migrate", "__version__"]
