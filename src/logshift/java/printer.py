"""
Java Printer.

Serializes a compilation unit. Trivia lives on the tokens, so printing is a
plain concatenation and an unedited tree reproduces its input exactly.
"""

from logshift.core.interfaces import Printer
from logshift.java.tree import CompilationUnit


class JavaPrinter(Printer):
  def print(self, unit: CompilationUnit) -> str:
    return unit.to_text()
