"""
Tests for Centralized Logging Utility and Injection Mechanics.

Verifies:
1. Singleton Proxy correctness.
2. Injection capabilities (`set_console`).
3. Standard logging wrappers and the verbosity switch.
"""

import logging

from rich.console import Console

from logshift.utils.console import (
  SUCCESS_LEVEL_NUM,
  console,
  log_error,
  log_info,
  log_success,
  log_warning,
  reset_console,
  set_console,
  set_verbose,
)


def test_console_singleton_proxy():
  """
  Verify `console` acts as a proxy to a real Rich console.
  """
  assert callable(console.print)
  # Forwarded attribute
  assert hasattr(console, "export_text")
  assert isinstance(console.backend, Console)


def test_custom_console_injection():
  """
  Verify we can inject a capturing console and retrieve logs and prints.
  """
  capture_console = Console(record=True, width=200)
  set_console(capture_console)

  log_info("Captured Log")
  log_success("All good")
  log_warning("Careful")
  log_error("Broken")
  console.print("Direct print")

  output = capture_console.export_text()
  assert "Captured Log" in output
  assert "All good" in output
  assert "Careful" in output
  assert "Broken" in output
  assert "Direct print" in output
  assert "✅" in output  # Unicode preserved


def test_reset_functionality():
  """
  Verify `reset_console` restores a fresh default console.
  """
  temp = Console()
  set_console(temp)
  assert console.backend is temp

  reset_console()
  assert console.backend is not temp
  assert isinstance(console.backend, Console)


def test_success_level_registered():
  assert logging.getLevelName(SUCCESS_LEVEL_NUM) == "SUCCESS"


def test_verbose_switch():
  set_verbose(True)
  assert logging.getLogger().level == logging.DEBUG
  set_verbose(False)
  assert logging.getLogger().level == logging.INFO
