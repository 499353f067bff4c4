"""
Central Logging and Console Utilities.

Output from the CLI and from library modules goes through the standard
`logging` package, rendered by `rich`. The module-level `console` is a proxy
whose backend can be swapped (for example to an in-memory console in tests)
without breaking references other modules already hold.
"""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

# Custom level between INFO and WARNING for "done" messages.
SUCCESS_LEVEL_NUM = 25
logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")

_THEME = Theme(
  {
    "logging.level.success": "green",
    "info": "dim cyan",
    "warning": "yellow",
    "error": "bold red",
    "success": "green",
    "path": "bold blue",
    "code": "bold magenta",
  }
)


class _ConsoleProxy:
  """
  Forwards printing to a replaceable `rich.console.Console`.

  Swapping the backend also re-points the root logger's RichHandler so that
  `logging` output follows the console.
  """

  def __init__(self) -> None:
    self._backend: Console = Console(theme=_THEME)
    self._configure_logging()

  def set_backend(self, new_console: Console) -> None:
    """
    Injects a new Console backend and updates logging handlers.

    Args:
        new_console (Console): The new Rich Console instance to use.
    """
    self._backend = new_console
    self._configure_logging()

  def reset(self) -> None:
    """Returns to a fresh standard output console."""
    self._backend = Console(theme=_THEME)
    self._configure_logging()

  @property
  def backend(self) -> Console:
    return self._backend

  def _configure_logging(self) -> None:
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
      if isinstance(handler, RichHandler):
        root_logger.removeHandler(handler)

    rich_handler = RichHandler(
      console=self._backend,
      show_time=False,
      show_path=False,
      markup=True,
      rich_tracebacks=True,
    )
    root_logger.setLevel(logging.INFO)
    root_logger.addHandler(rich_handler)

  def print(self, *args: Any, **kwargs: Any) -> None:
    """Forwards `print` calls to the active backend."""
    self._backend.print(*args, **kwargs)

  def __getattr__(self, name: str) -> Any:
    return getattr(self._backend, name)


console = _ConsoleProxy()


def set_console(new_console: Console) -> None:
  """
  Global helper to inject a specific console instance.

  Args:
      new_console (Console): The configured Rich console to use globally.
  """
  console.set_backend(new_console)


def reset_console() -> None:
  """Global helper to reset logging and console to standard output."""
  console.reset()


def get_console() -> Console:
  """Returns the currently active console backend."""
  return console.backend


def log_info(msg: str) -> None:
  """
  Logs an informational message via standard logging.

  Args:
      msg (str): The message content. Can include rich markup like [bold].
  """
  logging.info(f"ℹ️  {msg}", extra={"markup": True})


def log_success(msg: str) -> None:
  """Logs a success message via standard logging."""
  logging.log(SUCCESS_LEVEL_NUM, f"✅ {msg}", extra={"markup": True})


def log_warning(msg: str) -> None:
  """Logs a warning message via standard logging."""
  logging.warning(f"⚠️  {msg}", extra={"markup": True})


def log_error(msg: str) -> None:
  """Logs an error message via standard logging."""
  logging.error(f"❌ {msg}", extra={"markup": True})
