from __future__ import annotations

import logging
import sys
from pathlib import Path

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_MODLOADER_HANDLER: logging.Handler | None = None


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: str = "INFO", *, log_path: Path | None = None) -> logging.Handler:
    """Install the modloader handler on the root logger.

    Writes to ``log_path`` when given, otherwise to stderr (stdout is kept
    clean for CLI output). Calling again replaces the previously installed
    handler, so the function is safe to call more than once.
    """
    global _MODLOADER_HANDLER

    root = logging.getLogger()
    root.setLevel(_level_from_name(level))

    if _MODLOADER_HANDLER is not None:
        root.removeHandler(_MODLOADER_HANDLER)
        _MODLOADER_HANDLER.close()
        _MODLOADER_HANDLER = None

    handler: logging.Handler
    if log_path is not None:
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(str(log_path), encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(_level_from_name(level))
    handler.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(handler)

    _MODLOADER_HANDLER = handler
    return handler


def reset_logging_for_tests() -> None:
    """Test-only: remove the installed handler."""
    global _MODLOADER_HANDLER
    if _MODLOADER_HANDLER is not None:
        logging.getLogger().removeHandler(_MODLOADER_HANDLER)
        _MODLOADER_HANDLER.close()
    _MODLOADER_HANDLER = None


__all__ = ["configure_logging", "reset_logging_for_tests"]
