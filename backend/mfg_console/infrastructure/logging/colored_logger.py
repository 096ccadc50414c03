"""Colored masters logger — ANSI-colored console logging for master-data traffic.

Provides a MastersLogger with color-coded output per operation,
making it easy to visually trace fetches and mutations in the terminal.

Color scheme:
    🔵 Blue    — Fetch
    🟢 Green   — Create
    🟡 Yellow  — Update
    🟣 Magenta — Delete
    🟠 Cyan    — Invalidation / Storage
    🔴 Red     — Errors
    ⚪ Gray    — Timing / Stats
"""

import logging
import time
from contextlib import contextmanager
from typing import Any


# ── ANSI Color Codes ─────────────────────────────────────────────────

class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    CYAN = "\033[96m"
    GRAY = "\033[90m"


# ── Operation Definitions ────────────────────────────────────────────

class MastersStage:
    """Predefined master-data operations with colors and icons."""

    FETCH = ("FETCH", _Colors.BLUE, "🔍")
    CREATE = ("CREATE", _Colors.GREEN, "➕")
    UPDATE = ("UPDATE", _Colors.YELLOW, "🔄")
    DELETE = ("DELETE", _Colors.MAGENTA, "🗑️")
    INVALIDATE = ("INVALIDATE", _Colors.CYAN, "♻️")
    STORAGE = ("STORAGE", _Colors.CYAN, "💾")


# ── MastersLogger ────────────────────────────────────────────────────

class MastersLogger:
    """Color-coded logger for master-data operations.

    Usage:
        log = MastersLogger("mfg_console.masters")
        with log.timed_step(MastersStage.UPDATE, "Updating quotation 42"):
            await backend.update("quotation", "42", record)
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)

    @staticmethod
    def _with_details(formatted: str, kwargs: dict[str, Any], color: str = _Colors.GRAY) -> str:
        if not kwargs:
            return formatted
        details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
        return f"{formatted} {color}({details}){_Colors.RESET}"

    def step_start(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        """Debug-level line announcing an operation."""
        label, color, icon = stage
        formatted = f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} {color}{message}{_Colors.RESET}"
        self._logger.debug(self._with_details(formatted, kwargs))

    def step_complete(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        label, color, icon = stage
        formatted = f"{color}{icon} [{label}]{_Colors.RESET} {_Colors.GREEN}✓ {message}{_Colors.RESET}"
        self._logger.info(self._with_details(formatted, kwargs))

    def step_error(self, stage: tuple[str, str, str], message: str, error: Exception | None = None) -> None:
        """Error line in red, naming the exception type when there is one."""
        label = stage[0]
        formatted = f"{_Colors.RED}{_Colors.BOLD}❌ [{label}]{_Colors.RESET} {_Colors.RED}{message}{_Colors.RESET}"
        if error is not None:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.error(formatted)

    def detail(self, message: str, **kwargs: Any) -> None:
        formatted = f"   {_Colors.GRAY}├─ {message}{_Colors.RESET}"
        self._logger.debug(self._with_details(formatted, kwargs, _Colors.DIM))

    @contextmanager
    def timed_step(self, stage: tuple[str, str, str], message: str, **kwargs: Any):
        """Wrap a mutation: start line, then success or error line with the elapsed time.

        Errors are logged and re-raised.
        """
        self.step_start(stage, message, **kwargs)
        start = time.perf_counter()
        try:
            yield
        except Exception as exc:
            self.step_error(stage, f"{message} failed after {time.perf_counter() - start:.2f}s", error=exc)
            raise
        self.step_complete(stage, f"{message} ({time.perf_counter() - start:.2f}s)", **kwargs)
