"""Process-wide logging that discards everything until an output is set."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, TextIO

APP_NAME = "rpcshell"
VERSION = "0.10.2"

_PREFIX = f"{APP_NAME}: "


@dataclass
class _LoggerState:
    stream: Optional[TextIO] = None
    enabled: bool = False


_state = _LoggerState()


def _write(message: str) -> None:
    if _state.stream is None:
        return
    if not message.endswith("\n"):
        message += "\n"
    _state.stream.write(_PREFIX + message)
    flush = getattr(_state.stream, "flush", None)
    if flush is not None:
        flush()


def reset() -> None:
    """Discard the configured output and disable logging."""
    _state.stream = None
    _state.enabled = False


def set_output(stream: TextIO) -> None:
    """Enable logging to ``stream``; ignored until :func:`reset` once enabled."""
    if _state.enabled:
        println(
            "logger: ignored SetOutput because it is already called. "
            "please call Reset before calling again."
        )
        return
    _state.enabled = True
    _state.stream = stream


def println(*args: Any) -> None:
    """Log the arguments separated by spaces."""
    _write(" ".join(str(arg) for arg in args) + "\n")


def printf(fmt: str, *args: Any) -> None:
    """Log ``fmt`` formatted with ``args`` using %-style formatting."""
    _write(fmt % args)


def _collect(f: Callable[[], Optional[Iterable[Any]]]) -> tuple:
    values = f()
    return tuple(values) if values is not None else ()


def scriptln(f: Callable[[], Optional[Iterable[Any]]]) -> None:
    """Call ``f`` and log its results, only when logging is enabled."""
    if not _state.enabled:
        return
    println(*_collect(f))


def scriptf(fmt: str, f: Callable[[], Optional[Iterable[Any]]]) -> None:
    """Call ``f`` and log its results formatted by ``fmt``, only when enabled."""
    if not _state.enabled:
        return
    printf(fmt, *_collect(f))