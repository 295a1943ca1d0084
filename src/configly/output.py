"""Diagnostic output for configly, written to stderr only.

configly is a library, so it never writes to stdout and is silent by
default.  Debug messages (cache hits, misses, fetches, writes and TTL
fallbacks) are only shown when the manager is verbose: ``CONFIGLY_DEBUG``
is set, or an explicit :class:`OutputManager` was installed with
``verbose=True``.

Colour is disabled when ``NO_COLOR`` is set or ``TERM=dumb``.

The module exposes :class:`OutputManager` plus a global instance managed by
:func:`get_output`, :func:`set_output` and :func:`reset_output`, so callers
do not need to pass a manager around.
"""

from __future__ import annotations

import os
import sys
from typing import Optional

from rich.console import Console
from rich.markup import escape


class OutputManager:
    """Routes configly diagnostics to a Rich stderr console.

    Args:
        no_color: Disable all colour and Rich markup.
        verbose: Enable debug-level messages.
    """

    def __init__(self, no_color: bool = False, verbose: bool = False) -> None:
        self._no_color = no_color or _should_disable_color()
        self._verbose = verbose
        self._stderr = Console(
            file=sys.stderr,
            no_color=self._no_color,
            stderr=True,
        )

    @property
    def is_verbose(self) -> bool:
        """Whether debug messages are shown."""
        return self._verbose

    def debug(self, message: str) -> None:
        """Print a debug message to stderr. Only shown when verbose.

        Args:
            message: The debug text (prefixed with ``[configly]`` on output).
        """
        if self._verbose:
            if self._no_color:
                print(f"[configly] {message}", file=sys.stderr, flush=True)
            else:
                self._stderr.print(f"[dim]\\[configly] {escape(message)}[/dim]", highlight=False)


def _should_disable_color() -> bool:
    """Return True when NO_COLOR is set (any value) or TERM=dumb."""
    if os.environ.get("NO_COLOR") is not None:
        return True
    if os.environ.get("TERM") == "dumb":
        return True
    return False


def _debug_requested() -> bool:
    return os.environ.get("CONFIGLY_DEBUG", "").strip().lower() not in ("", "0", "false", "no")


# ------------------------------------------------------------------ #
# Global output instance
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the global :class:`OutputManager`, creating a default one lazily.

    The default manager is verbose only when ``CONFIGLY_DEBUG`` is set.
    """
    global _output
    if _output is None:
        _output = OutputManager(verbose=_debug_requested())
    return _output


def set_output(output: OutputManager) -> None:
    """Install *output* as the global :class:`OutputManager`."""
    global _output
    _output = output


def reset_output() -> None:
    """Reset the global :class:`OutputManager` to ``None``.

    Primarily useful in test suites to ensure a clean state between tests.
    """
    global _output
    _output = None
