"""User-facing console output.

Everything the user is meant to read goes through a ConsoleOutput instance.
Diagnostics go to the logger instead (see logging_config).

A buffered ConsoleOutput collects lines instead of printing them, so work done
on a background thread can be shown later from the main thread in one block.
"""

import sys
from typing import Optional, TextIO


class ConsoleOutput:
    """Console writer with explicit verbosity and warning visibility.

    Args:
        verbose: Print lines written with write_verbose()
        show_warnings: Print lines written with warn()
        buffered: Collect output until flush() instead of printing it
        stream: Target stream, defaults to sys.stdout at write time
    """

    def __init__(
        self,
        verbose: bool = False,
        show_warnings: bool = True,
        buffered: bool = False,
        stream: Optional[TextIO] = None,
    ):
        self.verbose = verbose
        self.show_warnings = show_warnings
        self.buffered = buffered
        self._stream = stream
        self._buffer: list[str] = []

    @property
    def lines(self) -> list[str]:
        """Buffered text split into lines (empty when not buffered)."""
        return "".join(self._buffer).splitlines()

    def write(self, text: str) -> None:
        """Write text without a trailing newline."""
        if self.buffered:
            self._buffer.append(text)
        else:
            stream = self._stream or sys.stdout
            stream.write(text)
            stream.flush()

    def write_line(self, text: str = "") -> None:
        """Write text followed by a newline."""
        self.write(text + "\n")

    def write_verbose(self, text: str) -> None:
        """Write a line only when verbose output is enabled."""
        if self.verbose:
            self.write_line(text)

    def warn(self, text: str) -> None:
        """Write a warning line only when warnings are enabled."""
        if self.show_warnings:
            self.write_line(f"Warning: {text}")

    def flush(self, target: Optional["ConsoleOutput"] = None) -> None:
        """Emit buffered text and clear the buffer.

        Args:
            target: Console to emit into. Defaults to this console's stream.
        """
        text = "".join(self._buffer)
        self._buffer.clear()
        if not text:
            return

        if target is not None:
            target.write(text)
        else:
            stream = self._stream or sys.stdout
            stream.write(text)
            stream.flush()
