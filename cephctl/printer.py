"""Terminal output with optional colouring."""

from __future__ import annotations

import sys
from typing import Any, TextIO

_RESET = "\x1b[0m"
_GREEN = "32"
_RED = "31"
_YELLOW = "33"
_HI_RED = "91"


def _format(fmt: str, args: tuple[Any, ...]) -> str:
    return fmt % args if args else fmt


class Printer:
    """Writes formatted lines, optionally wrapped in ANSI colour codes."""

    def __init__(self, colorize: bool = True, stream: TextIO | None = None) -> None:
        self.colorize = colorize
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def _colored(self, code: str, fmt: str, args: tuple[Any, ...]) -> None:
        text = _format(fmt, args)
        if not text.endswith("\n"):
            text += "\n"
        if self.colorize:
            text = f"\x1b[{code}m{text}{_RESET}"
        self.stream.write(text)

    def green(self, fmt: str, *args: Any) -> None:
        self._colored(_GREEN, fmt, args)

    def hi_red(self, fmt: str, *args: Any) -> None:
        self._colored(_HI_RED, fmt, args)

    def printf(self, fmt: str, *args: Any) -> None:
        self.stream.write(_format(fmt, args))

    def println(self, *args: Any) -> None:
        self.stream.write(" ".join(str(a) for a in args) + "\n")

    def red(self, fmt: str, *args: Any) -> None:
        self._colored(_RED, fmt, args)

    def yellow(self, fmt: str, *args: Any) -> None:
        self._colored(_YELLOW, fmt, args)