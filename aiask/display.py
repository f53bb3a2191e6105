import sys
from typing import Optional, TextIO

from rich.console import Console
from rich.markdown import Markdown


class TerminalSink:
    """
    Writes render units to the terminal as they become ready.

    In markdown mode every unit is converted with rich; in raw mode the unit
    source text is written as is. Literal text such as the sources block
    bypasses conversion in both modes.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        raw: bool = False,
        code_theme: str = "monokai",
    ) -> None:
        self.console = console or Console(highlight=False)
        self.raw = raw
        self.code_theme = code_theme
        self.ends_with_newline = True

    @classmethod
    def for_stream(cls, stream: TextIO = sys.stdout, raw: bool = False) -> "TerminalSink":
        return cls(console=Console(file=stream, highlight=False), raw=raw)

    def write(self, unit: str) -> None:
        if not unit:
            return
        if self.raw:
            self.write_literal(unit)
            return
        if not unit.strip():
            self.console.print()
        else:
            self.console.print(Markdown(unit.rstrip("\n"), code_theme=self.code_theme))
        self.ends_with_newline = True

    def write_literal(self, text: str) -> None:
        if not text:
            return
        self.console.file.write(text)
        self.console.file.flush()
        self.ends_with_newline = text.endswith("\n")

    def finish_line(self) -> None:
        if not self.ends_with_newline:
            self.write_literal("\n")
