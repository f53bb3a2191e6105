import re
from enum import StrEnum
from typing import List

FENCE_OPEN_PATTERN = re.compile(r"```(\w*)\n")
FENCE_CLOSE_PATTERN = re.compile(r"^```\n", re.MULTILINE)


class RenderState(StrEnum):
    IDLE = "idle"
    IN_LINE = "in_line"
    IN_CODE_BLOCK = "in_code_block"


class IncrementalMarkdownRenderer:
    """
    Cuts a stream of text deltas into render units.

    A render unit is either one newline-terminated line or one complete fenced
    code block, from its opening fence to the newline after the closing fence.
    Deltas are appended to a buffer and the buffer is rescanned from the cursor,
    so markers split across deltas are still found. Every character of input
    ends up in exactly one unit, in order.

    An opening fence is three backticks, an optional bareword language tag and
    a newline, with nothing in between. "```python \\n" is not a fence.
    """

    def __init__(self) -> None:
        self._buffer = ""
        self._cursor = 0
        self._state = RenderState.IDLE
        self._code_start = 0
        self._close_scan = 0
        self._language = ""

    @property
    def state(self) -> RenderState:
        return self._state

    @property
    def in_code_block(self) -> bool:
        return self._state == RenderState.IN_CODE_BLOCK

    @property
    def language(self) -> str:
        return self._language

    @property
    def pending(self) -> str:
        return self._buffer[self._cursor :]

    def feed(self, delta: str) -> List[str]:
        self._buffer += delta
        units: List[str] = []
        while True:
            if self._state == RenderState.IN_CODE_BLOCK:
                unit = self._consume_code_block()
            else:
                unit = self._consume_text()
            if unit is None:
                break
            if unit:
                units.append(unit)
        self._compact()
        return units

    def flush(self) -> List[str]:
        remainder = self._buffer[self._cursor :]
        self._buffer = ""
        self._cursor = 0
        self._code_start = 0
        self._close_scan = 0
        self._language = ""
        self._state = RenderState.IDLE
        return [remainder] if remainder else []

    def _consume_text(self) -> str | None:
        newline = self._buffer.find("\n", self._cursor)
        fence = FENCE_OPEN_PATTERN.search(self._buffer, self._cursor)
        if fence is not None and (newline == -1 or fence.start() <= newline):
            before = self._buffer[self._cursor : fence.start()]
            self._cursor = fence.start()
            self._code_start = fence.start()
            self._close_scan = fence.end()
            self._language = fence.group(1)
            self._state = RenderState.IN_CODE_BLOCK
            return before
        if newline == -1:
            has_tail = self._cursor < len(self._buffer)
            self._state = RenderState.IN_LINE if has_tail else RenderState.IDLE
            return None
        line = self._buffer[self._cursor : newline + 1]
        self._cursor = newline + 1
        return line

    def _consume_code_block(self) -> str | None:
        closing = FENCE_CLOSE_PATTERN.search(self._buffer, self._close_scan)
        if closing is None:
            last_line_start = self._buffer.rfind("\n", self._close_scan) + 1
            self._close_scan = max(self._close_scan, last_line_start)
            return None
        block = self._buffer[self._code_start : closing.end()]
        self._cursor = closing.end()
        self._language = ""
        self._state = RenderState.IDLE
        return block

    def _compact(self) -> None:
        if self._cursor == 0:
            return
        self._buffer = self._buffer[self._cursor :]
        self._code_start -= self._cursor
        self._close_scan -= self._cursor
        self._cursor = 0
        if self._code_start < 0:
            self._code_start = 0
        if self._close_scan < 0:
            self._close_scan = 0
