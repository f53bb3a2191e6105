import io
import json
import logging
from typing import Any, AsyncIterator, Dict, List, Optional

import pytest
from rich.console import Console

from aiask.config import Settings
from aiask.display import TerminalSink

for name in ("httpx", "httpcore"):
    logging.getLogger(name).setLevel(logging.WARNING)


class FakeStream:
    def __init__(self, chunks: List[str], error: Optional[Exception] = None) -> None:
        self.chunks = chunks
        self.error = error
        self.cancel_count = 0
        self.consumed = 0

    def __aiter__(self) -> AsyncIterator[str]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[str]:
        for chunk in self.chunks:
            self.consumed += 1
            yield chunk
        if self.error is not None:
            raise self.error

    async def cancel(self) -> None:
        self.cancel_count += 1


def data_line(content: Optional[str] = None, annotations: Optional[List[Any]] = None) -> str:
    delta: Dict[str, Any] = {}
    if content is not None:
        delta["content"] = content
    if annotations is not None:
        delta["annotations"] = annotations
    return "data: " + json.dumps({"choices": [{"delta": delta}]}) + "\n"


def url_citation(url: str, title: Optional[str] = None, content: Optional[str] = None) -> Any:
    record: Dict[str, Any] = {"url": url}
    if title is not None:
        record["title"] = title
    if content is not None:
        record["content"] = content
    return {"type": "url_citation", "url_citation": record}


DONE_LINE = "data: [DONE]\n"


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def raw_sink(output: io.StringIO) -> TerminalSink:
    console = Console(file=output, force_terminal=False, color_system=None, width=80)
    return TerminalSink(console=console, raw=True)


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key="test-key", base_url="https://llm.test/api/v1")
