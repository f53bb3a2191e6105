import logging
from dataclasses import dataclass, field
from typing import AsyncIterator, List, Protocol

from aiask.sse import SSEDecoder
from aiask.display import TerminalSink
from aiask.markdown import IncrementalMarkdownRenderer
from aiask.citations import Citation, CitationRegistry, format_citations
from aiask.events import CitationFound, ContentDelta, StreamEnd, parse_payload

logger = logging.getLogger(__name__)


class ReadableStream(Protocol):
    def __aiter__(self) -> AsyncIterator[str]: ...

    async def cancel(self) -> None: ...


@dataclass
class StreamResult:
    text: str = ""
    citations: List[Citation] = field(default_factory=list)
    completed: bool = False


def _log(message: str, level: int = logging.INFO) -> None:
    logger.log(level, f"| stream | {message}")


class _ResponseProcessor:
    def __init__(self, sink: TerminalSink) -> None:
        self.sink = sink
        self.decoder = SSEDecoder()
        self.renderer = IncrementalMarkdownRenderer()
        self.registry = CitationRegistry()
        self.parts: List[str] = []

    def process_chunk(self, chunk: str) -> bool:
        for payload in self.decoder.feed(chunk):
            for event in parse_payload(payload):
                if isinstance(event, StreamEnd):
                    return True
                if isinstance(event, ContentDelta):
                    self.parts.append(event.text)
                    for unit in self.renderer.feed(event.text):
                        self.sink.write(unit)
                elif isinstance(event, CitationFound):
                    if self.registry.add(event.citation):
                        _log(f"Citation: {event.citation.url}", logging.DEBUG)
        return False

    def finish(self, with_sources: bool) -> None:
        for unit in self.renderer.flush():
            self.sink.write(unit)
        self.sink.finish_line()
        citations = self.registry.list()
        if with_sources and citations:
            self.sink.write_literal(format_citations(citations))


async def stream_answer(stream: ReadableStream, sink: TerminalSink) -> StreamResult:
    processor = _ResponseProcessor(sink)
    completed = False
    try:
        async for chunk in stream:
            if processor.process_chunk(chunk):
                completed = True
                break
        if not completed:
            _log("Stream closed without a termination event", logging.WARNING)
        processor.finish(with_sources=completed)
    finally:
        await stream.cancel()

    result = StreamResult(
        text="".join(processor.parts),
        citations=processor.registry.list(),
        completed=completed,
    )
    _log(f"Received {len(result.text)} characters, {len(result.citations)} sources")
    return result
