from aiask.search import should_use_web_search
from aiask.citations import Citation, CitationRegistry
from aiask.markdown import IncrementalMarkdownRenderer
from aiask.orchestrator import stream_answer, StreamResult

__all__ = [
    "should_use_web_search",
    "Citation",
    "CitationRegistry",
    "IncrementalMarkdownRenderer",
    "stream_answer",
    "StreamResult",
]
