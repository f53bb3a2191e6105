import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ValidationError

from aiask.citations import Citation, UNTITLED
from aiask.sse import DONE_SENTINEL

URL_CITATION_TYPE = "url_citation"

logger = logging.getLogger(__name__)


class UrlCitationModel(BaseModel):  # type: ignore
    url: Optional[str] = None
    title: Optional[str] = None
    content: Optional[str] = None


class AnnotationModel(BaseModel):  # type: ignore
    type: Optional[str] = None
    url_citation: Optional[UrlCitationModel] = None


class DeltaModel(BaseModel):  # type: ignore
    content: Optional[str] = None
    annotations: Any = None


class ChoiceModel(BaseModel):  # type: ignore
    delta: Optional[DeltaModel] = None
    message: Optional[DeltaModel] = None


class ChunkModel(BaseModel):  # type: ignore
    choices: List[ChoiceModel] = []


@dataclass(frozen=True)
class ContentDelta:
    text: str


@dataclass(frozen=True)
class CitationFound:
    citation: Citation


@dataclass(frozen=True)
class StreamEnd:
    pass


StreamEvent = Union[ContentDelta, CitationFound, StreamEnd]


def _extract_citations(annotations: Any) -> List[Citation]:
    if not isinstance(annotations, list):
        return []
    citations: List[Citation] = []
    for entry in annotations:
        try:
            annotation = AnnotationModel.model_validate(entry)
        except ValidationError:
            logger.debug("Skipping malformed annotation: %.80r", entry)
            continue
        if annotation.type != URL_CITATION_TYPE or annotation.url_citation is None:
            continue
        record = annotation.url_citation
        if not record.url:
            continue
        citations.append(
            Citation(url=record.url, title=record.title or UNTITLED, content=record.content)
        )
    return citations


def parse_payload(payload: str) -> List[StreamEvent]:
    if payload == DONE_SENTINEL:
        return [StreamEnd()]

    try:
        chunk = ChunkModel.model_validate_json(payload)
    except ValidationError:
        logger.debug("Skipping malformed payload: %.80s", payload)
        return []

    if not chunk.choices:
        return []
    choice = chunk.choices[0]

    events: List[StreamEvent] = []
    delta = choice.delta
    if delta is not None and delta.content:
        events.append(ContentDelta(delta.content))

    annotations = delta.annotations if delta is not None else None
    if not annotations and choice.message is not None:
        annotations = choice.message.annotations
    events.extend(CitationFound(citation) for citation in _extract_citations(annotations))
    return events
