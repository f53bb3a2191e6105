import logging
from datetime import date
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, AsyncIterator, Dict, List, Optional

import httpx
from pydantic import BaseModel

from aiask.config import Settings
from aiask.errors import TransportError, UnreadableStreamError

ONLINE_SUFFIX = ":online"
WEB_PLUGIN_ID = "web"
HEADERS = {"Content-Type": "application/json", "Accept": "text/event-stream"}
SEARCH_PROMPT = (
    "A web search was conducted on {current_date}. "
    "Use the following web search results to answer the user's question.\n\n"
    "IMPORTANT: Do NOT include URLs or citations in your answer. "
    "Just provide a clean, natural response based on the information found. "
    "The sources will be displayed separately."
)

logger = logging.getLogger(__name__)


class ChatMessage(BaseModel):  # type: ignore
    role: str
    content: str
    name: Optional[str] = None


def effective_model(model: str, use_search: bool) -> str:
    if use_search and ONLINE_SUFFIX not in model:
        return model + ONLINE_SUFFIX
    return model


def format_search_date(today: date) -> str:
    return f"{today:%B} {today.day}, {today.year}"


def build_messages(command: str, system_prompt: Optional[str] = None) -> List[ChatMessage]:
    messages: List[ChatMessage] = []
    if system_prompt:
        messages.append(ChatMessage(role="system", content=system_prompt))
    messages.append(ChatMessage(role="user", content=command))
    return messages


def build_request(
    command: str,
    settings: Settings,
    use_search: bool,
    today: Optional[date] = None,
) -> Dict[str, Any]:
    messages = build_messages(command, settings.system_prompt)
    payload: Dict[str, Any] = {
        "model": effective_model(settings.model, use_search),
        "messages": [m.model_dump(exclude_none=True) for m in messages],
        "stream": True,
    }
    if use_search:
        current_date = format_search_date(today or date.today())
        payload["plugins"] = [
            {
                "id": WEB_PLUGIN_ID,
                "max_results": settings.web_search_max_results,
                "search_prompt": SEARCH_PROMPT.format(current_date=current_date),
            }
        ]
    return payload


class ChunkStream:
    def __init__(self, response: httpx.Response) -> None:
        if not isinstance(response.stream, httpx.AsyncByteStream):
            raise UnreadableStreamError()
        self._response = response
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def __aiter__(self) -> AsyncIterator[str]:
        return self._iter_text()

    async def _iter_text(self) -> AsyncGenerator[str, None]:
        try:
            async for chunk in self._response.aiter_text():
                if chunk:
                    yield chunk
        except (httpx.HTTPError, httpx.StreamError) as e:
            raise TransportError(f"Error while reading the response: {e}") from e

    async def cancel(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._response.aclose()


@asynccontextmanager
async def open_stream(
    payload: Dict[str, Any],
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> AsyncGenerator[ChunkStream, None]:
    url = f"{settings.base_url}/chat/completions"
    headers = {**HEADERS, **settings.headers}
    timeout = httpx.Timeout(connect=10, pool=None, read=None, write=None)
    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        request = client.build_request("POST", url, json=payload, headers=headers)
        try:
            response = await client.send(request, stream=True)
        except httpx.HTTPError as e:
            raise TransportError(f"Request to {url} failed: {e}") from e

        try:
            stream = ChunkStream(response)
        except UnreadableStreamError:
            await response.aclose()
            raise
        try:
            if not response.is_success:
                try:
                    await response.aread()
                    error_text = response.text
                except httpx.HTTPError:
                    error_text = ""
                raise TransportError(error_text, status_code=response.status_code)
            logger.info("Streaming response from %s", url)
            yield stream
        finally:
            await stream.cancel()
