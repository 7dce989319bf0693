"""Client side of a streamed generation.

``TextChunkRelay.stream`` posts a ``GenerationRequest`` to its backend
endpoint and yields the growing result. Each ``AccumulationUpdated`` carries
the whole text received so far, so a consumer simply replaces what it shows.
"""
import json
import logging
from collections.abc import AsyncIterator
from contextlib import aclosing

import httpx
from pydantic import BaseModel

from tagerpro.ai.framing import FrameDecoder
from tagerpro.ai.request_builder import GenerationRequest
from tagerpro.core.config import settings

logger = logging.getLogger(__name__)

DEFAULT_FAILURE = "Failed to generate"


class AccumulationUpdated(BaseModel):
    text: str


class GenerationFailed(BaseModel):
    message: str


RelayEvent = AccumulationUpdated | GenerationFailed


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return f"{DEFAULT_FAILURE} (HTTP {response.status_code})"
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return f"{DEFAULT_FAILURE} (HTTP {response.status_code})"


class TextChunkRelay:
    def __init__(
        self,
        base_url: str | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = 60.0,
    ):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = client is None

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def stream(self, request: GenerationRequest) -> AsyncIterator[RelayEvent]:
        """
        Yield accumulation updates until the stream ends.

        At most one ``GenerationFailed`` is yielded and it is always the last
        event. Cancelling the consuming task closes the response and yields
        nothing further.
        """
        url = f"{self.base_url}{request.endpoint}"
        accumulated = ""
        try:
            async with self._client.stream(
                "POST",
                url,
                json=request.body(),
                headers={"Accept": "text/event-stream"},
            ) as response:
                if not response.is_success:
                    await response.aread()
                    message = _error_message(response)
                    logger.warning("Generation request to %s rejected (%s): %s", url, response.status_code, message)
                    yield GenerationFailed(message=message)
                    return

                async with aclosing(_records(response)) as records:
                    async for record in records:
                        if "error" in record:
                            yield GenerationFailed(message=str(record["error"] or DEFAULT_FAILURE))
                            return
                        content = record.get("content")
                        if isinstance(content, str) and content:
                            accumulated += content
                            yield AccumulationUpdated(text=accumulated)
        except httpx.HTTPError as exc:
            logger.error("Generation stream from %s failed: %s", url, exc)
            yield GenerationFailed(message=DEFAULT_FAILURE)


async def _records(response: httpx.Response) -> AsyncIterator[dict]:
    decoder = FrameDecoder()
    async for chunk in response.aiter_bytes():
        for record in decoder.feed(chunk):
            yield record
        if decoder.finished:
            return
    for record in decoder.close():
        yield record
