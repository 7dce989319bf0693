import logging
from collections.abc import AsyncIterable, AsyncIterator
from typing import Protocol

import anyio

from tagerpro.ai.framing import DONE_SENTINEL, encode_payload

logger = logging.getLogger(__name__)

MID_STREAM_ERROR = "Failed to generate"


class TextStream(Protocol):
    def __aiter__(self) -> AsyncIterator[str]: ...

    async def aclose(self) -> None: ...


async def relay_completion(stream: TextStream, *, label: str = "generation") -> AsyncIterable[str]:
    """
    Re-frame provider text fragments as ``data:`` payloads for the client.

    Yields one ``{"content": ...}`` payload per fragment and the ``[DONE]``
    sentinel at the end. A provider failure after the first byte went out
    becomes a single ``{"error": ...}`` payload with no sentinel. The provider
    stream is closed on every exit path, including client disconnects.
    """
    fragments = 0
    try:
        async for fragment in stream:
            fragments += 1
            yield encode_payload({"content": fragment})
        yield DONE_SENTINEL
        logger.info("Finished %s stream after %s fragment(s)", label, fragments)
    except Exception as exc:
        logger.error("Error streaming %s after %s fragment(s): %s", label, fragments, exc)
        yield encode_payload({"error": MID_STREAM_ERROR})
    finally:
        with anyio.CancelScope(shield=True):
            await stream.aclose()
