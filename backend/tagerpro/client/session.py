import asyncio
import logging
from collections.abc import Callable, Mapping
from typing import Any

from tagerpro.ai.request_builder import GenerationRequest, GenerationTool, build_generation_request
from tagerpro.client.locale import LocaleContext
from tagerpro.client.relay import AccumulationUpdated, GenerationFailed, TextChunkRelay

logger = logging.getLogger(__name__)

UpdateCallback = Callable[[str], Any]
FailureCallback = Callable[[str], Any]


class GenerationSession:
    """
    Owns the one in-flight generation of a client session.

    Starting a generation cancels the previous one first, so two streams can
    never write into the same result slot. Concurrent ``start`` calls are
    serialized; the last one wins. Cancellation is silent: neither callback
    fires for it.
    """

    def __init__(self, relay: TextChunkRelay, locale: LocaleContext | None = None):
        self.relay = relay
        self.locale = locale or LocaleContext()
        self._active: asyncio.Task | None = None
        self._lock = asyncio.Lock()

    @property
    def is_generating(self) -> bool:
        return self._active is not None and not self._active.done()

    async def cancel(self) -> bool:
        async with self._lock:
            return await self._cancel_active()

    async def start(
        self,
        request: GenerationRequest,
        on_update: UpdateCallback,
        on_failure: FailureCallback | None = None,
    ) -> asyncio.Task:
        async with self._lock:
            await self._cancel_active()
            self._active = asyncio.create_task(self._run(request, on_update, on_failure))
            return self._active

    async def generate(
        self,
        tool: GenerationTool | str,
        fields: Mapping[str, Any],
        on_update: UpdateCallback,
        on_failure: FailureCallback | None = None,
    ) -> asyncio.Task:
        request = build_generation_request(tool, fields, self.locale.language)
        return await self.start(request, on_update, on_failure)

    async def _cancel_active(self) -> bool:
        task, self._active = self._active, None
        if task is None or task.done():
            return False
        task.cancel()
        # asyncio.wait never raises the task's CancelledError, only the caller's own
        await asyncio.wait([task])
        logger.info("Cancelled in-flight generation")
        return True

    async def _run(
        self,
        request: GenerationRequest,
        on_update: UpdateCallback,
        on_failure: FailureCallback | None,
    ) -> None:
        async for event in self.relay.stream(request):
            if isinstance(event, AccumulationUpdated):
                on_update(event.text)
            elif isinstance(event, GenerationFailed):
                if on_failure is not None:
                    on_failure(event.message)
                else:
                    on_update(self.locale.error_message())
