import logging
from collections.abc import AsyncIterator
from typing import Any

from openai import AsyncOpenAI

from tagerpro.core.config import settings

logger = logging.getLogger(__name__)

# Model families that only accept max_completion_tokens on chat completions.
_COMPLETION_TOKEN_MODELS = ("gpt-5", "gpt-4.1", "o1", "o3", "o4")


class CompletionStream:
    """Text fragments of an open streamed chat completion."""

    def __init__(self, raw: Any, model_name: str):
        self._raw = raw
        self.model_name = model_name
        self._closed = False

    async def __aiter__(self) -> AsyncIterator[str]:
        async for chunk in self._raw:
            choices = getattr(chunk, "choices", None)
            if not choices:
                continue
            delta = getattr(choices[0], "delta", None)
            content = getattr(delta, "content", None) if delta is not None else None
            if content:
                yield content

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._raw.close()
        logger.info("Closed completion stream from %s", self.model_name)


class LLMClient:
    """Provider-agnostic streaming client using the OpenAI chat completions API."""

    def __init__(
        self,
        model_name: str | None = None,
        base_url: str | None = None,
        api_key: str | None = None,
    ):
        self.model_name = model_name or settings.MODEL_DEFAULT

        resolved_api_key = api_key or settings.LLM_API_KEY or settings.OPENAI_API_KEY
        resolved_base_url = base_url or settings.LLM_BASE_URL

        self.client = AsyncOpenAI(
            base_url=resolved_base_url,
            api_key=resolved_api_key,
        )

    def _chat_completion_kwargs(self, *, max_tokens: int | None) -> dict:
        """Build provider/model-compatible kwargs for chat completions."""
        if max_tokens is None:
            return {}
        model_name = (self.model_name or "").lower()
        if model_name.startswith(_COMPLETION_TOKEN_MODELS):
            return {"max_completion_tokens": max_tokens}
        return {"max_tokens": max_tokens}

    async def open_stream(self, prompt: str, *, max_tokens: int | None = None) -> CompletionStream:
        """
        Open a streamed completion for a single user prompt.
        Raises before returning if the provider rejects the request, so callers
        can still answer with a plain error response.
        """
        logger.info("Opening completion stream on model %s...", self.model_name)
        try:
            raw = await self.client.chat.completions.create(
                model=self.model_name,
                messages=[{"role": "user", "content": prompt}],
                stream=True,
                **self._chat_completion_kwargs(max_tokens=max_tokens),
            )
        except Exception as e:
            logger.error("Error opening completion stream on %s: %s", self.model_name, e)
            raise
        return CompletionStream(raw, self.model_name)
