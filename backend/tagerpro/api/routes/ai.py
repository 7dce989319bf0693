import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict
from sse_starlette.sse import EventSourceResponse

from tagerpro.ai.passthrough import relay_completion
from tagerpro.ai.request_builder import (
    TOOL_SPECS,
    GenerationTool,
    MissingFieldError,
    build_generation_request,
)
from tagerpro.api.deps import LLMDep

router = APIRouter()
logger = logging.getLogger(__name__)

STREAM_HEADERS = {
    "Cache-Control": "no-cache, no-transform",
    "X-Accel-Buffering": "no",
}


class GenerationPayload(BaseModel):
    """Tool-specific fields (productName, price, ...) plus the target language."""

    model_config = ConfigDict(extra="allow")

    language: str = "en"


async def _stream_tool(tool: GenerationTool, payload: GenerationPayload, llm: LLMDep) -> EventSourceResponse:
    tool_spec = TOOL_SPECS[tool]
    try:
        request = build_generation_request(tool, payload.model_extra or {}, payload.language)
    except MissingFieldError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    try:
        stream = await llm.open_stream(request.prompt, max_tokens=tool_spec.max_tokens)
    except Exception as exc:
        logger.error("Error starting %s generation: %s", tool.value, exc)
        raise HTTPException(status_code=500, detail=tool_spec.failure_message) from exc

    return EventSourceResponse(
        relay_completion(stream, label=tool.value),
        headers=STREAM_HEADERS,
        sep="\n",
    )


@router.post("/generate-description")
async def generate_description(payload: GenerationPayload, llm: LLMDep) -> EventSourceResponse:
    return await _stream_tool(GenerationTool.DESCRIPTION, payload, llm)


@router.post("/generate-ad-copy")
async def generate_ad_copy(payload: GenerationPayload, llm: LLMDep) -> EventSourceResponse:
    return await _stream_tool(GenerationTool.AD_COPY, payload, llm)


@router.post("/suggest-price")
async def suggest_price(payload: GenerationPayload, llm: LLMDep) -> EventSourceResponse:
    return await _stream_tool(GenerationTool.PRICE, payload, llm)


@router.post("/campaign-ideas")
async def campaign_ideas(payload: GenerationPayload, llm: LLMDep) -> EventSourceResponse:
    return await _stream_tool(GenerationTool.CAMPAIGN, payload, llm)
