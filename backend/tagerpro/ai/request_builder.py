from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, Field

from tagerpro.ai import prompts

Language = Literal["en", "ar"]


class GenerationTool(str, Enum):
    DESCRIPTION = "description"
    AD_COPY = "adCopy"
    PRICE = "price"
    CAMPAIGN = "campaign"


@dataclass(frozen=True)
class ToolSpec:
    endpoint: str
    required: tuple[str, ...]
    optional: tuple[str, ...]
    templates: dict[str, str]
    fragments: dict[str, dict[str, str]]
    max_tokens: int
    failure_message: str


TOOL_SPECS: dict[GenerationTool, ToolSpec] = {
    GenerationTool.DESCRIPTION: ToolSpec(
        endpoint="/api/ai/generate-description",
        required=("productName",),
        optional=("category",),
        templates=prompts.DESCRIPTION_PROMPTS,
        fragments=prompts.DESCRIPTION_FRAGMENTS,
        max_tokens=256,
        failure_message="Failed to generate description",
    ),
    GenerationTool.AD_COPY: ToolSpec(
        endpoint="/api/ai/generate-ad-copy",
        required=("productName", "price"),
        optional=("offer",),
        templates=prompts.AD_COPY_PROMPTS,
        fragments=prompts.AD_COPY_FRAGMENTS,
        max_tokens=256,
        failure_message="Failed to generate ad copy",
    ),
    GenerationTool.PRICE: ToolSpec(
        endpoint="/api/ai/suggest-price",
        required=("productName",),
        optional=("description", "category"),
        templates=prompts.PRICE_PROMPTS,
        fragments=prompts.PRICE_FRAGMENTS,
        max_tokens=256,
        failure_message="Failed to suggest price",
    ),
    GenerationTool.CAMPAIGN: ToolSpec(
        endpoint="/api/ai/campaign-ideas",
        required=("productName",),
        optional=("targetAudience",),
        templates=prompts.CAMPAIGN_PROMPTS,
        fragments=prompts.CAMPAIGN_FRAGMENTS,
        max_tokens=512,
        failure_message="Failed to generate campaign ideas",
    ),
}


class MissingFieldError(ValueError):
    def __init__(self, tool: GenerationTool, fields: list[str]):
        self.tool = tool
        self.fields = fields
        super().__init__(f"Missing required field(s) for {tool.value}: {', '.join(fields)}")


class GenerationRequest(BaseModel):
    """A single AI tool invocation, built per user action and discarded afterwards."""

    tool: GenerationTool
    fields: dict[str, str] = Field(default_factory=dict)
    language: Language = "en"
    prompt: str
    endpoint: str

    def body(self) -> dict[str, str]:
        return {**self.fields, "language": self.language}


def normalize_language(language: str | None) -> Language:
    return "ar" if language == "ar" else "en"


def _clean_fields(fields: Mapping[str, Any]) -> dict[str, str]:
    cleaned: dict[str, str] = {}
    for key, value in fields.items():
        if value is None:
            continue
        text = value if isinstance(value, str) else str(value)
        if text.strip():
            cleaned[key] = text.strip()
    return cleaned


def build_generation_request(
    tool: GenerationTool | str,
    fields: Mapping[str, Any],
    language: str | None = "en",
) -> GenerationRequest:
    tool = GenerationTool(tool)
    tool_spec = TOOL_SPECS[tool]
    lang = normalize_language(language)
    values = _clean_fields(fields)

    missing = [name for name in tool_spec.required if name not in values]
    if missing:
        raise MissingFieldError(tool, missing)

    substitutions = {name: values[name] for name in tool_spec.required}
    for name in tool_spec.optional:
        value = values.get(name)
        substitutions[name] = tool_spec.fragments[lang][name].format(value=value) if value else ""

    known = tool_spec.required + tool_spec.optional
    return GenerationRequest(
        tool=tool,
        fields={name: values[name] for name in known if name in values},
        language=lang,
        prompt=tool_spec.templates[lang].format(**substitutions),
        endpoint=tool_spec.endpoint,
    )
