from tagerpro.client.api import ApiError, TagerProClient
from tagerpro.client.locale import LocaleContext
from tagerpro.client.relay import AccumulationUpdated, GenerationFailed, RelayEvent, TextChunkRelay
from tagerpro.client.session import GenerationSession

__all__ = [
    "AccumulationUpdated",
    "ApiError",
    "GenerationFailed",
    "GenerationSession",
    "LocaleContext",
    "RelayEvent",
    "TagerProClient",
    "TextChunkRelay",
]
