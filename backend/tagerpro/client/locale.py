import json
import logging
from pathlib import Path

from tagerpro.ai.request_builder import Language, normalize_language

logger = logging.getLogger(__name__)

ERROR_MESSAGES: dict[str, str] = {
    "en": "An error occurred. Please try again.",
    "ar": "حدث خطأ، يرجى المحاولة مرة أخرى.",
}

RTL_LANGUAGES = frozenset({"ar"})


class LocaleContext:
    """Current UI language, loaded once at start and written back on every change."""

    def __init__(self, language: str = "en", path: Path | str | None = None):
        self.language: Language = normalize_language(language)
        self.path = Path(path) if path is not None else None

    @classmethod
    def load(cls, path: Path | str) -> "LocaleContext":
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return cls(path=path)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Ignoring unreadable locale file %s: %s", path, exc)
            return cls(path=path)
        language = data.get("language") if isinstance(data, dict) else None
        return cls(language=language or "en", path=path)

    @property
    def is_rtl(self) -> bool:
        return self.language in RTL_LANGUAGES

    def set_language(self, language: str) -> None:
        self.language = normalize_language(language)
        self._persist()

    def toggle(self) -> Language:
        self.set_language("en" if self.language == "ar" else "ar")
        return self.language

    def error_message(self) -> str:
        return ERROR_MESSAGES[self.language]

    def _persist(self) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"language": self.language}), encoding="utf-8")
