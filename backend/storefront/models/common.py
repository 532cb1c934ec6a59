from typing import Literal

from pydantic import BaseModel, Field, field_validator

Language = Literal["en", "ar"]
LANGUAGES: tuple[str, ...] = ("en", "ar")
DEFAULT_LANGUAGE: Language = "en"


def is_language(value: object) -> bool:
    return isinstance(value, str) and value in LANGUAGES


class LocalizedText(BaseModel):
    """Parallel English/Arabic strings for the same content. Both are required."""

    en: str = Field(..., min_length=1)
    ar: str = Field(..., min_length=1)

    @field_validator("en", "ar")
    @classmethod
    def not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    def get(self, lang: str) -> str:
        return localize(self, lang)


def localize(text: LocalizedText | dict | None, lang: str) -> str:
    """Return text in lang; falls back to English, then to "" when nothing is set."""
    if text is None:
        return ""
    if isinstance(text, LocalizedText):
        values = {"en": text.en, "ar": text.ar}
    else:
        values = text
    if is_language(lang) and values.get(lang):
        return values[lang]
    return values.get(DEFAULT_LANGUAGE) or ""
