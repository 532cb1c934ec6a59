"""
URL slugs for bilingual names.

A slug keeps ASCII letters/digits, hyphens and the language's own script
(Arabic for "ar"). Output never has leading, trailing or repeated hyphens, so
slugify(slugify(x)) == slugify(x).
"""
import re
import unicodedata

from storefront.models.common import LANGUAGES, LocalizedText

# Arabic letters and digits; diacritics, tatweel and Arabic punctuation are dropped
_ARABIC_CHARS = "\u0621-\u063f\u0641-\u064a\u0660-\u0669\u0671-\u06d3\u06f0-\u06f9"

_DISALLOWED = {
    "en": re.compile(r"[^a-z0-9-]"),
    "ar": re.compile(rf"[^a-z0-9{_ARABIC_CHARS}-]"),
}
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-{2,}")


def slugify(text: str | None, lang: str = "en") -> str:
    if not text:
        return ""
    if lang == "en":
        # fold accents ("Café" -> "cafe")
        text = unicodedata.normalize("NFKD", text)
        text = text.encode("ascii", "ignore").decode("ascii")
    else:
        # presentation forms -> base letters
        text = unicodedata.normalize("NFKC", text)
    text = _WHITESPACE.sub("-", text.lower())
    text = _DISALLOWED.get(lang, _DISALLOWED["en"]).sub("", text)
    text = _HYPHENS.sub("-", text)
    return text.strip("-")


def bilingual_slug(name: LocalizedText) -> dict[str, str]:
    """Slug per language from a bilingual display name; values may be empty."""
    return {lang: slugify(name.get(lang), lang) for lang in LANGUAGES}
