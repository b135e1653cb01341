from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


LANGUAGE_NAMES: Dict[str, str] = {
    "en": "English",
    "nl": "Dutch",
    "tr": "Turkish",
    "de": "German",
    "fr": "French",
    "es": "Spanish",
    "it": "Italian",
    "pt": "Portuguese",
    "ru": "Russian",
    "zh": "Chinese",
    "ja": "Japanese",
    "ko": "Korean",
    "ar": "Arabic",
    "hi": "Hindi",
    "pl": "Polish",
    "uk": "Ukrainian",
    "sv": "Swedish",
    "da": "Danish",
    "fi": "Finnish",
    "no": "Norwegian",
    "cs": "Czech",
    "el": "Greek",
    "he": "Hebrew",
    "th": "Thai",
    "vi": "Vietnamese",
    "id": "Indonesian",
    "ms": "Malay",
    "ro": "Romanian",
    "hu": "Hungarian",
    "bg": "Bulgarian",
    "hr": "Croatian",
    "sk": "Slovak",
    "sl": "Slovenian",
    "et": "Estonian",
    "lv": "Latvian",
    "lt": "Lithuanian",
}


@dataclass(frozen=True)
class LanguageSpec:
    """A language code paired with the name used inside prompts."""

    code: str
    name: str


def language_name(code: str) -> str:
    return LANGUAGE_NAMES.get(code.lower(), code)


def resolve_language(code: str) -> LanguageSpec:
    """Resolve a CLI language code; unknown codes are their own display name."""
    return LanguageSpec(code=code, name=language_name(code))


def describe_languages() -> str:
    return ", ".join(f"{code} ({name})" for code, name in LANGUAGE_NAMES.items())
