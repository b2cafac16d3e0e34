"""Script detection and bilingual (English/Arabic) line segmentation."""

import re
from enum import Enum
from typing import NamedTuple

from pdf2checklist.models import Language

# Arabic, Arabic Supplement, Arabic Extended-A
ARABIC_RE = re.compile(r"[\u0600-\u06FF\u0750-\u077F\u08A0-\u08FF]")
LATIN_RE = re.compile(r"[A-Za-z]")

# Numbers and punctuation stay with the English stream
NEUTRAL_TOKEN_RE = re.compile(r"^[\d.():\-,]+$")


class Script(str, Enum):
    ARABIC = "arabic"
    ENGLISH = "english"
    MIXED = "mixed"


class BilingualText(NamedTuple):
    en: str
    ar: str

    def for_language(self, language: Language) -> str:
        return self.en if language == "en" else self.ar


def is_arabic(text: str) -> bool:
    """Check whether text contains any Arabic-range code point."""
    return ARABIC_RE.search(text) is not None


def is_english(text: str) -> bool:
    """Check whether text contains Latin letters and no Arabic."""
    return LATIN_RE.search(text) is not None and not is_arabic(text)


def classify_script(text: str) -> Script:
    """Classify text as Arabic-bearing, English or mixed/other."""
    if is_arabic(text):
        return Script.ARABIC
    if is_english(text):
        return Script.ENGLISH
    return Script.MIXED


def matches_language(text: str, language: Language) -> bool:
    """Check whether the dominant script of text is the given language."""
    return is_english(text) if language == "en" else is_arabic(text)


def separate_languages(text: str) -> BilingualText:
    """Split a possibly mixed-language line into English and Arabic streams.

    Each whitespace-separated token is routed independently: Arabic-bearing
    tokens go to the Arabic stream; English tokens and purely numeric or
    punctuation tokens (e.g. "1.19.") go to the English stream. Anything else
    is dropped.

    Args:
        text: A line of text

    Returns:
        BilingualText with both streams joined by single spaces
    """
    english_words = []
    arabic_words = []

    for word in text.split():
        if is_arabic(word):
            arabic_words.append(word)
        elif is_english(word) or NEUTRAL_TOKEN_RE.match(word):
            english_words.append(word)

    return BilingualText(en=" ".join(english_words), ar=" ".join(arabic_words))
