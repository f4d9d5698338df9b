"""Shared helpers for word normalization."""

from __future__ import annotations

import re

FRENCH_DIACRITICS = {
    "à": "a",
    "â": "a",
    "ä": "a",
    "ç": "c",
    "é": "e",
    "è": "e",
    "ê": "e",
    "ë": "e",
    "î": "i",
    "ï": "i",
    "ô": "o",
    "ö": "o",
    "ù": "u",
    "û": "u",
    "ü": "u",
    "ÿ": "y",
    "œ": "oe",
    "æ": "ae",
}

WORD_RE = re.compile(r"[^A-Za-z]")


def clean_word(text: str) -> str:
    """Return a normalized uppercase ASCII representation of ``text``.

    Accented letters are folded to their base letter, ligatures expanded and
    anything that is not a letter (hyphens, apostrophes, spaces) dropped, so
    ``"chef-d'œuvre"`` becomes ``"CHEFDOEUVRE"``.
    """

    if not text:
        return ""
    transformed = []
    for char in text:
        lowered = char.lower()
        if lowered in FRENCH_DIACRITICS:
            transformed.append(FRENCH_DIACRITICS[lowered])
        elif char.isalpha():
            transformed.append(char)
    ascii_word = WORD_RE.sub("", "".join(transformed))
    return ascii_word.upper()


__all__ = ["clean_word", "FRENCH_DIACRITICS"]
