"""Token normalization for BHSA-tagged words.

Maps the raw tag vocabulary on each token to display classes, grouping keys
and cleaned glosses, and rebuilds readable verse text from tagged tokens.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from bhsa_vocab.models import POINTED_FORM, RAW_FORM, RawPosTag, RawToken

# BHSA part-of-speech code -> display class
POS_DISPLAY = {
    "verb": "verb",
    "subs": "noun",
    "nmpr": "proper noun",
    "advb": "adverb",
    "adjv": "adjective",
    "prps": "preposition",
    "prde": "pronoun",
    "conj": "conjunction",
    "intj": "interjection",
    "nega": "negative",
    "inrg": "interrogative",
    "art": "article",
    "prep": "preposition",
}

FUNCTION_POS_CODES = frozenset({"prep", "conj", "art", "prde", "prps"})

# Single-letter particles of these classes attach to the following word
CLITIC_POS_CODES = frozenset({"prep", "conj", "art", "prps", "prde"})

MAQAF = "\u05be"

# Cantillation accents and vowel points; maqaf and sof pasuq are kept
_MARKS_RE = re.compile("[\u0591-\u05bd\u05bf\u05c1\u05c2\u05c4\u05c5\u05c7]")
_NON_LETTER_RE = re.compile("[^\u05d0-\u05ea]")
_MARKUP_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")


def is_participial_form(pos_tag: RawPosTag | None) -> bool:
    return bool(pos_tag and pos_tag.vt.startswith("ptc"))


def normalize_pos(pos_tag: RawPosTag | None) -> str:
    """Return the display class for a token's part of speech.

    Substantives carrying a participle tense are counted as verbs. Codes
    outside the table pass through unchanged.
    """
    if not pos_tag or not pos_tag.pdp:
        return "unknown"
    if pos_tag.pdp == "subs" and is_participial_form(pos_tag):
        return "verb"
    return POS_DISPLAY.get(pos_tag.pdp, pos_tag.pdp)


def is_function_word(pos_tag: RawPosTag | None) -> bool:
    return bool(pos_tag and pos_tag.pdp in FUNCTION_POS_CODES)


def clean_gloss(gloss: str | None) -> str:
    if not gloss:
        return ""
    without_markup = _MARKUP_RE.sub(" ", gloss)
    return _WHITESPACE_RE.sub(" ", without_markup).strip()


def normalize_lexeme(raw: str | None) -> str:
    """Strip all whitespace. Grouping only, never shown to users."""
    if not raw:
        return ""
    return _WHITESPACE_RE.sub("", raw)


def build_lemma_id(lexeme: str, normalized_pos: str) -> str:
    return f"{normalized_pos}::{lexeme}"


def strip_hebrew_diacritics(text: str) -> str:
    return _MARKS_RE.sub("", text)


def hebrew_letters_only(text: str) -> str:
    """Consonantal skeleton: the bare Hebrew letters of ``text``."""
    return _NON_LETTER_RE.sub("", strip_hebrew_diacritics(text))


def has_hebrew_pointing(text: str) -> bool:
    return bool(_MARKS_RE.search(text))


def _attaches_to_next(
    pos_tag: RawPosTag | None,
    display_text: str,
    has_maqaf: bool,
    has_trailing_space: bool,
) -> bool:
    if has_trailing_space:
        return False
    if has_maqaf:
        return True
    if not pos_tag or pos_tag.pdp not in CLITIC_POS_CODES:
        return False
    return len(hebrew_letters_only(display_text)) == 1


def assemble_verse_text(tokens: Iterable[RawToken]) -> str:
    """Rebuild the surface text of a verse from its tagged tokens.

    Tokens with an empty display form contribute nothing. A maqaf on the raw
    form joins the next word, and one-letter clitics (conjunction waw,
    article he, inseparable prepositions) are written solid with their host.
    """
    parts: list[str] = []
    for token in tokens:
        display_text = token.form(POINTED_FORM)
        if not display_text:
            continue

        raw_form = token.word_forms[RAW_FORM]
        trimmed_raw = raw_form.rstrip()
        has_trailing_space = len(trimmed_raw) != len(raw_form)
        has_maqaf = trimmed_raw.endswith(MAQAF)

        if has_maqaf and not display_text.endswith(MAQAF):
            display_text += MAQAF
        parts.append(display_text)

        if not _attaches_to_next(
            token.pos_tag, token.form(POINTED_FORM), has_maqaf, has_trailing_space
        ):
            parts.append(" ")

    return "".join(parts).strip()
