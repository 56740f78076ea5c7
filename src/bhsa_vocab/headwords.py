"""Canonical headword spellings from the Open Scriptures Hebrew lexicon.

The lexicon index maps ``(pos, consonantal skeleton)`` to one pointed
spelling. It is built once per run and shared read-only by every book build.
Keys with competing spellings are dropped rather than guessed.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

from bhsa_vocab.normalization import has_hebrew_pointing, hebrew_letters_only

logger = logging.getLogger(__name__)

# Lexicon languages counted as the corpus's own (Hebrew, proper names)
PREFERRED_LANGUAGES = frozenset({"heb", "x-pn"})

# Checked in order; first matching prefix wins
LEXICON_POS_PREFIXES = (
    ("v", "verb"),
    ("n-pr", "proper noun"),
    ("n", "noun"),
    ("adv", "adverb"),
    ("a", "adjective"),
    ("prep", "preposition"),
    ("conj", "conjunction"),
    ("pron", "pronoun"),
    ("interj", "interjection"),
    ("inj", "interjection"),
)

_XML_LANG = "{http://www.w3.org/XML/1998/namespace}lang"


@dataclass(frozen=True)
class LexiconEntry:
    pos: str  # raw lexicon code, e.g. "n-m", "v", "n-pr-f"
    language: str
    pointed: str


def normalize_lexicon_pos(raw_pos: str) -> str | None:
    pos = raw_pos.strip().lower()
    for prefix, display in LEXICON_POS_PREFIXES:
        if pos.startswith(prefix):
            return display
    return None


def _strip_ns(tag: str) -> str:
    return tag.split("}", 1)[-1]


def parse_strong_lexicon(path: Path) -> Iterator[LexiconEntry]:
    """Yield the headword of every entry in a HebrewStrong.xml file.

    Only the first ``<w>`` of an entry is the headword; entries without a
    ``pos`` attribute, a language or a spelling are skipped.
    """
    tree = ET.parse(path)
    for entry in tree.getroot().iter():
        if _strip_ns(entry.tag) != "entry":
            continue
        word = next((el for el in entry if _strip_ns(el.tag) == "w"), None)
        if word is None:
            continue
        pos = word.get("pos")
        language = word.get(_XML_LANG)
        pointed = (word.text or "").strip()
        if not pos or not language or not pointed:
            continue
        yield LexiconEntry(pos=pos, language=language.strip().lower(), pointed=pointed)


class HeadwordIndex(Mapping[tuple[str, str], str]):
    """Read-only ``(normalized pos, skeleton) -> pointed spelling`` lookup."""

    def __init__(self, headwords: Mapping[tuple[str, str], str] | None = None) -> None:
        self._headwords = MappingProxyType(dict(headwords or {}))

    @classmethod
    def from_entries(cls, entries: Iterable[LexiconEntry]) -> HeadwordIndex:
        preferred: dict[tuple[str, str], set[str]] = {}
        fallback: dict[tuple[str, str], set[str]] = {}

        for entry in entries:
            pos = normalize_lexicon_pos(entry.pos)
            if pos is None:
                continue
            skeleton = hebrew_letters_only(entry.pointed)
            if not skeleton:
                continue
            target = preferred if entry.language in PREFERRED_LANGUAGES else fallback
            target.setdefault((pos, skeleton), set()).add(entry.pointed)

        headwords: dict[tuple[str, str], str] = {}
        dropped = 0
        for key in sorted(preferred.keys() | fallback.keys()):
            candidates = preferred.get(key) or fallback.get(key, set())
            if len(candidates) == 1:
                headwords[key] = next(iter(candidates))
            else:
                dropped += 1

        logger.info(
            "Headword index: %d keys kept, %d ambiguous keys dropped",
            len(headwords),
            dropped,
        )
        return cls(headwords)

    @classmethod
    def from_file(cls, path: Path) -> HeadwordIndex:
        logger.info("Loading lexicon from %s", path)
        return cls.from_entries(parse_strong_lexicon(path))

    def __getitem__(self, key: tuple[str, str]) -> str:
        return self._headwords[key]

    def __iter__(self):
        return iter(self._headwords)

    def __len__(self) -> int:
        return len(self._headwords)


def choose_display_headword(
    lexeme: str,
    normalized_pos: str,
    pointed_lexeme: str,
    index: Mapping[tuple[str, str], str],
) -> str:
    """Pick the display spelling for a lemma.

    Preference order: the corpus's own pointed lexeme when it matches the
    consonantal lexeme and is actually pointed; the lexicon spelling; the
    corpus form when it matches but is unpointed; the bare lexeme.
    """
    matches_lexeme = bool(pointed_lexeme) and hebrew_letters_only(pointed_lexeme) == lexeme
    if matches_lexeme and has_hebrew_pointing(pointed_lexeme):
        return pointed_lexeme

    lexicon_headword = index.get((normalized_pos, lexeme))
    if lexicon_headword:
        return lexicon_headword

    if matches_lexeme:
        return pointed_lexeme
    return lexeme
