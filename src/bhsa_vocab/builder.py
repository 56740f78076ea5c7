"""Build per-book frequency artifacts and the catalog from the raw corpus.

The corpus is a directory of BHSA-derived JSON:

    <corpus>/books.json                      [{"english": ..., "hebrew": ...}]
    <corpus>/<Folder>/<Folder>_chapter_N.json {"<verse>": [token, ...]}

Every book is built independently and deterministically. A chapter that
cannot be read or parsed aborts its book; nothing is written for it.
"""

from __future__ import annotations

import argparse
import logging
import os
import re
import shutil
import sys
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from bhsa_vocab.book_names import to_book_id, to_dataset_folder, to_display_name
from bhsa_vocab.headwords import HeadwordIndex, choose_display_headword
from bhsa_vocab.models import (
    CONSONANTAL_FORM,
    CONSONANTAL_LEXEME,
    POINTED_FORM,
    POINTED_LEXEME,
    BookArtifact,
    Catalog,
    CatalogBook,
    ChapterStats,
    LemmaMeta,
    OccurrenceRef,
    RawBook,
    RawToken,
)
from bhsa_vocab.normalization import (
    assemble_verse_text,
    build_lemma_id,
    clean_gloss,
    is_function_word,
    normalize_lexeme,
    normalize_pos,
)
from bhsa_vocab.store import ArtifactStore

logger = logging.getLogger(__name__)

CHAPTER_FILE_RE = re.compile(r"_chapter_(\d+)\.json$")

_chapter_adapter = TypeAdapter(dict[str, list[RawToken]])
_books_adapter = TypeAdapter(list[RawBook])

# Verse number -> tokens in document order
ChapterData = Mapping[int, list[RawToken]]


class ArtifactBuildError(RuntimeError):
    """A book could not be built from its raw chapter files."""


@dataclass
class _LemmaDraft:
    lemma_id: str
    headword: str
    pos: str
    is_function_word: bool
    # lowercased gloss -> first spelling seen
    glosses: dict[str, str] = field(default_factory=dict)
    variants: set[str] = field(default_factory=set)


class LemmaRegistry:
    """Lemmas of one book, keyed by lemma id.

    ``record`` is the only way in: it creates the lemma on first sight,
    choosing its headword once, and folds every later token into it.
    """

    def __init__(self, headwords: Mapping[tuple[str, str], str]) -> None:
        self._headwords = headwords
        self._lemmas: dict[str, _LemmaDraft] = {}

    def record(
        self,
        lemma_id: str,
        *,
        pos: str,
        consonantal_lexeme: str,
        pointed_lexeme: str,
        function_word: bool,
        variant: str,
        gloss: str,
    ) -> None:
        lemma = self._lemmas.get(lemma_id)
        if lemma is None:
            lemma = _LemmaDraft(
                lemma_id=lemma_id,
                headword=choose_display_headword(
                    consonantal_lexeme, pos, pointed_lexeme, self._headwords
                ),
                pos=pos,
                is_function_word=function_word,
            )
            self._lemmas[lemma_id] = lemma

        lemma.is_function_word = lemma.is_function_word or function_word
        if variant:
            lemma.variants.add(variant)
        if gloss:
            lemma.glosses.setdefault(gloss.lower(), gloss)

    def finalize(self) -> dict[str, LemmaMeta]:
        """Lemmas sorted by id, glosses sorted, headword first in variants."""
        out: dict[str, LemmaMeta] = {}
        for lemma_id in sorted(self._lemmas):
            lemma = self._lemmas[lemma_id]
            variants = [lemma.headword]
            variants.extend(v for v in sorted(lemma.variants) if v != lemma.headword)
            out[lemma_id] = LemmaMeta(
                lemma_id=lemma_id,
                headword=lemma.headword,
                pos=lemma.pos,
                glosses=sorted(lemma.glosses.values()),
                variants=variants,
                is_function_word=lemma.is_function_word,
            )
        return out


@dataclass
class ChapterTally:
    chapter: int
    counts: dict[str, int] = field(default_factory=dict)
    gloss_counts: dict[str, dict[str, int]] = field(default_factory=dict)
    occurrences: dict[str, list[OccurrenceRef]] = field(default_factory=dict)

    def add(self, lemma_id: str, verse: int, form: str, gloss: str) -> None:
        self.counts[lemma_id] = self.counts.get(lemma_id, 0) + 1
        if gloss:
            histogram = self.gloss_counts.setdefault(lemma_id, {})
            histogram[gloss] = histogram.get(gloss, 0) + 1
        self.occurrences.setdefault(lemma_id, []).append(
            OccurrenceRef(verse=verse, form=form)
        )

    def to_stats(self) -> ChapterStats:
        return ChapterStats(
            chapter=self.chapter,
            counts=self.counts,
            gloss_counts=self.gloss_counts,
            occurrences=self.occurrences,
        )


def chapter_number(file_name: str) -> int | None:
    match = CHAPTER_FILE_RE.search(file_name)
    return int(match.group(1)) if match else None


def list_chapter_files(folder: Path) -> list[tuple[int, Path]]:
    """Chapter files of a book folder, sorted by chapter number."""
    chapters = []
    for path in folder.iterdir():
        number = chapter_number(path.name)
        if number is not None:
            chapters.append((number, path))
    return sorted(chapters)


def load_chapter(path: Path) -> dict[int, list[RawToken]]:
    """Parse a chapter file into verse number -> tokens, verses ascending.

    Verse keys that are not positive integers are ignored.
    """
    try:
        raw = _chapter_adapter.validate_json(path.read_bytes())
    except (OSError, ValidationError) as e:
        raise ArtifactBuildError(f"Failed to read chapter file {path}: {e}") from e

    verses: dict[int, list[RawToken]] = {}
    for key, tokens in raw.items():
        try:
            verse = int(key)
        except ValueError:
            logger.debug("Skipping non-numeric verse key %r in %s", key, path)
            continue
        if verse < 1:
            logger.debug("Skipping verse %d in %s", verse, path)
            continue
        verses[verse] = tokens
    return dict(sorted(verses.items()))


def grouping_lexemes(token: RawToken) -> tuple[str, str, str]:
    """Return ``(grouping, consonantal, pointed)`` lexemes for a token.

    Grouping prefers the vocalized lexeme, then the consonantal lexeme
    candidates, then the pointed surface form.
    """
    pointed_lexeme = token.form(POINTED_LEXEME)
    consonantal = normalize_lexeme(
        token.form(CONSONANTAL_LEXEME)
        or token.form(CONSONANTAL_FORM)
        or token.form(POINTED_FORM)
    )
    grouping = normalize_lexeme(pointed_lexeme or consonantal)
    return grouping, consonantal, pointed_lexeme


def assemble_book(
    book_id: str,
    chapters: Iterable[tuple[int, ChapterData]],
    headwords: Mapping[tuple[str, str], str],
) -> tuple[BookArtifact, list[int]]:
    """Fold chapters (in chapter order) into a book artifact.

    Returns the artifact and the highest verse number of each chapter.
    """
    registry = LemmaRegistry(headwords)
    stats: list[ChapterStats] = []
    verses: dict[str, str] = {}
    verses_per_chapter: list[int] = []

    expected = 1
    for number, chapter in chapters:
        if number != expected:
            raise ArtifactBuildError(
                f"Book {book_id}: expected chapter {expected}, found chapter {number}"
            )
        expected += 1

        tally = ChapterTally(chapter=number)
        verse_numbers = sorted(chapter)
        verses_per_chapter.append(verse_numbers[-1] if verse_numbers else 0)

        for verse in verse_numbers:
            tokens = chapter[verse]
            verses[f"{number}:{verse}"] = assemble_verse_text(tokens)

            for token in tokens:
                grouping, consonantal, pointed_lexeme = grouping_lexemes(token)
                if not grouping:
                    continue

                pos = normalize_pos(token.pos_tag)
                lemma_id = build_lemma_id(grouping, pos)
                gloss = clean_gloss(token.gloss)
                variant = token.form(POINTED_FORM) or consonantal

                registry.record(
                    lemma_id,
                    pos=pos,
                    consonantal_lexeme=consonantal,
                    pointed_lexeme=pointed_lexeme,
                    function_word=is_function_word(token.pos_tag),
                    variant=variant,
                    gloss=gloss,
                )
                tally.add(lemma_id, verse, variant, gloss)

        logger.debug(
            "%s %d: %d verses, %d lemmas",
            book_id,
            number,
            len(verse_numbers),
            len(tally.counts),
        )
        stats.append(tally.to_stats())

    artifact = BookArtifact(
        book_id=book_id,
        lemmas=registry.finalize(),
        chapters=stats,
        verses=verses,
    )
    return artifact, verses_per_chapter


def build_book(
    raw_book: RawBook,
    corpus_root: Path,
    headwords: Mapping[tuple[str, str], str],
) -> tuple[CatalogBook, BookArtifact]:
    """Build one book's artifact and catalog entry from its chapter files."""
    display_name = to_display_name(raw_book.english)
    book_id = to_book_id(display_name)
    folder = corpus_root / to_dataset_folder(raw_book.english)
    if not folder.is_dir():
        raise FileNotFoundError(f"Book folder not found: {folder}")

    chapter_files = list_chapter_files(folder)
    chapters = ((number, load_chapter(path)) for number, path in chapter_files)
    artifact, verses_per_chapter = assemble_book(book_id, chapters, headwords)

    catalog_book = CatalogBook(
        id=book_id,
        name=display_name,
        hebrew=raw_book.hebrew,
        chapters=len(chapter_files),
        verses_per_chapter=verses_per_chapter,
    )
    logger.info(
        "Built %s: %d chapters, %d lemmas",
        display_name,
        catalog_book.chapters,
        len(artifact.lemmas),
    )
    return catalog_book, artifact


def load_books(corpus_root: Path) -> list[RawBook]:
    books_path = corpus_root / "books.json"
    if not books_path.exists():
        raise FileNotFoundError(f"books.json not found in {corpus_root}")
    return _books_adapter.validate_json(books_path.read_bytes())


def build_corpus(
    corpus_root: Path,
    headwords: Mapping[tuple[str, str], str],
    only: Iterable[str] | None = None,
) -> Iterable[tuple[CatalogBook, BookArtifact]]:
    """Build books in books.json order, optionally limited to ``only``.

    ``only`` matches dataset names, display names or book ids.
    """
    wanted = set(only) if only else None
    for raw_book in load_books(corpus_root):
        display_name = to_display_name(raw_book.english)
        names = {raw_book.english, display_name, to_book_id(display_name)}
        if wanted is not None and not names & wanted:
            continue
        yield build_book(raw_book, corpus_root, headwords)


def new_catalog(books: list[CatalogBook]) -> Catalog:
    return Catalog(
        generated_at=datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
        books=books,
    )


def run_build(
    corpus_root: Path,
    lexicon_path: Path | None,
    output_dir: Path,
    only: Iterable[str] | None = None,
) -> Catalog:
    """Rebuild the output directory: one artifact per book, then the catalog."""
    headwords = HeadwordIndex.from_file(lexicon_path) if lexicon_path else HeadwordIndex()
    if not lexicon_path:
        logger.warning("No lexicon given; headwords come from the corpus only.")

    if output_dir.exists():
        shutil.rmtree(output_dir)
    store = ArtifactStore(output_dir)

    catalog_books: list[CatalogBook] = []
    for catalog_book, artifact in build_corpus(corpus_root, headwords, only):
        path = store.save_book(artifact)
        logger.info("Wrote %s", path)
        catalog_books.append(catalog_book)

    catalog = new_catalog(catalog_books)
    store.save_catalog(catalog)
    logger.info("Wrote catalog with %d books.", len(catalog_books))
    return catalog


def main():
    """Build frequency artifacts from a BHSA JSON corpus."""
    parser = argparse.ArgumentParser(
        description="Build per-book vocabulary frequency artifacts",
    )
    parser.add_argument(
        "--corpus",
        type=Path,
        default=os.environ.get("BHSA_VOCAB_CORPUS_DIR", "bhsa_json"),
        help="Corpus directory containing books.json and per-book folders",
    )
    parser.add_argument(
        "--lexicon",
        type=Path,
        default=os.environ.get("BHSA_VOCAB_LEXICON"),
        help="HebrewStrong.xml used for canonical headwords",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=os.environ.get("BHSA_VOCAB_DATA_DIR", "data"),
        help="Output directory (replaced on every run)",
    )
    parser.add_argument(
        "--book",
        action="append",
        metavar="NAME",
        help="Only build this book (repeatable)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        run_build(args.corpus, args.lexicon, args.output, args.book)
    except (ArtifactBuildError, FileNotFoundError, ValidationError) as e:
        logger.error("Build failed: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
