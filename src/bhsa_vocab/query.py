"""Ranked vocabulary frequency over a chapter range of one book."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from functools import reduce

from bhsa_vocab.models import (
    BookArtifact,
    ChapterStats,
    FrequencyQuery,
    FrequencyResult,
    FrequencyRow,
    GlossCount,
    LemmaMeta,
    OccurrenceRef,
)

_HUNDREDTHS = Decimal("0.01")


@dataclass(frozen=True)
class _LemmaTally:
    count: int = 0
    gloss_counts: Counter = field(default_factory=Counter)
    chapters: frozenset[int] = frozenset()
    occurrences_by_chapter: dict[int, list[OccurrenceRef]] = field(default_factory=dict)

    def merge(self, other: _LemmaTally) -> _LemmaTally:
        occurrences = dict(self.occurrences_by_chapter)
        for chapter, refs in other.occurrences_by_chapter.items():
            merged = occurrences.get(chapter, []) + refs
            occurrences[chapter] = sorted(merged, key=lambda ref: ref.verse)
        return _LemmaTally(
            count=self.count + other.count,
            gloss_counts=self.gloss_counts + other.gloss_counts,
            chapters=self.chapters | other.chapters,
            occurrences_by_chapter=occurrences,
        )


@dataclass(frozen=True)
class _RangeTally:
    total_tokens: int = 0
    lemmas: dict[str, _LemmaTally] = field(default_factory=dict)


def _merge(left: _RangeTally, right: _RangeTally) -> _RangeTally:
    lemmas = dict(left.lemmas)
    for lemma_id, tally in right.lemmas.items():
        lemmas[lemma_id] = lemmas[lemma_id].merge(tally) if lemma_id in lemmas else tally
    return _RangeTally(left.total_tokens + right.total_tokens, lemmas)


def _tally_chapter(
    chapter: ChapterStats,
    lemmas: dict[str, LemmaMeta],
    include_function_words: bool,
) -> _RangeTally:
    total = 0
    tallies: dict[str, _LemmaTally] = {}
    for lemma_id, count in chapter.counts.items():
        lemma = lemmas.get(lemma_id)
        if lemma is None:
            continue
        if not include_function_words and lemma.is_function_word:
            continue

        total += count
        refs = chapter.occurrences.get(lemma_id, [])
        tallies[lemma_id] = _LemmaTally(
            count=count,
            gloss_counts=Counter(chapter.gloss_counts.get(lemma_id, {})),
            chapters=frozenset({chapter.chapter}),
            occurrences_by_chapter={
                chapter.chapter: sorted(refs, key=lambda ref: ref.verse)
            },
        )
    return _RangeTally(total, tallies)


def chapter_range(book: BookArtifact, start: int, end: int) -> tuple[int, int] | None:
    """Order and clamp a requested range to the book, or None for an empty book."""
    if not book.chapters:
        return None
    last = max(chapter.chapter for chapter in book.chapters)
    return max(1, min(start, end)), min(max(start, end), last)


def gloss_breakdown(tally: _LemmaTally, lemma: LemmaMeta) -> list[GlossCount]:
    """Glosses by in-range count, most frequent first, ties alphabetical."""
    breakdown = [
        GlossCount(gloss=gloss, count=count)
        for gloss, count in sorted(
            tally.gloss_counts.items(), key=lambda item: (-item[1], item[0])
        )
    ]
    if not breakdown and lemma.glosses:
        breakdown.append(GlossCount(gloss=lemma.glosses[0], count=tally.count))
    return breakdown


def percent_of(count: int, total: int) -> float:
    """Share of ``total`` in percent, two decimals, halves rounded up."""
    if not total:
        return 0
    value = Decimal(str(count / total * 100))
    return float(value.quantize(_HUNDREDTHS, rounding=ROUND_HALF_UP))


def run_frequency_query(book: BookArtifact, query: FrequencyQuery) -> FrequencyResult:
    """Rank the lemmas of ``book`` within the query's chapter range.

    Never raises for out-of-range chapters; they are ordered and clamped.
    With ``include_function_words`` off, function words are left out of the
    rows and of ``total_tokens`` alike.
    """
    bounds = chapter_range(book, query.start_chapter, query.end_chapter)
    if bounds is None:
        return FrequencyResult(total_tokens=0, unique_lemmas=0, rows=[])
    start, end = bounds

    selected = [c for c in book.chapters if start <= c.chapter <= end]
    tally = reduce(
        _merge,
        (
            _tally_chapter(chapter, book.lemmas, query.include_function_words)
            for chapter in selected
        ),
        _RangeTally(),
    )

    total = tally.total_tokens
    rows: list[FrequencyRow] = []
    for lemma_id, lemma_tally in tally.lemmas.items():
        lemma = book.lemmas[lemma_id]
        breakdown = gloss_breakdown(lemma_tally, lemma)
        primary = breakdown[0] if breakdown else None
        rows.append(
            FrequencyRow(
                rank=0,
                lemma_id=lemma_id,
                headword=lemma.headword,
                pos=lemma.pos,
                gloss=primary.gloss if primary else "",
                gloss_count=primary.count if primary else 0,
                gloss_breakdown=breakdown,
                glosses=[entry.gloss for entry in breakdown],
                count=lemma_tally.count,
                percent=percent_of(lemma_tally.count, total),
                chapter_spread=len(lemma_tally.chapters),
                variants=lemma.variants,
                occurrences_by_chapter=lemma_tally.occurrences_by_chapter,
            )
        )

    rows.sort(key=lambda row: (-row.count, row.headword))
    for rank, row in enumerate(rows, start=1):
        row.rank = rank

    return FrequencyResult(total_tokens=total, unique_lemmas=len(rows), rows=rows)
