"""MCP tools for vocabulary frequency and verse text."""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from bhsa_vocab.models import FrequencyQuery
from bhsa_vocab.query import run_frequency_query
from bhsa_vocab.store import ArtifactStore


def register(mcp: FastMCP, store: ArtifactStore) -> None:
    @mcp.tool()
    def get_frequency_table(
        book_id: str,
        start_chapter: int,
        end_chapter: int | None = None,
        include_function_words: bool = False,
        limit: int = 100,
    ) -> dict:
        """Rank the vocabulary of a chapter range by number of occurrences.

        Each row gives the lemma's headword, part of speech, most frequent
        gloss with a breakdown of all glosses, count, percent of all counted
        tokens, the number of chapters it appears in, and its verse
        references grouped by chapter.

        Function words (prepositions, conjunctions, the article,
        demonstratives) are left out unless include_function_words is set.

        Args:
            book_id: Book id from list_books (e.g. "genesis", "1-samuel")
            start_chapter: First chapter of the range
            end_chapter: Last chapter (default same as start)
            include_function_words: Count function words too
            limit: Max rows to return (0 = all); totals cover every row
        """
        book = store.load_book(book_id)
        query = FrequencyQuery(
            book_id=book_id,
            start_chapter=start_chapter,
            end_chapter=start_chapter if end_chapter is None else end_chapter,
            include_function_words=include_function_words,
        )
        result = run_frequency_query(book, query)
        if limit > 0:
            result.rows = result.rows[:limit]
        return result.model_dump(by_alias=True)

    @mcp.tool()
    def get_verse_text(book_id: str, chapter: int, verse: int) -> dict:
        """Get the pointed Hebrew text of a verse.

        Args:
            book_id: Book id from list_books
            chapter: Chapter number
            verse: Verse number
        """
        book = store.load_book(book_id)
        ref = f"{chapter}:{verse}"
        text = book.verses.get(ref)
        if text is None:
            return {"error": f"Verse not found: {book_id} {ref}"}
        return {"book": book_id, "ref": ref, "text": text}
