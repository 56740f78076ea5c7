"""MCP tools for the book catalog."""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from bhsa_vocab.store import ArtifactStore


def register(mcp: FastMCP, store: ArtifactStore) -> None:
    @mcp.tool()
    def list_books() -> list[dict]:
        """List the books of the Hebrew Bible that have frequency data.

        Returns each book's id (use it in other tools), English name, Hebrew
        name, chapter count, and the highest verse number of each chapter.
        """
        catalog = store.load_catalog()
        return [
            book.model_dump(by_alias=True, exclude_none=True) for book in catalog.books
        ]
