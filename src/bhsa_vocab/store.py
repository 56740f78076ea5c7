"""JSON file storage for built artifacts.

Loaded artifacts are cached for the life of the process and never re-read:
once built, a catalog or book artifact does not change.
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path

from bhsa_vocab.models import BookArtifact, Catalog

logger = logging.getLogger(__name__)

# Default artifact directory (override with BHSA_VOCAB_DATA_DIR env var)
DATA_DIR = Path(
    os.environ.get("BHSA_VOCAB_DATA_DIR", Path(__file__).parent.parent.parent / "data")
)


class ArtifactStore:
    """Catalog and per-book artifacts under one directory.

    Layout: ``catalog.json`` and ``books/<book_id>.json``.
    """

    def __init__(self, directory: Path = DATA_DIR) -> None:
        self.directory = Path(directory)
        self._catalog: Catalog | None = None
        self._books: dict[str, BookArtifact] = {}
        self._lock = threading.Lock()

    @property
    def catalog_path(self) -> Path:
        return self.directory / "catalog.json"

    def _book_path(self, book_id: str) -> Path:
        return self.directory / "books" / f"{book_id}.json"

    def save_book(self, artifact: BookArtifact) -> Path:
        path = self._book_path(artifact.book_id)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(artifact.model_dump_json(by_alias=True), encoding="utf-8")
        return path

    def save_catalog(self, catalog: Catalog) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        self.catalog_path.write_text(
            catalog.model_dump_json(by_alias=True, exclude_none=True),
            encoding="utf-8",
        )
        return self.catalog_path

    def load_catalog(self) -> Catalog:
        with self._lock:
            if self._catalog is None:
                if not self.catalog_path.exists():
                    raise FileNotFoundError(f"Catalog not found: {self.catalog_path}")
                self._catalog = Catalog.model_validate_json(
                    self.catalog_path.read_bytes()
                )
                logger.info(
                    "Loaded catalog with %d books", len(self._catalog.books)
                )
            return self._catalog

    def load_book(self, book_id: str) -> BookArtifact:
        with self._lock:
            if book_id not in self._books:
                path = self._book_path(book_id)
                # book_id comes from URLs; keep lookups inside books/
                if path.parent.resolve() != (self.directory / "books").resolve():
                    raise FileNotFoundError(f"Book not found: {book_id}")
                if not path.exists():
                    raise FileNotFoundError(f"Book not found: {book_id}")
                self._books[book_id] = BookArtifact.model_validate_json(
                    path.read_bytes()
                )
                logger.info("Loaded book artifact %s", book_id)
            return self._books[book_id]
