"""FastAPI HTTP layer over the artifact store and frequency query engine."""

from __future__ import annotations

import hmac
import logging
import os

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from bhsa_vocab.models import BookArtifact, FrequencyQuery
from bhsa_vocab.query import run_frequency_query
from bhsa_vocab.store import ArtifactStore

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="BHSA Vocabulary API",
    description="Hebrew Bible vocabulary frequency by chapter range",
    version="0.1.0",
)

API_KEY = os.getenv("API_KEY")
if not API_KEY:
    logger.warning("API_KEY not set. All requests will be allowed.")


@app.middleware("http")
async def verify_api_key(request: Request, call_next):
    if API_KEY and request.url.path != "/health":
        key = request.headers.get("x-api-key", "")
        if not hmac.compare_digest(key, API_KEY):
            return JSONResponse(status_code=401, content={"detail": "Invalid API key"})
    return await call_next(request)


@app.get("/health")
def health():
    """Unauthenticated health check."""
    return {"status": "ok"}


store = ArtifactStore()


def _load_book(book_id: str) -> BookArtifact:
    try:
        return store.load_book(book_id)
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail=f"Book not found: {book_id}")


# --- Endpoints ---


@app.get("/api/catalog")
def get_catalog():
    """Catalog of built books with chapter and verse counts."""
    try:
        catalog = store.load_catalog()
    except FileNotFoundError:
        raise HTTPException(status_code=503, detail="Catalog not built")
    return catalog.model_dump(by_alias=True, exclude_none=True)


@app.get("/api/books")
def list_books():
    """List built books."""
    return get_catalog()["books"]


@app.get("/api/books/{book_id}/frequency")
def get_frequency(
    book_id: str,
    start: int = 1,
    end: int | None = None,
    include_function_words: bool = False,
):
    """Ranked vocabulary for a chapter range; the range is clamped to the book."""
    book = _load_book(book_id)
    query = FrequencyQuery(
        book_id=book_id,
        start_chapter=start,
        end_chapter=start if end is None else end,
        include_function_words=include_function_words,
    )
    return run_frequency_query(book, query).model_dump(by_alias=True)


@app.get("/api/books/{book_id}/verses/{chapter}/{verse}")
def get_verse(book_id: str, chapter: int, verse: int):
    """Reconstructed text of one verse."""
    book = _load_book(book_id)
    ref = f"{chapter}:{verse}"
    text = book.verses.get(ref)
    if text is None:
        raise HTTPException(status_code=404, detail=f"Verse not found: {book_id} {ref}")
    return {"book": book_id, "ref": ref, "text": text}


def main():
    """Run the API server."""
    import uvicorn

    port = int(os.environ.get("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
