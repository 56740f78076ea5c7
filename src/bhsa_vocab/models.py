"""Data models for the raw corpus, built artifacts, and frequency queries."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Slots of RawToken.word_forms
RAW_FORM = 0
POINTED_FORM = 1
CONSONANTAL_FORM = 2
CONSONANTAL_LEXEME = 3
POINTED_LEXEME = 4
WORD_FORM_SLOTS = 5


class ArtifactModel(BaseModel):
    """Base for persisted models: snake_case in Python, camelCase in JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Raw corpus ---


class RawPosTag(BaseModel):
    pdp: str = ""  # part of speech (phrase-dependent)
    vt: str = ""  # verbal tense
    gn: str = ""
    nu: str = ""
    st: str = ""
    ps: str = ""
    prs: str = ""  # pronominal suffix
    prp: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else str(value)


class RawToken(BaseModel):
    """One tagged word as it appears in a chapter file."""

    pos_tag: RawPosTag | None = None
    word_forms: list[str] = Field(default_factory=lambda: [""] * WORD_FORM_SLOTS)
    gloss: str = ""

    @field_validator("word_forms", mode="before")
    @classmethod
    def _pad_word_forms(cls, value):
        forms = ["" if form is None else str(form) for form in (value or [])]
        return forms + [""] * (WORD_FORM_SLOTS - len(forms))

    @field_validator("gloss", mode="before")
    @classmethod
    def _gloss_none_to_empty(cls, value):
        return "" if value is None else value

    def form(self, slot: int) -> str:
        return self.word_forms[slot].strip()


class RawBook(BaseModel):
    """An entry of the corpus books.json."""

    english: str
    hebrew: str | None = None


# --- Built artifacts ---


class OccurrenceRef(ArtifactModel):
    verse: int = Field(gt=0)
    form: str


class LemmaMeta(ArtifactModel):
    lemma_id: str
    headword: str
    pos: str
    glosses: list[str] = Field(default_factory=list)
    variants: list[str] = Field(default_factory=list)
    is_function_word: bool = False


class ChapterStats(ArtifactModel):
    chapter: int = Field(gt=0)
    counts: dict[str, int] = Field(default_factory=dict)
    gloss_counts: dict[str, dict[str, int]] = Field(default_factory=dict)
    occurrences: dict[str, list[OccurrenceRef]] = Field(default_factory=dict)


class BookArtifact(ArtifactModel):
    book_id: str
    lemmas: dict[str, LemmaMeta] = Field(default_factory=dict)
    chapters: list[ChapterStats] = Field(default_factory=list)
    verses: dict[str, str] = Field(default_factory=dict)


class CatalogBook(ArtifactModel):
    id: str
    name: str
    hebrew: str | None = None
    chapters: int = Field(ge=0)
    # Highest verse number seen per chapter, not a verse count
    verses_per_chapter: list[int] = Field(default_factory=list)


class Catalog(ArtifactModel):
    generated_at: str
    books: list[CatalogBook] = Field(default_factory=list)


# --- Queries ---


class FrequencyQuery(ArtifactModel):
    book_id: str = ""
    start_chapter: int
    end_chapter: int
    include_function_words: bool = False


class GlossCount(ArtifactModel):
    gloss: str
    count: int


class FrequencyRow(ArtifactModel):
    rank: int
    lemma_id: str
    headword: str
    pos: str
    gloss: str
    gloss_count: int
    gloss_breakdown: list[GlossCount]
    glosses: list[str]
    count: int
    percent: float
    chapter_spread: int
    variants: list[str]
    occurrences_by_chapter: dict[int, list[OccurrenceRef]]


class FrequencyResult(ArtifactModel):
    total_tokens: int
    unique_lemmas: int
    rows: list[FrequencyRow]
