"""Shared fixtures: a tiny BHSA-shaped corpus written to a temp directory."""

import json

import pytest

# Pointed display forms (Genesis 1:1 and neighbours)
BE = "בְּ"
RESHIT = "רֵאשִׁ֖ית"
BARA = "בָּרָ֣א"
ELOHIM = "אֱלֹהִ֑ים"
ET = "אֵ֥ת"
HA = "הַ"
SHAMAYIM = "שָּׁמַ֖יִם"
VE = "וְ"
HA_QAMETS = "הָ"
ARETS = "אָֽרֶץ"
HAYETA = "הָיְתָ֥ה"

# Vocalized lexemes (word_forms slot 4)
RESHIT_LEX = "רֵאשִׁית"
BARA_LEX = "בָּרָא"
ELOHIM_LEX = "אֱלֹהִים"
ET_LEX = "אֵת"
SHAMAYIM_LEX = "שָׁמַיִם"
ARETS_LEX = "אֶרֶץ"
HAYA_LEX = "הָיָה"


def token(display, lexeme, pdp, gloss="", *, vocalized=None, trailing=" ", vt=None):
    """A raw token record as found in the corpus chapter files."""
    pos_tag = {"pdp": pdp}
    if vt:
        pos_tag["vt"] = vt
    return {
        "pos_tag": pos_tag,
        "word_forms": [
            display + trailing,
            display,
            lexeme,
            lexeme,
            vocalized if vocalized is not None else "",
        ],
        "gloss": gloss,
    }


def clitic(display, lexeme, pdp, gloss="", *, vocalized=None):
    """A one-letter particle written solid with the next word."""
    return token(
        display,
        lexeme,
        pdp,
        gloss,
        vocalized=display if vocalized is None else vocalized,
        trailing="",
    )


GENESIS_1 = {
    "1": [
        clitic(BE, "ב", "prep", "in"),
        token(RESHIT, "ראשית", "subs", "beginning", vocalized=RESHIT_LEX),
        token(BARA, "ברא", "verb", "create", vocalized=BARA_LEX),
        token(ELOHIM, "אלהים", "subs", "god(s)", vocalized=ELOHIM_LEX),
        token(ET, "את", "prep", "<object marker>", vocalized=ET_LEX),
        clitic(HA, "ה", "art", "the"),
        token(SHAMAYIM, "שמים", "subs", "heavens", vocalized=SHAMAYIM_LEX),
        clitic(VE, "ו", "conj", "and"),
        token(ET, "את", "prep", "<object marker>", vocalized=ET_LEX),
        clitic(HA_QAMETS, "ה", "art", "the", vocalized=HA),
        token(ARETS, "ארץ", "subs", "earth", vocalized=ARETS_LEX),
    ],
    "2": [
        clitic(VE, "ו", "conj", "and"),
        clitic(HA, "ה", "art", "the"),
        token(ARETS, "ארץ", "subs", "land", vocalized=ARETS_LEX),
        token(HAYETA, "היה", "verb", "be", vocalized=HAYA_LEX),
    ],
}

GENESIS_2 = {
    # No verse 2: verse numbering may have gaps
    "1": [
        token(ELOHIM, "אלהים", "subs", "God", vocalized=ELOHIM_LEX),
        token(BARA, "ברא", "verb", "create", vocalized=BARA_LEX),
    ],
    "3": [
        token(ELOHIM, "אלהים", "subs", "god(s)", vocalized=ELOHIM_LEX),
        {"pos_tag": {"pdp": "subs"}, "gloss": "nothing"},
    ],
}

RUTH_1 = {
    "1": [
        token(ARETS, "ארץ", "subs", "land", vocalized=ARETS_LEX),
    ],
}

BOOKS = [
    {"english": "Genesis", "hebrew": "בראשית"},
    {"english": "Ruth"},
]


def write_json(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")


@pytest.fixture
def corpus_root(tmp_path):
    root = tmp_path / "bhsa_json"
    write_json(root / "books.json", BOOKS)
    write_json(root / "Genesis" / "Genesis_chapter_1.json", GENESIS_1)
    write_json(root / "Genesis" / "Genesis_chapter_2.json", GENESIS_2)
    write_json(root / "Ruth" / "Ruth_chapter_1.json", RUTH_1)
    # Not a chapter file
    write_json(root / "Genesis" / "notes.json", {"ignored": True})
    return root


LEXICON_XML = """<?xml version="1.0" encoding="utf-8"?>
<lexicon xmlns="http://openscriptures.github.com/morphhb/namespace">
  <entry id="H1254"><w pos="v" pron="baw-raw'" xml:lang="heb">בָּרָא</w></entry>
  <entry id="H1961"><w pos="v" pron="haw-yaw" xml:lang="heb">הָיָה</w></entry>
  <entry id="H1697"><w pos="n-m" xml:lang="heb">דָּבָר</w></entry>
  <entry id="H1698"><w pos="n-m" xml:lang="heb">דֶּבֶר</w></entry>
  <entry id="H772"><w pos="n-f" xml:lang="arc">אֲרַע</w></entry>
  <entry id="H1097"><w xml:lang="heb">בְּלִי</w></entry>
  <entry id="H1"><w pos="x" xml:lang="heb">אָב</w></entry>
</lexicon>
"""


@pytest.fixture
def lexicon_path(tmp_path):
    path = tmp_path / "HebrewStrong.xml"
    path.write_text(LEXICON_XML, encoding="utf-8")
    return path
