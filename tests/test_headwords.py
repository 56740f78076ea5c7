"""Tests for the lexicon headword index and headword choice."""

import pytest

from bhsa_vocab.headwords import (
    HeadwordIndex,
    LexiconEntry,
    choose_display_headword,
    normalize_lexicon_pos,
    parse_strong_lexicon,
)


def entry(pos, pointed, language="heb"):
    return LexiconEntry(pos=pos, language=language, pointed=pointed)


class TestLexiconPos:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("v", "verb"),
            ("n-m", "noun"),
            ("n-f", "noun"),
            ("n-pr-m", "proper noun"),
            ("a", "adjective"),
            ("adv", "adverb"),
            ("prep", "preposition"),
            ("conj", "conjunction"),
            ("pron-p", "pronoun"),
            ("interj", "interjection"),
            ("inj", "interjection"),
            ("x", None),
            ("", None),
        ],
    )
    def test_prefixes(self, raw, expected):
        assert normalize_lexicon_pos(raw) == expected


class TestHeadwordIndex:
    def test_single_spelling_is_kept(self):
        index = HeadwordIndex.from_entries([entry("v", "בָּרָא")])
        assert index[("verb", "ברא")] == "בָּרָא"

    def test_duplicate_spelling_is_not_ambiguous(self):
        index = HeadwordIndex.from_entries([entry("v", "בָּרָא"), entry("v", "בָּרָא")])
        assert index[("verb", "ברא")] == "בָּרָא"

    def test_ambiguous_key_is_dropped(self):
        index = HeadwordIndex.from_entries([entry("n-m", "דָּבָר"), entry("n-m", "דֶּבֶר")])
        assert ("noun", "דבר") not in index
        assert len(index) == 0

    def test_same_skeleton_different_pos_are_separate(self):
        index = HeadwordIndex.from_entries([entry("n-m", "דָּבָר"), entry("v", "דָּבַר")])
        assert index[("noun", "דבר")] == "דָּבָר"
        assert index[("verb", "דבר")] == "דָּבַר"

    def test_fallback_language_used_when_no_preferred(self):
        index = HeadwordIndex.from_entries([entry("n-f", "אֲרַע", language="arc")])
        assert index[("noun", "ארע")] == "אֲרַע"

    def test_preferred_language_beats_fallback(self):
        index = HeadwordIndex.from_entries(
            [entry("n-m", "מֶלֶךְ", language="arc"), entry("n-m", "מֶּלֶךְ")]
        )
        assert index[("noun", "מלך")] == "מֶּלֶךְ"

    def test_proper_names_are_preferred(self):
        index = HeadwordIndex.from_entries(
            [
                entry("n-pr-m", "דָּוִד", language="x-pn"),
                entry("n-pr-m", "דַּוִד", language="arc"),
            ]
        )
        assert index[("proper noun", "דוד")] == "דָּוִד"

    def test_ambiguous_preferred_does_not_fall_back(self):
        index = HeadwordIndex.from_entries(
            [
                entry("n-m", "דָּבָר"),
                entry("n-m", "דֶּבֶר"),
                entry("n-m", "דְּבַר", language="arc"),
            ]
        )
        assert ("noun", "דבר") not in index

    def test_unknown_pos_and_empty_skeleton_skipped(self):
        index = HeadwordIndex.from_entries([entry("x", "אָב"), entry("v", "ְ")])
        assert len(index) == 0

    def test_adverb_does_not_collide_with_adjective(self):
        index = HeadwordIndex.from_entries(
            [entry("a", "טוֹב"), entry("adv", "טוּב")]
        )
        # Separate keys, so the adjective spelling is not ambiguous
        assert index[("adjective", "טוב")] == "טוֹב"
        assert index[("adverb", "טוב")] == "טוּב"
        assert len(index) == 2

    def test_index_is_read_only(self):
        index = HeadwordIndex.from_entries([entry("v", "בָּרָא")])
        with pytest.raises(TypeError):
            index[("verb", "חדש")] = "חָדַשׁ"


class TestParseLexicon:
    def test_parse_file(self, lexicon_path):
        entries = list(parse_strong_lexicon(lexicon_path))
        # The entry without a pos attribute is skipped
        assert len(entries) == 6
        assert entries[0] == LexiconEntry(pos="v", language="heb", pointed="בָּרָא")
        assert entries[4].language == "arc"

    def test_index_from_file(self, lexicon_path):
        index = HeadwordIndex.from_file(lexicon_path)
        assert dict(index) == {
            ("verb", "ברא"): "בָּרָא",
            ("verb", "היה"): "הָיָה",
            ("noun", "ארע"): "אֲרַע",
        }


class TestChooseDisplayHeadword:
    index = HeadwordIndex.from_entries([entry("v", "בָּרָא"), entry("n-m", "שָׁלוֹם")])

    def test_pointed_corpus_form_beats_lexicon(self):
        assert choose_display_headword("ברא", "verb", "בָּרָא", self.index) == "בָּרָא"
        assert choose_display_headword("ברא", "verb", "בָּרָ", self.index) == "בָּרָא"
        assert choose_display_headword("ברא", "verb", "בְּרָא", self.index) == "בְּרָא"

    def test_lexicon_when_corpus_form_missing(self):
        assert choose_display_headword("ברא", "verb", "", self.index) == "בָּרָא"

    def test_lexicon_when_corpus_form_unpointed(self):
        assert choose_display_headword("שלום", "noun", "שלום", self.index) == "שָׁלוֹם"

    def test_unpointed_corpus_form_without_lexicon(self):
        assert choose_display_headword("חדש", "verb", "חדש", self.index) == "חדש"

    def test_mismatched_corpus_form_falls_back_to_lexeme(self):
        assert choose_display_headword("חדש", "verb", "קָדוֹשׁ", self.index) == "חדש"
