"""Tests for book name mapping."""

from bhsa_vocab.book_names import (
    DISPLAY_NAMES,
    to_book_id,
    to_dataset_folder,
    to_display_name,
)


class TestBookNames:
    def test_all_books(self):
        assert len(DISPLAY_NAMES) == 39

    def test_display_names(self):
        assert to_display_name("Numeri") == "Numbers"
        assert to_display_name("Samuel I") == "1 Samuel"
        assert to_display_name("Canticum") == "Song of Songs"
        assert to_display_name("Unknown") == "Unknown"

    def test_book_ids(self):
        assert to_book_id("Genesis") == "genesis"
        assert to_book_id("1 Samuel") == "1-samuel"
        assert to_book_id("Song of Songs") == "song-of-songs"

    def test_dataset_folder(self):
        assert to_dataset_folder("Samuel I") == "Samuel_I"
        assert to_dataset_folder("Chronica  II") == "Chronica_II"
        assert to_dataset_folder("Genesis") == "Genesis"
