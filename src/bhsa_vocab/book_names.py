"""Book naming: BHSA dataset (Latin) names to English display names and ids."""

from __future__ import annotations

import re

DISPLAY_NAMES = {
    "Genesis": "Genesis",
    "Exodus": "Exodus",
    "Leviticus": "Leviticus",
    "Numeri": "Numbers",
    "Deuteronomium": "Deuteronomy",
    "Josua": "Joshua",
    "Judices": "Judges",
    "Samuel I": "1 Samuel",
    "Samuel II": "2 Samuel",
    "Reges I": "1 Kings",
    "Reges II": "2 Kings",
    "Jesaia": "Isaiah",
    "Jeremia": "Jeremiah",
    "Ezechiel": "Ezekiel",
    "Hosea": "Hosea",
    "Joel": "Joel",
    "Amos": "Amos",
    "Obadia": "Obadiah",
    "Jona": "Jonah",
    "Micha": "Micah",
    "Nahum": "Nahum",
    "Habakuk": "Habakkuk",
    "Zephania": "Zephaniah",
    "Haggai": "Haggai",
    "Sacharia": "Zechariah",
    "Maleachi": "Malachi",
    "Psalmi": "Psalms",
    "Iob": "Job",
    "Proverbia": "Proverbs",
    "Ruth": "Ruth",
    "Canticum": "Song of Songs",
    "Ecclesiastes": "Ecclesiastes",
    "Threni": "Lamentations",
    "Esther": "Esther",
    "Daniel": "Daniel",
    "Esra": "Ezra",
    "Nehemia": "Nehemiah",
    "Chronica I": "1 Chronicles",
    "Chronica II": "2 Chronicles",
}


def to_display_name(dataset_name: str) -> str:
    return DISPLAY_NAMES.get(dataset_name, dataset_name)


def to_book_id(display_name: str) -> str:
    """Slug used for artifact file names and URLs, e.g. "1 Samuel" -> "1-samuel"."""
    return re.sub(r"[^a-z0-9]+", "-", display_name.lower()).strip("-")


def to_dataset_folder(dataset_name: str) -> str:
    return re.sub(r"\s+", "_", dataset_name)
