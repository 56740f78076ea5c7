"""Hebrew Bible vocabulary frequency artifacts and queries."""

__version__ = "0.1.0"
