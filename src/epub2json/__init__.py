"""Convert EPUB archives into a single normalized book JSON document."""

__version__ = "0.1.0"
