"""Tunable extraction settings."""

from pydantic import BaseModel, Field


class ExtractionSettings(BaseModel):
    """Thresholds used by the chapter heuristics.

    The defaults must stay as they are for output to match previously
    generated artifacts.
    """

    # Chapters whose paragraphs total fewer characters are dropped
    min_content_length: int = Field(default=24, ge=0)
    # Inferred titles are cut to this many characters
    inferred_title_length: int = Field(default=22, ge=1)
    # A paragraph must be at least this long to be used as an inferred title
    inferred_title_min_length: int = Field(default=6, ge=0)
    default_language: str = "ja"
