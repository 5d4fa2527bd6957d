"""Data models for the generated book document."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _OutputModel(BaseModel):
    """Base for models serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class Chapter(_OutputModel):
    """One extracted chapter of prose."""

    id: str
    title: str
    source: str  # Archive path of the chapter document
    paragraphs: list[str] = Field(default_factory=list)


class Book(_OutputModel):
    """Complete book output."""

    title: str
    creators: list[str] = Field(default_factory=list)
    language: str
    source_file: str
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    chapter_count: int
    chapters: list[Chapter] = Field(default_factory=list)

    def to_json(self) -> str:
        """Serialize with the camelCase keys of the output format."""
        return self.model_dump_json(by_alias=True, indent=2)
