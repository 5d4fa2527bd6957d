"""Data models for the OPF package document."""

from pydantic import BaseModel, Field


class ManifestItem(BaseModel):
    """A file declared in the package manifest."""

    id: str
    href: str  # Archive path, already resolved against the package directory
    media_type: str = ""
    properties: list[str] = Field(default_factory=list)

    @property
    def is_document(self) -> bool:
        """True for XHTML/HTML content documents."""
        media_type = self.media_type.lower()
        return "xhtml" in media_type or "html" in media_type


class PackageMetadata(BaseModel):
    """Dublin Core metadata of the package."""

    title: str = ""
    creators: list[str] = Field(default_factory=list)
    language: str = ""


class PackageDocument(BaseModel):
    """Parsed package document: metadata, manifest and spine."""

    path: str
    metadata: PackageMetadata = Field(default_factory=PackageMetadata)
    manifest: dict[str, ManifestItem] = Field(default_factory=dict)
    spine: list[str] = Field(default_factory=list)
    toc_id: str | None = None

    def item(self, item_id: str) -> ManifestItem | None:
        return self.manifest.get(item_id)

    @property
    def nav_item(self) -> ManifestItem | None:
        """Navigation document: the spine's NCX, else the EPUB 3 nav item."""
        if self.toc_id and self.toc_id in self.manifest:
            return self.manifest[self.toc_id]
        for item in self.manifest.values():
            if "nav" in item.properties:
                return item
        return None
