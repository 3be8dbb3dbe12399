"""
Metadata models for persisted documentation sets.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field


def _utc_timestamp() -> int:
    return int(datetime.now(timezone.utc).timestamp())


class DocMeta(BaseModel):
    """Contents of meta.json for one crawled documentation set."""

    name: str
    slug: str
    type: str
    version: str | None = None
    release: str | None = None
    links: dict[str, str] = Field(default_factory=dict)
    attribution: str = ""
    mtime: int = Field(default_factory=_utc_timestamp)
    db_size: int = 0

    @property
    def directory_name(self) -> str:
        """Directory holding the doc's files: ``slug`` or ``slug~version``."""
        return doc_directory_name(self.slug, self.version)


class ManifestEntry(BaseModel):
    """Summary of one documentation set in manifest.json."""

    name: str
    slug: str
    type: str = ""
    version: str | None = None
    release: str | None = None
    mtime: int = 0
    db_size: int = 0
    index_size: int = 0


class Manifest(BaseModel):
    """Every documentation set found in the docs directory."""

    docs: list[ManifestEntry] = Field(default_factory=list)
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def find(self, slug: str) -> ManifestEntry | None:
        return next((doc for doc in self.docs if doc.slug == slug), None)


def doc_directory_name(slug: str, version: str | None = None) -> str:
    return f"{slug}~{version}" if version else slug
