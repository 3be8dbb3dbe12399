"""
Data models for the searchable entry index of a documentation site.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field


def type_slug(name: str) -> str:
    """URL-safe slug for an entry type name."""
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


class IndexEntry(BaseModel):
    """One searchable item: a name pointing at a page path, grouped by type."""

    model_config = ConfigDict(frozen=True)

    name: str
    path: str
    type: str

    def canonical_json(self) -> str:
        return self.model_dump_json()


class IndexType(BaseModel):
    """An entry category and the number of distinct entries in it."""

    name: str
    count: int = Field(default=0, ge=0)
    slug: str = ""

    def model_post_init(self, __context: object) -> None:
        if not self.slug:
            self.slug = type_slug(self.name)


class FullIndex(BaseModel):
    """Serialized form of a finished index (index.json)."""

    entries: list[IndexEntry] = Field(default_factory=list)
    types: list[IndexType] = Field(default_factory=list)
