"""
Data models for crawl operations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from .policy import CrawlPolicy

if TYPE_CHECKING:
    from ..core.index import EntryIndex
    from ..core.page_db import PageDb

HTML_CONTENT_TYPES = ("text/html", "application/xhtml+xml")


class CrawlStatus(str, Enum):
    """Status of a crawl operation."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class FetchResponse(BaseModel):
    """Outcome of one HTTP GET after following redirects."""

    model_config = ConfigDict(frozen=True)

    url: str
    effective_url: str
    status: int
    headers: dict[str, str] = Field(default_factory=dict)
    body: str = ""

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300

    @property
    def content_type(self) -> str:
        for key, value in self.headers.items():
            if key.lower() == "content-type":
                return value
        return ""

    @property
    def is_html(self) -> bool:
        """A missing content type is treated as HTML."""
        content_type = self.content_type.lower()
        if not content_type:
            return True
        return any(kind in content_type for kind in HTML_CONTENT_TYPES)

    @property
    def was_redirected(self) -> bool:
        return self.effective_url != self.url


class CrawlRequest(BaseModel):
    """Everything a crawl of one documentation site needs besides its filters."""

    model_config = ConfigDict()

    policy: CrawlPolicy
    slug: str = ""
    version: str | None = None
    release: str | None = None
    root_title: str | None = None
    attribution: str = ""
    max_pages: int | None = Field(default=None, ge=1)


class CrawlStatistics(BaseModel):
    """Statistics for a crawl operation."""

    model_config = ConfigDict()

    total_pages_requested: int = 0
    total_pages_fetched: int = 0
    total_pages_stored: int = 0
    total_pages_failed: int = 0
    total_pages_skipped: int = 0
    total_redirects: int = 0
    total_links_discovered: int = 0
    total_bytes_downloaded: int = 0
    crawl_duration_seconds: float = 0.0
    error_counts: dict[str, int] = Field(default_factory=dict)

    @property
    def pages_per_second(self) -> float:
        if self.crawl_duration_seconds <= 0:
            return 0.0
        return self.total_pages_fetched / self.crawl_duration_seconds

    def record_error(self, error: Exception) -> None:
        name = type(error).__name__
        self.error_counts[name] = self.error_counts.get(name, 0) + 1


@dataclass
class CrawlResult:
    """Pages and entries produced by one crawl of a documentation site."""

    pages: PageDb
    index: EntryIndex
    status: CrawlStatus = CrawlStatus.COMPLETED
    statistics: CrawlStatistics = field(default_factory=CrawlStatistics)
    redirects: dict[str, str] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)
    start_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    end_time: datetime | None = None

    @property
    def success_rate(self) -> float:
        """Stored pages as a percentage of pages requested."""
        if self.statistics.total_pages_requested == 0:
            return 0.0
        return (
            self.statistics.total_pages_stored
            / self.statistics.total_pages_requested
            * 100.0
        )
