"""
Data models for docs_crawler using Pydantic.
"""

from .crawl import (
    CrawlRequest,
    CrawlResult,
    CrawlStatistics,
    CrawlStatus,
    FetchResponse,
)
from .doc import DocMeta, Manifest, ManifestEntry
from .entries import FullIndex, IndexEntry, IndexType
from .policy import CrawlPolicy

__all__ = [
    "CrawlPolicy",
    "CrawlRequest",
    "CrawlResult",
    "CrawlStatistics",
    "CrawlStatus",
    "DocMeta",
    "FetchResponse",
    "FullIndex",
    "IndexEntry",
    "IndexType",
    "Manifest",
    "ManifestEntry",
]
