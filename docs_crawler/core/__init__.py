"""
Core building blocks for docs_crawler.

The orchestration service lives in ``docs_crawler.core.orchestrator``.
"""

from .doc_store import DocStore
from .fetcher import HttpFetcher
from .index import EntryIndex, compare_names, natural_sort_key, natural_sorted
from .page_db import PageDb
from .rate_limiter import RateLimiter
from .redirects import RedirectResolver
from .storage import FileStore

__all__ = [
    "DocStore",
    "EntryIndex",
    "FileStore",
    "HttpFetcher",
    "PageDb",
    "RateLimiter",
    "RedirectResolver",
    "compare_names",
    "natural_sort_key",
    "natural_sorted",
]
