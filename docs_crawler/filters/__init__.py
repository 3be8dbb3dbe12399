"""
Page transformation filters and the pipeline that runs them.
"""

from .base import Filter, FilterContext
from .clean_html import CleanHtmlFilter
from .entries import EntriesFilter
from .normalize_urls import NormalizeUrlsFilter
from .pipeline import FilterPipeline
from .registry import FilterRegistry, default_registry

__all__ = [
    "CleanHtmlFilter",
    "EntriesFilter",
    "Filter",
    "FilterContext",
    "FilterPipeline",
    "FilterRegistry",
    "NormalizeUrlsFilter",
    "default_registry",
]
