"""
Crawling strategies for documentation sites.
"""

from .base import BaseCrawlStrategy
from .web import WebCrawlStrategy

__all__ = [
    "BaseCrawlStrategy",
    "WebCrawlStrategy",
]
