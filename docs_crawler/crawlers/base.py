from __future__ import annotations

"""
Base crawling strategy with common functionality.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from ..models.crawl import CrawlResult

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str | None], None]


class BaseCrawlStrategy(ABC):
    """
    Abstract base class for crawling strategies.
    Defines the common interface and shared functionality.
    """

    def __init__(self) -> None:
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    async def execute(
        self,
        request: Any,
        progress_callback: ProgressCallback | None = None,
    ) -> CrawlResult:
        """
        Execute the crawling strategy.

        Args:
            request: Strategy-specific request object
            progress_callback: Optional progress reporting callback

        Returns:
            CrawlResult with crawled data
        """

    @abstractmethod
    async def validate_request(self, request: Any) -> bool:
        """
        Validate that the request is valid for this strategy.

        Args:
            request: Strategy-specific request object

        Returns:
            True if request is valid
        """

    def _report_progress(
        self,
        progress_callback: ProgressCallback | None,
        done: int,
        total: int,
        message: str | None = None,
    ) -> None:
        if progress_callback is None:
            return
        try:
            progress_callback(done, total, message)
        except Exception as e:
            self.logger.debug(f"Progress callback failed: {e}")
