"""
Named filter factories.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from ..exceptions import UnknownFilterError
from .base import Filter

logger = logging.getLogger(__name__)

FilterFactory = Callable[[], Filter]


class FilterRegistry:
    """
    Thread-safe mapping of filter names to factories.

    Pipelines look filters up by name and get a fresh instance each time.
    """

    def __init__(self) -> None:
        self._factories: dict[str, FilterFactory] = {}
        self._lock = threading.Lock()

    def __contains__(self, name: str) -> bool:
        return self.contains(name)

    def __len__(self) -> int:
        with self._lock:
            return len(self._factories)

    def register(self, name: str, factory: FilterFactory) -> None:
        with self._lock:
            if name in self._factories:
                logger.debug(f"Replacing filter factory '{name}'")
            self._factories[name] = factory

    def unregister(self, name: str) -> bool:
        with self._lock:
            return self._factories.pop(name, None) is not None

    def contains(self, name: str) -> bool:
        with self._lock:
            return name in self._factories

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._factories)

    def create(self, name: str) -> Filter:
        with self._lock:
            factory = self._factories.get(name)
        if factory is None:
            raise UnknownFilterError(name)
        return factory()


def default_registry() -> FilterRegistry:
    """Registry holding the built-in, site-independent filters."""
    from .clean_html import CleanHtmlFilter
    from .entries import EntriesFilter
    from .normalize_urls import NormalizeUrlsFilter

    registry = FilterRegistry()
    registry.register(CleanHtmlFilter.name, CleanHtmlFilter)
    registry.register(NormalizeUrlsFilter.name, NormalizeUrlsFilter)
    registry.register(EntriesFilter.name, EntriesFilter)
    return registry
