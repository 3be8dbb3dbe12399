"""
Ordered stack of named filters applied to every crawled page.
"""

from __future__ import annotations

import logging

from ..exceptions import UnknownFilterError
from ..models.entries import IndexEntry
from .base import Filter, FilterContext
from .registry import FilterRegistry

logger = logging.getLogger(__name__)


class FilterPipeline:
    """
    Runs filters in order, feeding each the previous filter's output.

    A filter that raises is skipped for that page: its input is passed on
    unchanged. Filters are created from ``registry`` when pushed by name.
    """

    def __init__(
        self, registry: FilterRegistry, names: list[str] | None = None
    ) -> None:
        self.registry = registry
        self._stack: list[tuple[str, Filter]] = []
        for name in names or []:
            self.push(name)

    def __len__(self) -> int:
        return len(self._stack)

    def __contains__(self, name: str) -> bool:
        return self.contains(name)

    def __repr__(self) -> str:
        return f"FilterPipeline({' -> '.join(self.names())})"

    @property
    def filters(self) -> list[Filter]:
        return [f for _, f in self._stack]

    @property
    def emits_entries(self) -> bool:
        return any(f.emits_entries for _, f in self._stack)

    def names(self) -> list[str]:
        return [name for name, _ in self._stack]

    def contains(self, name: str) -> bool:
        return any(existing == name for existing, _ in self._stack)

    def _index_of(self, name: str) -> int:
        for i, (existing, _) in enumerate(self._stack):
            if existing == name:
                return i
        raise UnknownFilterError(name)

    def push(self, name: str) -> FilterPipeline:
        return self.push_filter(name, self.registry.create(name))

    def push_filter(self, name: str, filter_: Filter) -> FilterPipeline:
        self._stack.append((name, filter_))
        return self

    def insert_before(self, existing: str, name: str) -> FilterPipeline:
        index = self._index_of(existing)
        self._stack.insert(index, (name, self.registry.create(name)))
        return self

    def insert_after(self, existing: str, name: str) -> FilterPipeline:
        index = self._index_of(existing)
        self._stack.insert(index + 1, (name, self.registry.create(name)))
        return self

    def replace(self, existing: str, name: str) -> FilterPipeline:
        index = self._index_of(existing)
        self._stack[index] = (name, self.registry.create(name))
        return self

    def remove(self, name: str) -> FilterPipeline:
        self._stack.pop(self._index_of(name))
        return self

    def clear(self) -> None:
        self._stack.clear()

    def run(self, html: str, context: FilterContext) -> str:
        """Apply every filter to ``html`` and return the final markup."""
        if not context.source_html:
            context.source_html = html
        context.html = html

        for name, filter_ in self._stack:
            try:
                context.html = filter_.apply(context.html, context)
            except Exception as e:
                logger.warning(
                    f"Filter '{name}' failed on {context.current_url}, "
                    f"keeping its input: {e}"
                )

        if not context.content:
            context.content = context.html.strip()
        return context.html

    def get_entries(self, context: FilterContext) -> list[IndexEntry]:
        """Entries contributed by entry-emitting filters for the current page."""
        entries: list[IndexEntry] = []
        for name, filter_ in self._stack:
            if not filter_.emits_entries:
                continue
            try:
                entries.extend(filter_.get_entries(context.html, context))
            except Exception as e:
                logger.warning(
                    f"Filter '{name}' could not extract entries from "
                    f"{context.current_url}: {e}"
                )
        return entries
