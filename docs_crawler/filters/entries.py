"""
Index entry extraction.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from bs4 import BeautifulSoup

from ..models.entries import IndexEntry
from .base import Filter, FilterContext

DEFAULT_TYPE = "Miscellaneous"


class EntriesFilter(Filter):
    """
    Emits one entry per page, named after its heading.

    The entry type comes from the first matching rule: ``name_types`` maps
    a type to name prefixes, ``path_types`` maps a path substring to a
    type. Pages matching neither get ``default_type``. The root page has no
    entry of its own. Subclasses customize ``get_name``, ``get_type``,
    ``include_default_entry`` and ``additional_entries``.
    """

    name = "entries"
    emits_entries = True

    def __init__(
        self,
        name_types: Mapping[str, Sequence[str]] | None = None,
        path_types: Mapping[str, str] | None = None,
        default_type: str = DEFAULT_TYPE,
        heading_selector: str = "h1",
    ) -> None:
        super().__init__()
        self.name_types = dict(name_types or {})
        self.path_types = dict(path_types or {})
        self.default_type = default_type
        self.heading_selector = heading_selector

    def apply(self, html: str, context: FilterContext) -> str:
        return html

    def get_entries(self, html: str, context: FilterContext) -> list[IndexEntry]:
        doc = self.parse(html)
        entries: list[IndexEntry] = []

        if self.include_default_entry(doc, context):
            name = self.get_name(doc, context)
            entry_type = self.get_type(doc, context, name)
            if name and entry_type:
                entries.append(
                    IndexEntry(name=name, path=context.current_path, type=entry_type)
                )

        entries.extend(self.additional_entries(doc, context))
        return entries

    def include_default_entry(self, doc: BeautifulSoup, context: FilterContext) -> bool:
        return not self.is_root_page(context)

    def get_name(self, doc: BeautifulSoup, context: FilterContext) -> str:
        heading = self.at_css(doc, self.heading_selector)
        if heading is not None and heading.get_text().strip():
            return " ".join(heading.get_text().split())
        if context.title:
            return context.title
        last_segment = context.current_path.rstrip("/").rsplit("/", 1)[-1]
        return last_segment.replace("_", " ").replace("-", " ").strip()

    def get_type(
        self, doc: BeautifulSoup, context: FilterContext, name: str
    ) -> str | None:
        for entry_type, prefixes in self.name_types.items():
            if any(name.startswith(prefix) for prefix in prefixes):
                return entry_type
        for fragment, entry_type in self.path_types.items():
            if fragment in context.current_path:
                return entry_type
        return self.default_type

    def additional_entries(
        self, doc: BeautifulSoup, context: FilterContext
    ) -> list[IndexEntry]:
        return []
