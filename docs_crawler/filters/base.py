"""
Base filter with common functionality for page transformations.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar
from urllib.parse import urlsplit

from bs4 import BeautifulSoup, Tag

from ..core import html as html_query
from ..models.entries import IndexEntry
from ..models.policy import ROOT_PAGE_PATH

logger = logging.getLogger(__name__)


@dataclass
class FilterContext:
    """
    Per-page state threaded through a filter pipeline.

    Created for each fetched page and discarded once the page is stored.
    """

    base_url: str
    current_url: str
    current_path: str = ROOT_PAGE_PATH
    root_url: str = ""
    root_path: str = ""
    root_title: str | None = None
    initial_paths: list[str] = field(default_factory=list)
    slug: str = ""
    version: str | None = None
    release: str | None = None
    attribution: str = ""
    source_html: str = ""
    html: str = ""
    title: str | None = None
    content: str = ""
    links: list[str] = field(default_factory=list)
    additional_entries: list[IndexEntry] = field(default_factory=list)
    options: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.root_url:
            self.root_url = self.base_url

    def add_link(self, url: str) -> None:
        if url not in self.links:
            self.links.append(url)

    def add_entry(self, name: str, path: str, type: str) -> None:
        self.additional_entries.append(IndexEntry(name=name, path=path, type=type))


class Filter(ABC):
    """
    One stage of the page transformation pipeline.

    ``apply`` returns the transformed HTML and may record title, content,
    links or extra entries on the context. Filters that contribute index
    entries set ``emits_entries`` and override ``get_entries``.
    """

    name: ClassVar[str] = "filter"
    emits_entries: ClassVar[bool] = False

    def __init__(self) -> None:
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    def apply(self, html: str, context: FilterContext) -> str:
        """Transform ``html`` for the page described by ``context``."""

    def get_entries(self, html: str, context: FilterContext) -> list[IndexEntry]:
        return []

    # Query helpers

    @staticmethod
    def parse(html: str) -> BeautifulSoup:
        return html_query.parse(html)

    @staticmethod
    def source_doc(context: FilterContext) -> BeautifulSoup:
        """The page as fetched, parsed once and shared by later filters."""
        doc = context.options.get("source_doc")
        if doc is None:
            doc = context.options["source_doc"] = html_query.parse(context.source_html)
        return doc

    @staticmethod
    def css(node: Tag, selector: str) -> list[Tag]:
        return html_query.select(node, selector)

    @staticmethod
    def at_css(node: Tag, selector: str) -> Tag | None:
        return html_query.select_one(node, selector)

    # Page helpers

    @staticmethod
    def subpath(context: FilterContext, url: str | None = None) -> str:
        """Path of ``url`` (default: the current page) relative to the base URL."""
        url = url or context.current_url
        if url.startswith(context.base_url):
            path = url[len(context.base_url):]
        else:
            path = urlsplit(url).path
        return path.split("#", 1)[0].split("?", 1)[0].strip("/")

    @staticmethod
    def is_root_page(context: FilterContext) -> bool:
        return context.current_path in ("", ROOT_PAGE_PATH) or (
            context.current_url.rstrip("/") == context.root_url.rstrip("/")
        )

    @staticmethod
    def is_initial_page(context: FilterContext) -> bool:
        if Filter.is_root_page(context):
            return True
        initial = {p.strip("/") for p in context.initial_paths}
        return context.current_path in initial

    # URL classification

    @staticmethod
    def is_fragment_url(url: str) -> bool:
        return url.startswith("#")

    @staticmethod
    def is_data_url(url: str) -> bool:
        return url.startswith("data:")
