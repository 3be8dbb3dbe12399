"""
MDN Web Docs reference sections: HTML, CSS and JavaScript.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup

from ..filters.base import FilterContext
from ..filters.clean_html import CleanHtmlFilter
from ..filters.entries import EntriesFilter
from ..filters.normalize_urls import NormalizeUrlsFilter
from ..filters.registry import FilterRegistry
from ..models.entries import IndexEntry
from ..models.policy import CrawlPolicy
from .base import SiteDefinition

MDN_ROOT = "https://developer.mozilla.org/en-US/docs/Web"
ATTRIBUTION = (
    "© 2005–2023 MDN contributors.\n"
    "Licensed under the Creative Commons Attribution-ShareAlike License v2.5 or later."
)
CONTAINER = "#content > .main-page-content"
WRAPPERS = ["section", "div.section", "div.row"]
PAGE_CHROME = [
    "header",
    "footer",
    "nav",
    ".article-actions",
    ".section-edit",
    ".documentation-actions",
    ".metadata-container",
]

_INPUT_TYPE_RE = re.compile(r"input\.([-\w]+)")


class HtmlEntriesFilter(EntriesFilter):
    """Entries for the HTML reference, named after the page slug."""

    name = "html_entries"
    HEADING_PAGES = {"Element/Heading_Elements": ["h1", "h2", "h3", "h4", "h5", "h6"]}

    def include_default_entry(self, doc: BeautifulSoup, context: FilterContext) -> bool:
        if self.is_root_page(context) or context.current_path in self.HEADING_PAGES:
            return False
        source = self.source_doc(context)
        indicator = self.at_css(source, ".overheadIndicator, .blockIndicator")
        return not (
            indicator is not None and "not on a standards track" in indicator.get_text()
        )

    def get_name(self, doc: BeautifulSoup, context: FilterContext) -> str:
        name = context.current_path.replace("_", " ").replace("/", ".").strip()
        if name.lower().startswith("global attributes."):
            name = name[len("global attributes."):] + " (attribute)"
        name = name.replace("Element.", "").lower()
        match = _INPUT_TYPE_RE.search(name)
        if match:
            name = f'input type="{match.group(1)}"'
        return name

    def get_type(
        self, doc: BeautifulSoup, context: FilterContext, name: str
    ) -> str | None:
        slug = context.current_path
        if "CORS" in slug or "Using" in slug:
            return "Miscellaneous"
        source = self.source_doc(context)
        if self.at_css(source, ".deprecated, .non-standard, .obsolete") is not None:
            return "Obsolete"
        if slug.startswith("Global_attr"):
            return "Attributes"
        if slug.startswith("Element/"):
            return "Elements"
        return "Miscellaneous"

    def additional_entries(
        self, doc: BeautifulSoup, context: FilterContext
    ) -> list[IndexEntry]:
        slug = context.current_path
        if slug in self.HEADING_PAGES:
            return [
                IndexEntry(name=tag, path=slug, type="Elements")
                for tag in self.HEADING_PAGES[slug]
            ]
        source = self.source_doc(context)
        if slug == "Link_types":
            entries = []
            for code in self.css(source, ".standard-table td:first-child > code"):
                name = f"rel: {code.get_text().strip()}"
                anchor = name.lower().replace(" ", "-")
                entries.append(
                    IndexEntry(name=name, path=f"{slug}#{anchor}", type="Attributes")
                )
            return entries
        if slug != "Attributes":
            return []

        entries = []
        for cell in self.css(source, ".standard-table td:first-child"):
            description = cell.find_next_sibling("td")
            if description is not None and "Global attribute" in description.get_text():
                continue
            code = cell.find("code")
            name = (code or cell).get_text().strip()
            if not name:
                continue
            name += " (attribute)"
            anchor = name.lower().replace(" ", "-")
            entries.append(
                IndexEntry(name=name, path=f"{slug}#{anchor}", type="Attributes")
            )
        return entries


class JavaScriptEntriesFilter(EntriesFilter):
    """Entries for the JavaScript reference, typed by the page breadcrumbs."""

    name = "javascript_entries"
    BREADCRUMB_TYPES = [
        ("Statements", "Statements"),
        ("Operators", "Operators"),
        ("Functions", "Functions"),
        ("Global Objects", "Objects"),
        ("Classes", "Objects"),
    ]

    def include_default_entry(self, doc: BeautifulSoup, context: FilterContext) -> bool:
        return not self.is_initial_page(context)

    def get_type(
        self, doc: BeautifulSoup, context: FilterContext, name: str
    ) -> str | None:
        breadcrumbs = self.at_css(self.source_doc(context), ".breadcrumbs-container")
        if breadcrumbs is not None:
            text = breadcrumbs.get_text()
            for marker, entry_type in self.BREADCRUMB_TYPES:
                if marker in text:
                    return entry_type
        return "Others"


def _mdn_cleaner(extra_unwrap: list[str] | None = None, extra_remove: list[str] | None = None):
    def factory() -> CleanHtmlFilter:
        return CleanHtmlFilter(
            container=CONTAINER,
            remove=PAGE_CHROME + list(extra_remove or []),
            unwrap=WRAPPERS + list(extra_unwrap or []),
        )

    return factory


def register_html_filters(registry: FilterRegistry) -> None:
    registry.register("html_clean_html", _mdn_cleaner())
    registry.register(
        "html_normalize_urls", lambda: NormalizeUrlsFilter(output_prefix="/docs/html/")
    )
    registry.register(HtmlEntriesFilter.name, HtmlEntriesFilter)


def register_css_filters(registry: FilterRegistry) -> None:
    registry.register("css_clean_html", _mdn_cleaner())
    registry.register(
        "css_normalize_urls", lambda: NormalizeUrlsFilter(output_prefix="/docs/css/")
    )


def register_javascript_filters(registry: FilterRegistry) -> None:
    registry.register(
        "javascript_clean_html",
        _mdn_cleaner(
            extra_unwrap=["div.notice", "div.deprecated", "div.obsolete"],
            extra_remove=["a[href*='additional_examples']"],
        ),
    )
    registry.register(
        "javascript_normalize_urls",
        lambda: NormalizeUrlsFilter(output_prefix="/docs/javascript/"),
    )
    registry.register(JavaScriptEntriesFilter.name, JavaScriptEntriesFilter)


def html_site(version: str | None = None) -> SiteDefinition:
    return SiteDefinition(
        name="HTML",
        slug="html",
        version=version,
        root_title="HTML",
        attribution=ATTRIBUTION,
        links={
            "home": f"{MDN_ROOT}/HTML",
            "code": "https://github.com/mdn/content/tree/main/files/en-us/web/html",
        },
        policy=CrawlPolicy(
            base_url=f"{MDN_ROOT}/HTML",
            initial_paths=["/Element", "/Global_attributes"],
        ),
        filters=["html_clean_html", "html_normalize_urls", "html_entries"],
        register_filters=register_html_filters,
    )


def css_site(version: str | None = None) -> SiteDefinition:
    return SiteDefinition(
        name="CSS",
        slug="css",
        version=version,
        root_title="CSS",
        attribution=ATTRIBUTION,
        links={
            "home": f"{MDN_ROOT}/CSS",
            "code": "https://github.com/mdn/content/tree/main/files/en-us/web/css",
        },
        policy=CrawlPolicy(
            base_url=f"{MDN_ROOT}/CSS",
            initial_paths=["/Reference", "/Selectors"],
        ),
        filters=["css_clean_html", "css_normalize_urls"],
        register_filters=register_css_filters,
    )


def javascript_site(version: str | None = None) -> SiteDefinition:
    return SiteDefinition(
        name="JavaScript",
        slug="javascript",
        version=version,
        root_title="JavaScript",
        attribution=ATTRIBUTION,
        links={
            "home": f"{MDN_ROOT}/JavaScript",
            "code": "https://github.com/mdn/content/tree/main/files/en-us/web/javascript",
        },
        policy=CrawlPolicy(
            base_url=f"{MDN_ROOT}/JavaScript/Reference",
            initial_paths=["/Global_Objects", "/Operators", "/Statements"],
            skip_paths=[
                "/additional_examples",
                "/noSuchMethod",
                "/Deprecated_and_obsolete_features",
            ],
            replace_paths={
                "/template_strings": "/Template_literals",
                "/default_parameters": "/Default_parameters",
                "/rest_parameters": "/Rest_parameters",
                "/spread_operator": "/Spread_syntax",
                "/destructuring_assignment": "/Destructuring_assignment",
            },
        ),
        filters=[
            "javascript_clean_html",
            "javascript_normalize_urls",
            "javascript_entries",
        ],
        register_filters=register_javascript_filters,
    )
