"""
Babel documentation (https://babeljs.io/docs/).
"""

from __future__ import annotations

from ..filters.clean_html import CleanHtmlFilter
from ..filters.entries import EntriesFilter
from ..filters.registry import FilterRegistry
from ..models.policy import CrawlPolicy
from .base import SiteDefinition

BASE_URL = "https://babeljs.io/docs/"
LATEST_RELEASE = "7.21.4"
RELEASES = {"6": "6.26.1", "7": LATEST_RELEASE}

SKIP_PATTERNS = [
    "usage/.*",
    "configuration/.*",
    "learn/.*",
    "v7-migration/.*",
    "v7-migration-api/.*",
    "editors/.*",
    "presets/.*",
    "caveats/.*",
    "faq/.*",
    "roadmap/.*",
]

CHROME_SELECTORS = [
    ".fixedHeaderContainer",
    ".toc",
    ".toc-headings",
    ".nav-footer",
    ".docs-prevnext",
    "[class*='codeBlockTitle']",
]

ENTRY_TYPES = {
    "Usage": [
        "Options",
        "Plugins",
        "Config Files",
        "Compiler assumptions",
        "@babel/cli",
        "@babel/polyfill",
        "@babel/plugin-transform-runtime",
        "@babel/register",
    ],
    "Presets": ["@babel/preset"],
    "Tooling": [
        "@babel/parser",
        "@babel/core",
        "@babel/generator",
        "@babel/code-frame",
        "@babel/helper",
        "@babel/runtime",
        "@babel/template",
        "@babel/traverse",
        "@babel/types",
        "@babel/standalone",
    ],
}


def _is_legacy_link(url: str) -> bool:
    return "https://babeljs.io/docs/en/" in url


class BabelEntriesFilter(EntriesFilter):
    """Babel pages are all entries, the root included."""

    name = "babel_entries"

    def __init__(self) -> None:
        super().__init__(
            name_types=ENTRY_TYPES,
            path_types={"babel-plugin": "Other Plugins"},
        )

    def include_default_entry(self, doc, context) -> bool:
        return True


def register_filters(registry: FilterRegistry) -> None:
    registry.register(
        "babel_clean_html",
        lambda: CleanHtmlFilter(container=".theme-doc-markdown", remove=CHROME_SELECTORS),
    )
    registry.register(BabelEntriesFilter.name, BabelEntriesFilter)


def resolve_release(version: str | None) -> str:
    return RELEASES.get(version or "", LATEST_RELEASE)


def babel_site(version: str | None = None) -> SiteDefinition:
    release = resolve_release(version)
    return SiteDefinition(
        name="Babel",
        slug="babel",
        type="simple",
        version=version,
        release=release,
        root_title="Babel",
        attribution="© 2014-present Sebastian McKenzie<br>Licensed under the MIT License.",
        links={"home": "https://babeljs.io/", "code": "https://github.com/babel/babel"},
        policy=CrawlPolicy(
            base_url=BASE_URL,
            trailing_slash=True,
            skip_patterns=SKIP_PATTERNS,
            skip_link=_is_legacy_link,
        ),
        filters=["babel_clean_html", "normalize_urls", "babel_entries"],
        register_filters=register_filters,
    )
