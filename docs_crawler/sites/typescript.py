"""
The TypeScript handbook (https://www.typescriptlang.org/docs/).
"""

from __future__ import annotations

from ..filters.clean_html import CleanHtmlFilter
from ..filters.normalize_urls import NormalizeUrlsFilter
from ..filters.registry import FilterRegistry
from ..models.policy import CrawlPolicy
from .base import SiteDefinition

BASE_URL = "https://www.typescriptlang.org/docs"

INITIAL_PATHS = [
    "/handbook/intro.html",
    "/handbook/typescript-in-5-minutes.html",
    "/handbook/2/basic-types.html",
    "/handbook/2/functions.html",
    "/handbook/2/classes.html",
]


def register_filters(registry: FilterRegistry) -> None:
    registry.register(
        "typescript_clean_html",
        lambda: CleanHtmlFilter(remove=["footer", "nav", "aside"]),
    )
    registry.register(
        "typescript_normalize_urls",
        lambda: NormalizeUrlsFilter(output_prefix="/docs/typescript/"),
    )


def typescript_site(version: str | None = None) -> SiteDefinition:
    return SiteDefinition(
        name="TypeScript",
        slug="typescript",
        version=version,
        root_title="TypeScript",
        attribution="© 2012-2023 Microsoft<br>Licensed under the Apache License, Version 2.0.",
        links={
            "home": "https://www.typescriptlang.org",
            "code": "https://github.com/microsoft/TypeScript",
        },
        policy=CrawlPolicy(base_url=BASE_URL, initial_paths=INITIAL_PATHS),
        filters=["typescript_clean_html", "typescript_normalize_urls"],
        register_filters=register_filters,
    )
