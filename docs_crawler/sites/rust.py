"""
The Rust documentation (https://doc.rust-lang.org/).
"""

from __future__ import annotations

from ..filters.clean_html import CleanHtmlFilter
from ..filters.normalize_urls import NormalizeUrlsFilter
from ..filters.registry import FilterRegistry
from ..models.policy import CrawlPolicy
from .base import SiteDefinition

BASE_URL = "https://doc.rust-lang.org/"
BOOKS = ["std", "book", "reference", "cargo", "rustc"]


def register_filters(registry: FilterRegistry) -> None:
    registry.register("rust_clean_html", lambda: CleanHtmlFilter(remove=["footer", "nav"]))
    registry.register(
        "rust_normalize_urls", lambda: NormalizeUrlsFilter(output_prefix="/docs/rust/")
    )


def rust_site(version: str | None = None) -> SiteDefinition:
    return SiteDefinition(
        name="Rust",
        slug="rust",
        version=version,
        root_title="Rust",
        attribution=(
            "© 2010 The Rust Project Developers<br>"
            "Licensed under the Apache License, Version 2.0 or the MIT license, at your option."
        ),
        links={"home": "https://www.rust-lang.org/", "code": "https://github.com/rust-lang/rust"},
        policy=CrawlPolicy(
            base_url=BASE_URL,
            initial_paths=[f"{book}/index.html" for book in BOOKS],
        ),
        filters=["rust_clean_html", "rust_normalize_urls"],
        register_filters=register_filters,
    )
