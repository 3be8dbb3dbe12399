"""
Declarative description of a documentation site and the registry of known
sites.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import UnknownSiteError
from ..filters.pipeline import FilterPipeline
from ..filters.registry import FilterRegistry
from ..models.crawl import CrawlRequest
from ..models.doc import DocMeta, doc_directory_name
from ..models.policy import CrawlPolicy

logger = logging.getLogger(__name__)


class SiteDefinition(BaseModel):
    """Metadata, crawl policy and filter chain for one documentation site."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    slug: str
    type: str = "simple"
    version: str | None = None
    release: str | None = None
    root_title: str | None = None
    attribution: str = ""
    links: dict[str, str] = Field(default_factory=dict)
    policy: CrawlPolicy
    filters: list[str] = Field(default_factory=lambda: ["clean_html", "normalize_urls"])
    register_filters: Callable[[FilterRegistry], None] | None = Field(
        default=None, exclude=True
    )

    @property
    def directory_name(self) -> str:
        return doc_directory_name(self.slug, self.version)

    def build_pipeline(self, registry: FilterRegistry) -> FilterPipeline:
        """Register the site's own filters, then stack its filter chain."""
        if self.register_filters is not None:
            self.register_filters(registry)
        return FilterPipeline(registry, self.filters)

    def crawl_request(self, max_pages: int | None = None) -> CrawlRequest:
        return CrawlRequest(
            policy=self.policy,
            slug=self.slug,
            version=self.version,
            release=self.release,
            root_title=self.root_title,
            attribution=self.attribution,
            max_pages=max_pages,
        )

    def doc_meta(self, db_size: int = 0) -> DocMeta:
        return DocMeta(
            name=self.name,
            slug=self.slug,
            type=self.type,
            version=self.version,
            release=self.release,
            links=dict(self.links),
            attribution=self.attribution,
            db_size=db_size,
        )


SiteFactory = Callable[[str | None], SiteDefinition]


class SiteRegistry:
    """Site definitions by slug; each factory takes an optional version."""

    def __init__(self) -> None:
        self._factories: dict[str, SiteFactory] = {}

    def __contains__(self, slug: str) -> bool:
        return slug in self._factories

    def __len__(self) -> int:
        return len(self._factories)

    def register(self, slug: str, factory: SiteFactory) -> None:
        self._factories[slug] = factory

    def slugs(self) -> list[str]:
        return sorted(self._factories)

    def get(self, slug: str, version: str | None = None) -> SiteDefinition:
        factory = self._factories.get(slug)
        if factory is None:
            raise UnknownSiteError(slug)
        return factory(version)

    def all(self) -> list[SiteDefinition]:
        return [self._factories[slug](None) for slug in self.slugs()]
