"""
Crawl orchestrator: turns a site slug into a stored documentation set.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

import httpx

from ..config import DocsCrawlerSettings, get_settings
from ..crawlers.web import WebCrawlStrategy
from ..filters.registry import FilterRegistry, default_registry
from ..models.crawl import CrawlResult, CrawlStatus
from ..models.doc import DocMeta, Manifest
from ..sites import SiteDefinition, SiteRegistry, default_sites
from .doc_store import DocStore
from .fetcher import HttpFetcher
from .index import EntryIndex
from .manifest import write_manifest
from .page_db import PageDb
from .rate_limiter import RateLimiter
from .storage import FileStore

logger = logging.getLogger(__name__)


class DocsService:
    """
    Runs crawls for registered documentation sites and stores the output.

    One directory per documentation set (``slug`` or ``slug~version``) below
    the configured docs path, plus a manifest.json describing all of them.
    """

    def __init__(
        self,
        config: DocsCrawlerSettings | None = None,
        sites: SiteRegistry | None = None,
        filters: FilterRegistry | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        rate_limiter: RateLimiter | None = None,
    ) -> None:
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.config = config or get_settings()
        self.sites = sites or default_sites()
        self.filters = filters or default_registry()
        self._transport = transport
        self._rate_limiter = rate_limiter

    @property
    def docs_dir(self) -> Path:
        return self.config.docs_dir

    def list_sites(self) -> list[SiteDefinition]:
        return self.sites.all()

    def _store_for(self, site: SiteDefinition) -> FileStore:
        return FileStore(self.docs_dir / site.directory_name)

    async def crawl(
        self,
        site: SiteDefinition,
        max_concurrency: int | None = None,
        progress_callback: Callable[[int, int, str | None], None] | None = None,
    ) -> CrawlResult:
        """Crawl ``site`` without storing anything."""
        pipeline = site.build_pipeline(self.filters)
        request = site.crawl_request(max_pages=self.config.crawl_max_pages)
        rate_limiter = self._rate_limiter or RateLimiter(
            limit=self.config.rate_limit_per_minute,
            min_interval=self.config.min_request_interval,
        )

        async with HttpFetcher(
            self.config, transport=self._transport, max_connections=max_concurrency
        ) as fetcher:
            strategy = WebCrawlStrategy(
                pipeline,
                fetcher,
                rate_limiter=rate_limiter,
                max_concurrency=max_concurrency or self.config.max_concurrent_requests,
            )
            if not await strategy.validate_request(request):
                return CrawlResult(
                    pages=PageDb(),
                    index=EntryIndex(),
                    status=CrawlStatus.FAILED,
                    errors=[f"No crawlable seed URL for {site.slug}"],
                )
            return await strategy.execute(request, progress_callback)

    async def scrape(
        self,
        slug: str,
        version: str | None = None,
        max_concurrency: int | None = None,
        progress_callback: Callable[[int, int, str | None], None] | None = None,
    ) -> tuple[CrawlResult, DocMeta]:
        """
        Crawl the site registered under ``slug`` and store its pages, index
        and metadata, then refresh the manifest.
        """
        site = self.sites.get(slug, version)
        self.logger.info(f"Scraping {site.name} ({site.directory_name})")

        result = await self.crawl(site, max_concurrency, progress_callback)
        if result.status == CrawlStatus.FAILED:
            self.logger.error(f"Crawl of {site.name} failed: {'; '.join(result.errors)}")
            return result, site.doc_meta()

        meta = DocStore(self._store_for(site)).save(result, site.doc_meta())
        self.generate_manifest()
        return result, meta

    def generate_manifest(self) -> Manifest:
        return write_manifest(FileStore(self.docs_dir))

