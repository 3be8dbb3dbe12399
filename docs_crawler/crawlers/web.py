"""
Breadth-first crawl of a documentation site.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from urllib.parse import urljoin

from ..config import get_settings
from ..core import html as html_query
from ..core.fetcher import HttpFetcher
from ..core.index import EntryIndex
from ..core.page_db import PageDb
from ..core.rate_limiter import RateLimiter
from ..core.redirects import RedirectResolver
from ..exceptions import FetchError
from ..filters.base import FilterContext
from ..filters.pipeline import FilterPipeline
from ..models.crawl import (
    CrawlRequest,
    CrawlResult,
    CrawlStatistics,
    CrawlStatus,
    FetchResponse,
)
from ..models.entries import IndexEntry
from .base import BaseCrawlStrategy, ProgressCallback

logger = logging.getLogger(__name__)

DEFAULT_ENTRY_TYPE = "Other"
UNFOLLOWED_PREFIXES = ("#", "mailto:", "javascript:", "data:", "tel:")


@dataclass
class PageOutcome:
    """What a fetch task hands back to the crawl loop."""

    url: str
    response: FetchResponse | None = None
    context: FilterContext | None = None
    error: Exception | None = None


class WebCrawlStrategy(BaseCrawlStrategy):
    """
    Crawls one documentation site breadth-first.

    Fetch tasks only fetch and filter. The crawl loop is the single owner
    of the frontier, the visited set, the page map and the entry list, so
    admission of a URL is one step and no lock is needed.
    """

    def __init__(
        self,
        pipeline: FilterPipeline,
        fetcher: HttpFetcher,
        rate_limiter: RateLimiter | None = None,
        max_concurrency: int | None = None,
    ) -> None:
        super().__init__()
        self.pipeline = pipeline
        self.fetcher = fetcher
        self.rate_limiter = rate_limiter or RateLimiter()
        self.max_concurrency = max_concurrency or get_settings().max_concurrent_requests

    async def validate_request(self, request: CrawlRequest) -> bool:
        """A crawl needs at least one seed URL its own policy accepts."""
        seeds = request.policy.initial_urls()
        if not any(request.policy.should_process_url(url) for url in seeds):
            self.logger.warning(f"No seed URL of {request.policy.base_url} is crawlable")
            return False
        return True

    async def execute(
        self,
        request: CrawlRequest,
        progress_callback: ProgressCallback | None = None,
    ) -> CrawlResult:
        """Crawl the site described by ``request`` and collect pages and entries."""
        policy = request.policy
        start_time = time.time()
        result = CrawlResult(pages=PageDb(), index=EntryIndex(), status=CrawlStatus.RUNNING)
        stats = result.statistics

        resolver = RedirectResolver(path_for=policy.url_to_path)
        frontier: deque[str] = deque()
        visited: set[str] = set()
        entries: list[IndexEntry] = []

        def admit(url: str) -> bool:
            try:
                url = policy.normalize_url(url)
                if url in visited:
                    return False
                if request.max_pages is not None and len(visited) >= request.max_pages:
                    return False
                if not policy.should_process_url(url):
                    return False
            except ValueError as e:
                self.logger.debug(f"Ignoring malformed URL {url!r}: {e}")
                return False
            visited.add(url)
            frontier.append(url)
            return True

        for seed in policy.initial_urls():
            admit(seed)

        self.logger.info(
            f"Starting crawl of {policy.base_url} with {len(frontier)} seed URLs "
            f"(concurrency: {self.max_concurrency})"
        )

        in_flight: dict[asyncio.Task[PageOutcome], str] = {}
        try:
            while frontier or in_flight:
                while frontier and len(in_flight) < self.max_concurrency:
                    url = frontier.popleft()
                    task = asyncio.create_task(self._process_url(url, request))
                    in_flight[task] = url

                done, _pending = await asyncio.wait(
                    in_flight, return_when=asyncio.FIRST_COMPLETED
                )
                for task in done:
                    url = in_flight.pop(task)
                    stats.total_pages_requested += 1
                    try:
                        outcome = task.result()
                    except Exception as e:
                        self.logger.error(f"Unexpected error processing {url}: {e}")
                        stats.total_pages_failed += 1
                        stats.record_error(e)
                        result.errors.append(f"{url}: {e}")
                        continue

                    self._handle_outcome(
                        outcome, request, result, resolver, entries, admit, visited
                    )
                    self._report_progress(
                        progress_callback,
                        stats.total_pages_requested,
                        len(visited),
                        url,
                    )
        finally:
            for task in in_flight:
                task.cancel()

        resolver.apply(result.pages)
        result.redirects = resolver.redirects
        result.index.add_many(entries)

        stats.crawl_duration_seconds = time.time() - start_time
        result.status = CrawlStatus.COMPLETED
        result.end_time = datetime.now(timezone.utc)

        self.logger.info(
            f"Crawl of {policy.base_url} completed: {len(result.pages)} pages, "
            f"{len(result.index)} entries, {stats.total_pages_failed} failures "
            f"in {stats.crawl_duration_seconds:.1f}s"
        )
        return result

    async def _process_url(self, url: str, request: CrawlRequest) -> PageOutcome:
        await self.rate_limiter.wait()
        try:
            response = await self.fetcher.fetch(url)
        except FetchError as e:
            return PageOutcome(url=url, error=e)

        if not self._should_process_response(response, request):
            return PageOutcome(url=url, response=response)

        context = self._build_context(request, response)
        self.pipeline.run(response.body, context)
        return PageOutcome(url=url, response=response, context=context)

    def _should_process_response(
        self, response: FetchResponse, request: CrawlRequest
    ) -> bool:
        if not response.is_success:
            self.logger.debug(f"Skipping {response.url}: HTTP {response.status}")
            return False
        if not response.is_html:
            self.logger.debug(
                f"Skipping {response.url}: content type {response.content_type!r}"
            )
            return False
        if not request.policy.is_internal(response.effective_url):
            self.logger.debug(
                f"Skipping {response.url}: redirected off-site to {response.effective_url}"
            )
            return False
        return True

    def _build_context(
        self, request: CrawlRequest, response: FetchResponse
    ) -> FilterContext:
        policy = request.policy
        return FilterContext(
            base_url=policy.matching_base(response.effective_url) or policy.base_url,
            current_url=response.effective_url,
            current_path=policy.url_to_path(response.effective_url),
            root_url=policy.root_url,
            root_path=policy.root_path,
            root_title=request.root_title,
            initial_paths=list(policy.initial_paths),
            slug=request.slug,
            version=request.version,
            release=request.release,
            attribution=request.attribution,
            source_html=response.body,
        )

    def _handle_outcome(
        self,
        outcome: PageOutcome,
        request: CrawlRequest,
        result: CrawlResult,
        resolver: RedirectResolver,
        entries: list[IndexEntry],
        admit: Callable[[str], bool],
        visited: set[str],
    ) -> None:
        stats: CrawlStatistics = result.statistics
        policy = request.policy

        if outcome.error is not None:
            self.logger.warning(f"Failed to fetch {outcome.url}: {outcome.error}")
            stats.total_pages_failed += 1
            stats.record_error(outcome.error)
            result.errors.append(str(outcome.error))
            return

        response = outcome.response
        if response is None:
            return
        stats.total_pages_fetched += 1
        stats.total_bytes_downloaded += len(response.body.encode("utf-8"))

        if response.was_redirected:
            resolver.record(outcome.url, response.effective_url)
            visited.add(policy.normalize_url(response.effective_url))
            stats.total_redirects += 1

        context = outcome.context
        if context is None:
            stats.total_pages_skipped += 1
            return

        for link in self._extract_links(context, response.effective_url):
            if admit(link):
                stats.total_links_discovered += 1

        if not context.content:
            self.logger.debug(f"No content left for {outcome.url} after filtering")
            stats.total_pages_skipped += 1
            return

        path = policy.url_to_path(outcome.url)
        result.pages[path] = context.content
        stats.total_pages_stored += 1

        if self.pipeline.emits_entries:
            entries.extend(self.pipeline.get_entries(context))
        else:
            entries.append(
                IndexEntry(
                    name=context.title or context.current_path,
                    path=context.current_path,
                    type=DEFAULT_ENTRY_TYPE,
                )
            )
        entries.extend(context.additional_entries)

    def _extract_links(self, context: FilterContext, page_url: str) -> list[str]:
        """Absolute targets of the page's hyperlinks, in document order."""
        links: list[str] = []
        doc = html_query.parse(context.html)
        for anchor in html_query.select(doc, "a[href]"):
            href = (html_query.attr(anchor, "href") or "").strip()
            if not href or href.lower().startswith(UNFOLLOWED_PREFIXES):
                continue
            try:
                links.append(urljoin(page_url, href))
            except ValueError as e:
                self.logger.debug(f"Ignoring malformed link {href!r} on {page_url}: {e}")
        links.extend(context.links)
        return links
