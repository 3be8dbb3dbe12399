"""
Pytest configuration and fixtures for docs-crawler testing.

HTTP traffic never leaves the process: fixture sites are served through
httpx.MockTransport and the rate limiter runs without delays.
"""

import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

from docs_crawler.config import DocsCrawlerSettings
from docs_crawler.core.fetcher import HttpFetcher
from docs_crawler.core.rate_limiter import RateLimiter
from docs_crawler.filters.registry import FilterRegistry, default_registry
from docs_crawler.models.policy import CrawlPolicy
from tests.helpers import BASE_URL, FakeSite, html_page


@pytest.fixture
def temp_directory() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def test_settings(temp_directory: Path) -> DocsCrawlerSettings:
    """Settings with no retries, no pacing and output in a temp directory."""
    return DocsCrawlerSettings(
        docs_path=str(temp_directory / "docs"),
        log_level="WARNING",
        fetch_max_retries=1,
        retry_initial_delay=0.0,
        retry_max_delay=0.0,
        rate_limit_per_minute=10_000,
        min_request_interval=0.0,
        max_concurrent_requests=4,
    )


@pytest.fixture
def rate_limiter() -> RateLimiter:
    return RateLimiter(limit=10_000, min_interval=0.0)


@pytest.fixture
def filter_registry() -> FilterRegistry:
    return default_registry()


@pytest.fixture
def policy() -> CrawlPolicy:
    return CrawlPolicy(base_url=BASE_URL)


@pytest.fixture
def two_page_site() -> FakeSite:
    """Root page and one guide page; both link to an external site."""
    return FakeSite(
        {
            BASE_URL: html_page(
                "Example Docs",
                '<h1>Example Docs</h1>'
                '<p><a href="guide">Guide</a></p>'
                '<p><a href="https://external.example.org/page">Elsewhere</a></p>'
                '<p><a href="#top">Top</a> <a href="mailto:docs@example.com">Mail</a></p>',
            ),
            f"{BASE_URL}guide": html_page(
                "Guide",
                '<h1>Guide</h1><p>Read this first.</p>'
                f'<a href="{BASE_URL}">Home</a>'
                '<a href="https://external.example.org/other">More elsewhere</a>',
            ),
        }
    )


@pytest.fixture
async def fetcher_factory(test_settings: DocsCrawlerSettings):
    """Build HttpFetchers over fake sites and close them after the test."""
    fetchers: list[HttpFetcher] = []

    def build(site: FakeSite) -> HttpFetcher:
        fetcher = HttpFetcher(test_settings, transport=site.transport)
        fetchers.append(fetcher)
        return fetcher

    yield build

    for fetcher in fetchers:
        await fetcher.close()
