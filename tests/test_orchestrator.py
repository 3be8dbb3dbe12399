"""
Integration tests for scraping a registered site end to end.
"""

import json

import pytest

from docs_crawler.config import DocsCrawlerSettings
from docs_crawler.core.orchestrator import DocsService
from docs_crawler.core.rate_limiter import RateLimiter
from docs_crawler.exceptions import UnknownSiteError
from docs_crawler.models.crawl import CrawlStatus
from docs_crawler.models.policy import CrawlPolicy
from docs_crawler.sites.base import SiteDefinition, SiteRegistry
from tests.helpers import BASE_URL, FakeSite


def example_registry(**policy_options) -> SiteRegistry:
    def example_site(version: str | None = None) -> SiteDefinition:
        return SiteDefinition(
            name="Example",
            slug="example",
            version=version,
            release="2.0.0" if version else "3.1.0",
            policy=CrawlPolicy(base_url=BASE_URL, **policy_options),
            filters=["clean_html", "normalize_urls", "entries"],
        )

    registry = SiteRegistry()
    registry.register("example", example_site)
    return registry


@pytest.fixture
def make_service(test_settings: DocsCrawlerSettings):
    def build(site: FakeSite, sites: SiteRegistry | None = None) -> DocsService:
        return DocsService(
            config=test_settings,
            sites=sites or example_registry(),
            transport=site.transport,
            rate_limiter=RateLimiter(limit=10_000, min_interval=0.0),
        )

    return build


class TestDocsService:
    """Test scraping into the docs directory."""

    @pytest.mark.integration
    async def test_scrape_stores_doc_and_manifest(self, make_service, two_page_site):
        """Test that a scrape writes the doc files and refreshes the manifest."""
        service = make_service(two_page_site)

        result, meta = await service.scrape("example")

        doc_dir = service.docs_dir / "example"
        assert result.status == CrawlStatus.COMPLETED
        assert sorted(p.name for p in doc_dir.iterdir()) == [
            "db.json",
            "entries.json",
            "index.json",
            "meta.json",
        ]
        assert sorted(json.loads((doc_dir / "db.json").read_text())) == ["guide", "index"]
        assert meta.db_size == (doc_dir / "db.json").stat().st_size
        assert meta.release == "3.1.0"

        manifest = json.loads((service.docs_dir / "manifest.json").read_text())
        assert [(d["slug"], d["name"]) for d in manifest["docs"]] == [("example", "Example")]

    @pytest.mark.integration
    async def test_versioned_scrape(self, make_service, two_page_site):
        """Test that versions get their own directory."""
        service = make_service(two_page_site)

        _result, meta = await service.scrape("example", version="2")

        assert meta.directory_name == "example~2"
        assert (service.docs_dir / "example~2" / "index.json").exists()
        assert service.generate_manifest().find("example").version == "2"

    @pytest.mark.integration
    async def test_uncrawlable_site_stores_nothing(self, make_service, two_page_site):
        """Test that a site with no admissible seed fails without output."""
        service = make_service(
            two_page_site, sites=example_registry(skip_link=lambda url: True)
        )

        result, _meta = await service.scrape("example")

        assert result.status == CrawlStatus.FAILED
        assert result.errors
        assert two_page_site.requested == []
        assert not (service.docs_dir / "example").exists()

    @pytest.mark.integration
    async def test_unknown_site(self, make_service, two_page_site):
        """Test that an unregistered slug is reported."""
        with pytest.raises(UnknownSiteError):
            await make_service(two_page_site).scrape("nope")

    @pytest.mark.unit
    def test_list_sites(self, make_service, two_page_site):
        """Test listing registered sites."""
        sites = make_service(two_page_site).list_sites()
        assert [site.slug for site in sites] == ["example"]
