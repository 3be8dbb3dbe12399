"""
Test redirect bookkeeping and page re-keying.
"""

import pytest

from docs_crawler.core.redirects import RedirectResolver, url_path
from docs_crawler.models.policy import CrawlPolicy


class TestRedirectResolver:
    """Test recording redirects and moving stored pages."""

    @pytest.mark.unit
    def test_page_moves_to_effective_path(self):
        """Test that a page stored under the requested path is re-keyed."""
        resolver = RedirectResolver()
        resolver.record("https://site.org/a", "https://site.org/b")

        pages = resolver.apply({"/a": "X"})

        assert pages == {"/b": "X"}

    @pytest.mark.unit
    def test_keys_match_case_insensitively(self):
        """Test that stored paths are matched ignoring case."""
        resolver = RedirectResolver()
        resolver.record("https://site.org/Old/Page", "https://site.org/new/page")

        assert resolver.apply({"/old/page": "X", "/other": "Y"}) == {
            "/new/page": "X",
            "/other": "Y",
        }

    @pytest.mark.unit
    def test_identical_urls_ignored(self):
        """Test that a response from the requested URL records nothing."""
        resolver = RedirectResolver()
        resolver.record("https://site.org/a", "https://site.org/a")

        assert len(resolver) == 0
        assert resolver.effective_url("https://site.org/a") == "https://site.org/a"

    @pytest.mark.unit
    def test_case_only_redirects_keep_pages(self):
        """Test that a redirect changing only the case leaves keys untouched."""
        resolver = RedirectResolver()
        resolver.record("https://site.org/Intro", "https://site.org/intro")

        assert resolver.path_redirections() == {}
        assert resolver.apply({"/Intro": "X"}) == {"/Intro": "X"}

    @pytest.mark.unit
    def test_policy_paths(self):
        """Test re-keying with canonical page paths of a crawl policy."""
        policy = CrawlPolicy(base_url="https://site.org/docs/")
        resolver = RedirectResolver(path_for=policy.url_to_path)
        resolver.record(
            "https://site.org/docs/usage", "https://site.org/docs/config-files"
        )

        assert resolver.redirects == {
            "https://site.org/docs/usage": "https://site.org/docs/config-files"
        }
        assert resolver.apply({"usage": "X", "index": "Root"}) == {
            "config-files": "X",
            "index": "Root",
        }

    @pytest.mark.unit
    def test_url_path(self):
        """Test the default path extraction."""
        assert url_path("https://site.org/a/b?q=1") == "/a/b"
