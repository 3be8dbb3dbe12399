"""
Documentation sites the crawler knows how to scrape.
"""

from .babel import babel_site
from .base import SiteDefinition, SiteRegistry
from .mdn import css_site, html_site, javascript_site
from .rust import rust_site
from .typescript import typescript_site


def default_sites() -> SiteRegistry:
    """Registry of every built-in documentation site."""
    registry = SiteRegistry()
    registry.register("babel", babel_site)
    registry.register("css", css_site)
    registry.register("html", html_site)
    registry.register("javascript", javascript_site)
    registry.register("rust", rust_site)
    registry.register("typescript", typescript_site)
    return registry


__all__ = [
    "SiteDefinition",
    "SiteRegistry",
    "babel_site",
    "css_site",
    "default_sites",
    "html_site",
    "javascript_site",
    "rust_site",
    "typescript_site",
]
