"""
Exception hierarchy for docs-crawler.

Transport and content problems are recovered from inside a crawl; only
storage problems are fatal and reach the caller.
"""


class DocsCrawlerError(Exception):
    """Base class for all docs-crawler errors."""


class FetchError(DocsCrawlerError):
    """A page could not be retrieved."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(f"{url}: {message}")
        self.url = url


class StorageError(DocsCrawlerError):
    """Crawl output could not be written or read back."""


class UnknownFilterError(DocsCrawlerError, KeyError):
    """No filter factory is registered under the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown filter: {self.name!r}"


class UnknownSiteError(DocsCrawlerError, KeyError):
    """No site definition matches the requested slug."""

    def __init__(self, slug: str) -> None:
        super().__init__(slug)
        self.slug = slug

    def __str__(self) -> str:
        return f"Unknown documentation site: {self.slug!r}"
