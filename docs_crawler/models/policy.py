"""
Per-site crawl policy: which URLs belong to a documentation site and how
they map to canonical page paths.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from functools import cached_property
from urllib.parse import urldefrag, urlsplit

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

ROOT_PAGE_PATH = "index"


def join_url(base: str, path: str) -> str:
    """Resolve a site-relative path against a base URL."""
    if path.startswith(("http://", "https://")):
        return path
    path = path.lstrip("/")
    if not path:
        return base
    return base.rstrip("/") + "/" + path


def compile_patterns(patterns: list[str] | None) -> list[re.Pattern[str]]:
    """Compile regex patterns, dropping malformed ones (they match nothing)."""
    compiled: list[re.Pattern[str]] = []
    for pattern in patterns or []:
        try:
            compiled.append(re.compile(pattern))
        except re.error as e:
            logger.debug(f"Ignoring malformed URL pattern {pattern!r}: {e}")
    return compiled


def _path_matches(path: str, candidate: str) -> bool:
    candidate = candidate.strip("/")
    return path == candidate or path.startswith(candidate + "/")


class CrawlPolicy(BaseModel):
    """Rules deciding which URLs a crawl of one documentation site follows."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    base_url: str
    base_urls: list[str] = Field(
        default_factory=list, description="Mirrors treated as the same site"
    )
    root_path: str = ""
    initial_paths: list[str] = Field(default_factory=list)
    skip_paths: list[str] = Field(default_factory=list)
    skip_patterns: list[str] = Field(default_factory=list)
    only_paths: list[str] | None = None
    only_patterns: list[str] | None = None
    replace_paths: dict[str, str] = Field(
        default_factory=dict, description="Moved page paths and their new location"
    )
    skip_link: Callable[[str], bool] | None = Field(default=None, exclude=True)
    trailing_slash: bool = False

    @field_validator("base_url", "base_urls")
    @classmethod
    def validate_urls(cls, v: str | list[str]) -> str | list[str]:
        for url in [v] if isinstance(v, str) else v:
            if not url.startswith(("http://", "https://")):
                raise ValueError(f"Base URL must be absolute http(s): {url}")
        return v

    @property
    def all_base_urls(self) -> list[str]:
        """Primary base URL followed by its mirrors."""
        return [self.base_url] + [u for u in self.base_urls if u != self.base_url]

    @property
    def root_url(self) -> str:
        return self.normalize_url(join_url(self.base_url, self.root_path))

    @cached_property
    def compiled_skip_patterns(self) -> list[re.Pattern[str]]:
        return compile_patterns(self.skip_patterns)

    @cached_property
    def compiled_only_patterns(self) -> list[re.Pattern[str]]:
        return compile_patterns(self.only_patterns)

    @cached_property
    def replaced_paths(self) -> dict[str, str]:
        return {
            old.strip("/"): new.strip("/") for old, new in self.replace_paths.items()
        }

    @cached_property
    def seed_urls(self) -> frozenset[str]:
        return frozenset(self.initial_urls())

    def initial_urls(self) -> list[str]:
        """Root URL and initial paths resolved against every base URL."""
        urls: list[str] = []
        for base in self.all_base_urls:
            for path in [self.root_path, *self.initial_paths]:
                url = self.normalize_url(join_url(base, path))
                if url not in urls:
                    urls.append(url)
        return urls

    def normalize_url(self, url: str) -> str:
        """
        Drop the fragment, swap replaced paths for their current location and
        apply the trailing-slash convention.
        """
        url, _fragment = urldefrag(url)
        if self.replace_paths:
            base = self.matching_base(url)
            if base is not None:
                replacement = self.replaced_paths.get(self.url_to_path(url))
                if replacement is not None:
                    url = join_url(base, replacement)
        if self.trailing_slash:
            parts = urlsplit(url)
            last_segment = parts.path.rsplit("/", 1)[-1]
            if parts.path and not parts.path.endswith("/") and "." not in last_segment:
                url = parts._replace(path=parts.path + "/").geturl()
        return url

    def matching_base(self, url: str) -> str | None:
        for base in self.all_base_urls:
            if url.startswith(base) or url == base.rstrip("/"):
                return base
        return None

    def is_internal(self, url: str) -> bool:
        return self.matching_base(url) is not None

    def url_to_path(self, url: str) -> str:
        """
        Canonical page path of a URL: the part after its base URL, without
        surrounding slashes, query or fragment. The root maps to "index".
        """
        base = self.matching_base(url)
        if base is None:
            path = urlsplit(url).path
        else:
            path = url[len(base):] if url.startswith(base) else ""
        path = path.split("#", 1)[0].split("?", 1)[0].strip("/")
        return path or ROOT_PAGE_PATH

    def should_process_url(self, url: str) -> bool:
        """
        Decide whether a URL is part of the site.

        Checks run in order: base-URL membership, skip predicate, skip
        paths, skip patterns, then the allow-lists. Any skip match rejects.
        Seed URLs are exempt from the allow-lists only.
        """
        if not self.is_internal(url):
            return False
        if self.skip_link is not None and self.skip_link(url):
            return False

        path = self.url_to_path(url)
        if any(_path_matches(path, skip) for skip in self.skip_paths):
            return False
        if any(regex.search(path) for regex in self.compiled_skip_patterns):
            return False

        if self.only_paths is None and self.only_patterns is None:
            return True
        if self.normalize_url(url) in self.seed_urls:
            return True
        if any(_path_matches(path, only) for only in self.only_paths or []):
            return True
        return any(regex.search(path) for regex in self.compiled_only_patterns)
