"""
Redirect bookkeeping for a crawl.

Pages are stored under the path of the URL that was requested. Once the
crawl finishes, pages reached through a redirect are moved to the path of
the URL the server actually answered from.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, MutableMapping
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)


def url_path(url: str) -> str:
    return urlsplit(url).path


class RedirectResolver:
    """Records observed redirects and re-keys a page map after the crawl."""

    def __init__(self, path_for: Callable[[str], str] = url_path):
        self._path_for = path_for
        self._redirects: dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._redirects)

    @property
    def redirects(self) -> dict[str, str]:
        """Observed URL to effective URL."""
        return dict(self._redirects)

    def record(self, from_url: str, to_url: str) -> None:
        if from_url == to_url:
            return
        self._redirects[from_url] = to_url

    def effective_url(self, url: str) -> str:
        return self._redirects.get(url, url)

    def path_redirections(self) -> dict[str, str]:
        """Lowercased source path to target path, for paths that differ."""
        redirections: dict[str, str] = {}
        for from_url, to_url in self._redirects.items():
            from_path = self._path_for(from_url)
            to_path = self._path_for(to_url)
            if from_path.lower() != to_path.lower():
                redirections[from_path.lower()] = to_path
        return redirections

    def apply(self, pages: MutableMapping[str, str]) -> MutableMapping[str, str]:
        """
        Move every page stored under a redirected path to its target path.

        Keys are matched case-insensitively. When the target path already
        holds a page, the redirected page overwrites it.
        """
        redirections = self.path_redirections()
        if not redirections:
            return pages

        moved = 0
        for path, content in list(pages.items()):
            target = redirections.get(path.lower())
            if target is None or target == path:
                continue
            del pages[path]
            pages[target] = content
            moved += 1

        if moved:
            logger.info(f"Re-keyed {moved} pages after {len(redirections)} redirects")
        return pages
