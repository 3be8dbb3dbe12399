"""
Mapping of canonical page paths to transformed page content (db.json).
"""

from __future__ import annotations

import json
from collections.abc import Iterator, MutableMapping

from ..exceptions import StorageError


class PageDb(MutableMapping[str, str]):
    """Path to content map, persisted as a flat JSON object."""

    def __init__(self, pages: dict[str, str] | None = None):
        self._pages: dict[str, str] = dict(pages or {})

    def __getitem__(self, path: str) -> str:
        return self._pages[path]

    def __setitem__(self, path: str, content: str) -> None:
        self._pages[path] = content

    def __delitem__(self, path: str) -> None:
        del self._pages[path]

    def __iter__(self) -> Iterator[str]:
        return iter(self._pages)

    def __len__(self) -> int:
        return len(self._pages)

    def __repr__(self) -> str:
        return f"PageDb({len(self._pages)} pages)"

    def add(self, path: str, content: str) -> None:
        self._pages[path] = content

    def paths(self) -> list[str]:
        return sorted(self._pages)

    def to_dict(self) -> dict[str, str]:
        return dict(self._pages)

    def to_json(self) -> str:
        return json.dumps(self._pages, ensure_ascii=False)

    @classmethod
    def from_json(cls, data: str | bytes) -> PageDb:
        try:
            pages = json.loads(data)
        except json.JSONDecodeError as e:
            raise StorageError(f"Page database is not valid JSON: {e}") from e
        if not isinstance(pages, dict):
            raise StorageError("Page database must be a JSON object")
        return cls({str(k): str(v) for k, v in pages.items()})
