"""
Entry index builder with natural ordering of names.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable
from functools import cmp_to_key

from ..models.entries import FullIndex, IndexEntry, IndexType

logger = logging.getLogger(__name__)

_RUN_RE = re.compile(r"\d+|\D+")


def _runs(name: str) -> list[str]:
    return _RUN_RE.findall(name)


def _run_key(run: str) -> tuple[int, int | str]:
    if run.isdecimal():
        return (0, int(run))
    return (1, run.lower())


def _cmp(a: object, b: object) -> int:
    return (a > b) - (a < b)


def compare_names(a: str, b: str) -> int:
    """
    Natural comparison of two entry names.

    Names not starting with a digit compare case-insensitively. Names
    starting with a digit are split into digit and non-digit runs; digit
    runs compare by value, so "1.2" < "1.10" < "2.1". A name made of a
    single run sorts after names with several runs. The shorter run list is
    padded with zero runs ahead of its last segment, which is compared
    literally.
    """
    if not (a[:1].isdecimal() or b[:1].isdecimal()):
        return _cmp(a.lower(), b.lower())

    runs_a = _runs(a)
    runs_b = _runs(b)
    if len(runs_a) <= 1 and len(runs_b) <= 1:
        return _cmp(a.lower(), b.lower())
    if len(runs_a) <= 1:
        return 1
    if len(runs_b) <= 1:
        return -1

    last_a = runs_a.pop()
    last_b = runs_b.pop()
    width = max(len(runs_a), len(runs_b))
    runs_a.extend(["0"] * (width - len(runs_a)))
    runs_b.extend(["0"] * (width - len(runs_b)))

    keys_a = [_run_key(run) for run in runs_a]
    keys_b = [_run_key(run) for run in runs_b]
    keys_a.append(_run_key(last_a) if last_a.isdecimal() else (1, last_a))
    keys_b.append(_run_key(last_b) if last_b.isdecimal() else (1, last_b))
    return _cmp(keys_a, keys_b)


natural_sort_key = cmp_to_key(compare_names)


def natural_sorted(names: Iterable[str]) -> list[str]:
    return sorted(names, key=natural_sort_key)


class EntryIndex:
    """
    Accumulates index entries for one documentation set.

    An entry is admitted only once, judged by its canonical serialization.
    Every admission counts toward its type.
    """

    def __init__(self, entries: Iterable[IndexEntry] = ()):
        self._entries: list[IndexEntry] = []
        self._seen: set[str] = set()
        self._types: dict[str, IndexType] = {}
        self.add_many(entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def __contains__(self, entry: object) -> bool:
        return isinstance(entry, IndexEntry) and entry.canonical_json() in self._seen

    @property
    def is_empty(self) -> bool:
        return not self._entries

    @property
    def entries(self) -> list[IndexEntry]:
        return list(self._entries)

    @property
    def types(self) -> dict[str, IndexType]:
        return dict(self._types)

    def add(self, entry: IndexEntry) -> bool:
        """Admit ``entry``; returns False when an identical entry exists."""
        key = entry.canonical_json()
        if key in self._seen:
            return False
        self._seen.add(key)
        self._entries.append(entry)

        index_type = self._types.get(entry.type)
        if index_type is None:
            self._types[entry.type] = IndexType(name=entry.type, count=1)
        else:
            index_type.count += 1
        return True

    def add_many(self, entries: Iterable[IndexEntry]) -> int:
        return sum(1 for entry in entries if self.add(entry))

    def to_full_index(self) -> FullIndex:
        entries = sorted(self._entries, key=lambda e: natural_sort_key(e.name))
        types = sorted(
            (t.model_copy() for t in self._types.values()),
            key=lambda t: natural_sort_key(t.name),
        )
        return FullIndex(entries=entries, types=types)

    def to_json(self) -> str:
        return self.to_full_index().model_dump_json()

    def entries_json(self) -> str:
        """Entries in admission order, as a JSON array."""
        return json.dumps([entry.model_dump() for entry in self._entries])
