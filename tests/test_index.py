"""
Test entry deduplication, type counting and natural ordering.
"""

import json

import pytest

from docs_crawler.core.index import EntryIndex, compare_names, natural_sorted
from docs_crawler.models.entries import IndexEntry


def entry(name: str, path: str = "page", type: str = "Usage") -> IndexEntry:
    return IndexEntry(name=name, path=path, type=type)


class TestEntryIndex:
    """Test admission of entries."""

    @pytest.mark.unit
    def test_identical_entries_admitted_once(self):
        """Test that the same triple counts once toward its type."""
        index = EntryIndex()

        assert index.add(entry("Options", "options"))
        assert not index.add(entry("Options", "options"))

        assert len(index) == 1
        assert index.types["Usage"].count == 1

    @pytest.mark.unit
    def test_different_type_is_a_new_entry(self):
        """Test that entries differing only in type are distinct."""
        index = EntryIndex()
        index.add_many([entry("Options", "options"), entry("Options", "options", "Tooling")])

        assert len(index) == 2
        assert {name: t.count for name, t in index.types.items()} == {
            "Usage": 1,
            "Tooling": 1,
        }

    @pytest.mark.unit
    def test_membership_and_emptiness(self):
        """Test container helpers."""
        index = EntryIndex()
        assert index.is_empty
        index.add(entry("A"))

        assert entry("A") in index
        assert entry("B") not in index
        assert "A" not in index
        assert [e.name for e in index] == ["A"]

    @pytest.mark.unit
    def test_full_index_sorted_naturally(self):
        """Test that serialized entries and types follow natural order."""
        index = EntryIndex(
            [
                entry("item", type="Tooling"),
                entry("2.item"),
                entry("1.item"),
                entry("Babel", type="Other Plugins"),
            ]
        )

        full = index.to_full_index()

        assert [e.name for e in full.entries] == ["1.item", "2.item", "Babel", "item"]
        assert [(t.name, t.slug, t.count) for t in full.types] == [
            ("Other Plugins", "other-plugins", 1),
            ("Tooling", "tooling", 1),
            ("Usage", "usage", 2),
        ]
        data = json.loads(index.to_json())
        assert set(data) == {"entries", "types"}
        assert data["entries"][0] == {"name": "1.item", "path": "page", "type": "Usage"}

    @pytest.mark.unit
    def test_entries_json_keeps_admission_order(self):
        """Test the flat entries listing."""
        index = EntryIndex([entry("b"), entry("a")])
        assert [e["name"] for e in json.loads(index.entries_json())] == ["b", "a"]


class TestNaturalSort:
    """Test the natural name comparison."""

    @pytest.mark.unit
    def test_numeric_runs_compare_by_value(self):
        """Test version-like names."""
        assert natural_sorted(["2.1", "1.10", "1.2"]) == ["1.2", "1.10", "2.1"]

    @pytest.mark.unit
    def test_single_run_names_sort_last(self):
        """Test names without digit runs after numbered names."""
        assert natural_sorted(["item", "2.item", "1.item"]) == ["1.item", "2.item", "item"]

    @pytest.mark.unit
    def test_plain_names_ignore_case(self):
        """Test case-insensitive ordering of ordinary names."""
        assert natural_sorted(["beta", "Alpha", "gamma"]) == ["Alpha", "beta", "gamma"]
        assert compare_names("abc", "ABC") == 0

    @pytest.mark.unit
    def test_comparison_is_antisymmetric(self):
        """Test that swapping arguments flips the result."""
        pairs = [("1.2", "1.10"), ("1.item", "item"), ("a", "B"), ("10", "9")]
        for a, b in pairs:
            assert compare_names(a, b) == -compare_names(b, a)

    @pytest.mark.unit
    def test_superscript_digits_are_not_numbers(self):
        """Test that digit-like characters outside 0-9 runs compare as text."""
        assert natural_sorted(["1²", "1.a"]) == ["1.a", "1²"]
        assert natural_sorted(["²", "1.a"]) == ["1.a", "²"]
