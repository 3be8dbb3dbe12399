"""
Persistence of a finished crawl: index.json, db.json, entries.json and
meta.json inside the documentation set's directory.
"""

from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from ..exceptions import StorageError
from ..models.crawl import CrawlResult
from ..models.doc import DocMeta
from ..models.entries import FullIndex
from .page_db import PageDb
from .storage import FileStore

logger = logging.getLogger(__name__)

INDEX_FILENAME = "index.json"
DB_FILENAME = "db.json"
ENTRIES_FILENAME = "entries.json"
META_FILENAME = "meta.json"


class DocStore:
    """Reads and writes the files of one documentation set."""

    def __init__(self, store: FileStore):
        self.store = store

    def save(self, result: CrawlResult, meta: DocMeta) -> DocMeta:
        """
        Persist pages, index and metadata.

        The index and page database are written first; meta.json records
        the size of the page database as it landed on disk.
        """
        try:
            self.store.write(INDEX_FILENAME, result.index.to_json())
            self.store.write(DB_FILENAME, result.pages.to_json())
            self.store.write(ENTRIES_FILENAME, result.index.entries_json())
        except (TypeError, ValueError) as e:
            raise StorageError(f"Cannot serialize crawl output: {e}") from e

        stored_meta = meta.model_copy(update={"db_size": self.store.size(DB_FILENAME)})
        self.store.write(META_FILENAME, stored_meta.model_dump_json(indent=2))

        logger.info(
            f"Stored {len(result.pages)} pages and {len(result.index)} entries "
            f"in {self.store.root}"
        )
        return stored_meta

    def is_complete(self) -> bool:
        return self.store.exists(INDEX_FILENAME) and self.store.exists(DB_FILENAME)

    def load_meta(self) -> DocMeta | None:
        if not self.store.exists(META_FILENAME):
            return None
        try:
            return DocMeta.model_validate_json(self.store.read(META_FILENAME))
        except ValidationError as e:
            raise StorageError(f"Invalid {META_FILENAME} in {self.store.root}: {e}") from e

    def load_index(self) -> FullIndex:
        try:
            return FullIndex.model_validate_json(self.store.read(INDEX_FILENAME))
        except ValidationError as e:
            raise StorageError(f"Invalid {INDEX_FILENAME} in {self.store.root}: {e}") from e

    def load_pages(self) -> PageDb:
        return PageDb.from_json(self.store.read(DB_FILENAME))

    def load_entries(self) -> list[dict[str, str]]:
        try:
            return json.loads(self.store.read(ENTRIES_FILENAME))
        except json.JSONDecodeError as e:
            raise StorageError(f"Invalid {ENTRIES_FILENAME}: {e}") from e
