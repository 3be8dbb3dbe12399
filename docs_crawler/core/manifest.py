"""
Manifest of every documentation set present in the docs directory.
"""

from __future__ import annotations

import logging

from ..exceptions import StorageError
from ..models.doc import Manifest, ManifestEntry
from .doc_store import DB_FILENAME, INDEX_FILENAME, DocStore
from .index import natural_sort_key
from .storage import FileStore

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "manifest.json"


def _split_directory_name(name: str) -> tuple[str, str | None]:
    slug, _, version = name.partition("~")
    return slug, version or None


def build_manifest(store: FileStore) -> Manifest:
    """
    Describe each sub-directory holding both index.json and db.json.

    Directory names are ``slug`` or ``slug~version``. meta.json, when
    readable, supplies the display name, type and release.
    """
    docs: list[ManifestEntry] = []
    for name in store.list():
        if name.startswith(".") or not (store.root / name).is_dir():
            continue
        doc_store = DocStore(store.substore(name))
        if not doc_store.is_complete():
            logger.debug(f"Skipping incomplete doc directory {name}")
            continue

        slug, version = _split_directory_name(name)
        entry = ManifestEntry(
            name=slug,
            slug=slug,
            version=version,
            db_size=doc_store.store.size(DB_FILENAME),
            index_size=doc_store.store.size(INDEX_FILENAME),
        )
        try:
            meta = doc_store.load_meta()
        except StorageError as e:
            logger.warning(f"Ignoring unreadable metadata for {name}: {e}")
            meta = None
        if meta is not None:
            entry = entry.model_copy(
                update={
                    "name": meta.name,
                    "type": meta.type,
                    "release": meta.release,
                    "mtime": meta.mtime,
                    "version": meta.version or version,
                }
            )
        docs.append(entry)

    docs.sort(key=lambda doc: (natural_sort_key(doc.name), doc.version or ""))
    return Manifest(docs=docs)


def write_manifest(store: FileStore) -> Manifest:
    manifest = build_manifest(store)
    store.write(MANIFEST_FILENAME, manifest.model_dump_json(indent=2))
    logger.info(f"Manifest lists {len(manifest.docs)} documentation sets")
    return manifest


def read_manifest(store: FileStore) -> Manifest | None:
    if not store.exists(MANIFEST_FILENAME):
        return None
    return Manifest.model_validate_json(store.read(MANIFEST_FILENAME))
