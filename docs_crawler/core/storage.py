"""
Byte storage rooted at a directory.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..exceptions import StorageError

logger = logging.getLogger(__name__)


class FileStore:
    """Reads and writes files by relative path below a root directory."""

    def __init__(self, root: str | Path):
        self.root = Path(root).expanduser()
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create storage directory {self.root}: {e}") from e

    def _resolve(self, path: str) -> Path:
        resolved = (self.root / path).resolve()
        root = self.root.resolve()
        if resolved != root and root not in resolved.parents:
            raise StorageError(f"Path escapes storage root: {path}")
        return resolved

    def exists(self, path: str) -> bool:
        return self._resolve(path).exists()

    def read(self, path: str) -> bytes:
        try:
            return self._resolve(path).read_bytes()
        except OSError as e:
            raise StorageError(f"Cannot read {path}: {e}") from e

    def read_text(self, path: str) -> str:
        return self.read(path).decode("utf-8")

    def write(self, path: str, data: bytes | str) -> int:
        """Write ``data`` to ``path``, creating parent directories."""
        target = self._resolve(path)
        payload = data.encode("utf-8") if isinstance(data, str) else data
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(payload)
        except OSError as e:
            raise StorageError(f"Cannot write {path}: {e}") from e
        logger.debug(f"Wrote {len(payload)} bytes to {target}")
        return len(payload)

    def size(self, path: str) -> int:
        try:
            return self._resolve(path).stat().st_size
        except OSError as e:
            raise StorageError(f"Cannot stat {path}: {e}") from e

    def delete(self, path: str) -> bool:
        target = self._resolve(path)
        if not target.exists():
            return False
        try:
            target.unlink()
        except OSError as e:
            raise StorageError(f"Cannot delete {path}: {e}") from e
        return True

    def list(self, path: str = "") -> list[str]:
        """Names of the entries directly inside ``path``."""
        target = self._resolve(path)
        if not target.is_dir():
            return []
        return sorted(child.name for child in target.iterdir())

    def substore(self, path: str) -> FileStore:
        return FileStore(self._resolve(path))
