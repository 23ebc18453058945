"""Snapshot persistence on the local filesystem.

Finished (or paused) hands are stored as gzip-compressed GameSnapshot JSON,
one file per game id. Files are written atomically with owner-only
permissions (0o600) inside an owner-only directory (0o700).
"""

import contextlib
import gzip
import os
import tempfile
from pathlib import Path
from typing import Protocol

import structlog

logger = structlog.get_logger()

_SNAPSHOT_DIR_MODE = 0o700
_SNAPSHOT_FILE_MODE = 0o600
_SNAPSHOT_SUFFIX = ".json.gz"


class SnapshotStorage(Protocol):
    """Protocol for persisting serialized snapshots."""

    def save_snapshot(self, game_id: str, content: str) -> Path: ...

    def load_snapshot(self, game_id: str) -> str: ...


class LocalSnapshotStorage:
    """Reads and writes gzip-compressed snapshot files under one directory."""

    def __init__(self, snapshot_dir: str | Path) -> None:
        self._snapshot_dir = Path(snapshot_dir).resolve()

    def _path_for(self, game_id: str) -> Path:
        target = (self._snapshot_dir / f"{game_id}{_SNAPSHOT_SUFFIX}").resolve()
        if not target.is_relative_to(self._snapshot_dir):
            raise ValueError(f"Path traversal rejected: '{game_id}' resolves outside snapshot directory")
        return target

    def save_snapshot(self, game_id: str, content: str) -> Path:
        """Write content for game_id, replacing any previous file, and return its path.

        The directory is created lazily on first write. The file is written to
        a temp file, fsynced and renamed into place.
        """
        target = self._path_for(game_id)

        self._snapshot_dir.mkdir(mode=_SNAPSHOT_DIR_MODE, parents=True, exist_ok=True)
        self._snapshot_dir.chmod(_SNAPSHOT_DIR_MODE)

        compressed = gzip.compress(content.encode("utf-8"))

        fd, tmp_path = tempfile.mkstemp(dir=str(self._snapshot_dir), suffix=".tmp", prefix=".snapshot_")
        fd_owned = True
        try:
            with os.fdopen(fd, "wb") as f:
                fd_owned = False  # closed by the file object from here on
                f.write(compressed)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_path, _SNAPSHOT_FILE_MODE)  # noqa: PTH101
            Path(tmp_path).replace(target)
        except BaseException:
            if fd_owned:
                with contextlib.suppress(OSError):
                    os.close(fd)
            with contextlib.suppress(OSError):
                Path(tmp_path).unlink()
            raise
        logger.info("saved snapshot", game_id=game_id, path=str(target))
        return target

    def load_snapshot(self, game_id: str) -> str:
        """Return the decompressed content stored for game_id. Raises FileNotFoundError if absent."""
        target = self._path_for(game_id)
        content = gzip.decompress(target.read_bytes()).decode("utf-8")
        logger.debug("loaded snapshot", game_id=game_id, path=str(target))
        return content
