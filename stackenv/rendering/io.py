"""Artifact file writing."""

from __future__ import annotations

import logging
import os
import tempfile
from contextlib import suppress
from pathlib import Path

from ..core.errors import ArtifactWriteError

logger = logging.getLogger(__name__)


def atomic_write_text(path: Path, text: str, mode: int = 0o644) -> None:
    """Write text to a file atomically using a sibling temporary file.

    Args:
        path: Destination file path
        text: Text content to write
        mode: File permissions (octal)
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as tmp:
            tmp.write(text)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
        os.chmod(path, mode)
    finally:
        if os.path.exists(tmp_name):
            with suppress(OSError):
                os.remove(tmp_name)


class ArtifactWriter:
    """Writes artifacts below a destination root.

    Relative artifact locations are resolved against ``dest_root``; absolute
    locations are used as given.
    """

    def __init__(self, dest_root: Path | None = None, file_mode: int = 0o644) -> None:
        self.dest_root = dest_root if dest_root is not None else Path.cwd()
        self.file_mode = file_mode

    def resolve(self, location: Path) -> Path:
        if location.is_absolute():
            return location
        return self.dest_root / location

    def __call__(self, location: Path, text: str) -> Path:
        target = self.resolve(location)
        try:
            atomic_write_text(target, text, mode=self.file_mode)
        except OSError as e:
            raise ArtifactWriteError(str(target), str(e)) from e
        logger.info(f"Wrote {target}")
        return target
