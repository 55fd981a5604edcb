"""File-system helpers."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from hunming.model import HunmingError


def atomic_write(path: str | os.PathLike[str], content: str) -> None:
    """Replace the file at ``path`` with ``content`` in one atomic step."""
    path = Path(path)
    parent = path.parent

    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise HunmingError(f"failed to create parent directory at {parent}") from exc

    try:
        handle = tempfile.NamedTemporaryFile(dir=parent, delete=False, prefix=".tmp")
    except OSError as exc:
        raise HunmingError(f"failed to create temporary file in {parent}") from exc

    temp_path = Path(handle.name)
    try:
        with handle:
            try:
                handle.write(content.encode("utf-8"))
                handle.flush()
                os.fsync(handle.fileno())
            except OSError as exc:
                raise HunmingError("failed to write temporary content") from exc
        try:
            os.replace(temp_path, path)
        except OSError as exc:
            raise HunmingError(f"failed to replace {path}") from exc
    except BaseException:
        temp_path.unlink(missing_ok=True)
        raise