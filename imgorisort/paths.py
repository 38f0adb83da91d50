from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from imgorisort.config import ORIENTATION_TAGS
from imgorisort.errors import InputRootError, SetupError
from imgorisort.organize import is_image, is_image_by_header

LOGGER = logging.getLogger(__name__)


def _log_walk_error(exc: OSError) -> None:
    LOGGER.debug("Dropping unreadable entry %s: %s", exc.filename, exc)


def check_input_root(root: Path) -> None:
    root = Path(root)
    if not root.exists():
        raise InputRootError(f"Input path does not exist: {root}")
    if root.is_dir() and not os.access(root, os.R_OK | os.X_OK):
        raise InputRootError(f"Input directory is not readable: {root}")


def walk(root: Path, recursive: bool = False, *, read_headers: bool = False) -> Iterator[Path]:
    """Yield image files under `root`.

    Depth 1 unless `recursive`, in which case there is no depth limit. A root
    that is itself a file is yielded on its own. Entries that cannot be read
    are dropped and traversal continues.
    """
    root = Path(root)
    check_input_root(root)
    matches = is_image_by_header if read_headers else is_image

    if root.is_file():
        if matches(root):
            yield root
        return

    for dirpath, dirs, files in os.walk(root, onerror=_log_walk_error):
        if not recursive:
            dirs[:] = []
        else:
            dirs.sort()
        base = Path(dirpath)
        for name in sorted(files):
            fp = base / name
            # is_file() follows symlinks; broken links report False.
            if not fp.is_file():
                continue
            if matches(fp):
                yield fp
            else:
                LOGGER.debug("Not an image: %s", fp)


def ensure_dir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise SetupError(f"Cannot create directory {path}: {exc}") from exc


def ensure_output_dirs(output_root: Path) -> list[Path]:
    created: list[Path] = []
    for tag in ORIENTATION_TAGS.values():
        target = output_root / tag
        ensure_dir(target)
        created.append(target)
    return created
