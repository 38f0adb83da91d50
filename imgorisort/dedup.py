from __future__ import annotations

from collections.abc import Collection
from pathlib import Path


def _is_free(candidate: Path, taken: Collection[Path], overwrite: bool) -> bool:
    if candidate in taken:
        return False
    return overwrite or not candidate.exists()


def dedupe(desired: Path, overwrite: bool = False, taken: Collection[Path] = ()) -> Path:
    """Return a destination that does not collide with an existing file.

    `_1`, `_2`, ... is appended to the stem until the name is free both on
    disk and in `taken` (destinations already claimed by the current batch).
    With `overwrite` files already on disk may be replaced, but names in
    `taken` are still avoided so one input never clobbers another.

    Existence is checked, not reserved: a concurrent writer can still claim
    the returned name before it is used.
    """
    if _is_free(desired, taken, overwrite):
        return desired

    stem = desired.stem
    suffix = desired.suffix
    parent = desired.parent
    i = 1
    while True:
        candidate = parent / f"{stem}_{i}{suffix}"
        if _is_free(candidate, taken, overwrite):
            return candidate
        i += 1
