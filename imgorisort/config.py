from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

from imgorisort.models import Orientation

IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "gif", "webp", "ico", "tiff", "bmp"})

# Pillow `Image.format` names for the same set (used with --read-headers).
# Camera JPEGs carrying an MPF segment open as "MPO".
PILLOW_FORMATS = frozenset({"JPEG", "MPO", "PNG", "GIF", "WEBP", "ICO", "TIFF", "BMP"})

# "sqr" is intentional: every tag is a short fixed label.
ORIENTATION_TAGS = MappingProxyType(
    {
        Orientation.TALL: "tall",
        Orientation.WIDE: "wide",
        Orientation.SQUARE: "sqr",
    }
)

OUTPUT_ROOT_ENV = "IMGORISORT_OUTPUT_ROOT"


def default_output_root() -> Path:
    env_dir = os.getenv(OUTPUT_ROOT_ENV)
    if env_dir:
        return Path(env_dir).expanduser()
    return Path(".")


@dataclass(frozen=True, slots=True)
class MoveMode:
    output_root: Path
    copy: bool = False
    prefix: bool = False


@dataclass(frozen=True, slots=True)
class RenameMode:
    pass


Mode = MoveMode | RenameMode


@dataclass(frozen=True)
class RunConfig:
    input_root: Path
    mode: Mode
    recursive: bool = False
    overwrite: bool = False
    skip_existing: bool = False
    read_headers: bool = False
    dry_run: bool = False

    def __post_init__(self) -> None:
        if self.overwrite and self.skip_existing:
            raise ValueError("overwrite and skip_existing are mutually exclusive")
