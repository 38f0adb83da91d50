from __future__ import annotations

import logging
import os
import warnings
from pathlib import Path

from PIL import Image

from imgorisort.config import IMAGE_EXTENSIONS, ORIENTATION_TAGS, PILLOW_FORMATS, MoveMode, RunConfig
from imgorisort.errors import ClassificationError
from imgorisort.models import Orientation, RelocationPlan

LOGGER = logging.getLogger(__name__)

SKIP_DECODE_FAIL = "DECODE_FAIL"
SKIP_IN_PLACE = "IN_PLACE"
SKIP_ALREADY_TAGGED = "ALREADY_TAGGED"


def is_image(path: Path) -> bool:
    """Return True if the file extension names a supported image format.

    Exact-token match: "a.JPG" matches, "a.xjpgx" does not.
    """
    ext = Path(path).suffix[1:]
    if not ext:
        return False
    return ext.lower() in IMAGE_EXTENSIONS


def _read_header(path: Path) -> tuple[str, tuple[int, int]]:
    """Return Pillow's format name and size without decoding pixels.

    The pixel-count limit is lifted here: only the header is read, and a huge
    but valid image still has an orientation.
    """
    limit = Image.MAX_IMAGE_PIXELS
    Image.MAX_IMAGE_PIXELS = None
    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", Image.DecompressionBombWarning)
            with Image.open(path) as img:
                return (img.format or "").upper(), img.size
    finally:
        Image.MAX_IMAGE_PIXELS = limit


def is_image_by_header(path: Path) -> bool:
    """Guess from the file header instead of the extension. Slower than `is_image`."""
    try:
        fmt, _size = _read_header(path)
    except Exception:  # noqa: BLE001
        return False
    return fmt in PILLOW_FORMATS


def dimensions(path: Path) -> tuple[int, int]:
    try:
        _fmt, (width, height) = _read_header(path)
    except Exception as exc:  # noqa: BLE001
        raise ClassificationError(f"cannot read dimensions of {path}: {type(exc).__name__}: {exc}") from exc
    return width, height


def orientation_of(width: int, height: int) -> Orientation:
    if width > height:
        return Orientation.WIDE
    if width < height:
        return Orientation.TALL
    return Orientation.SQUARE


def classify(path: Path) -> Orientation:
    width, height = dimensions(path)
    return orientation_of(width, height)


def tag_for(orientation: Orientation) -> str:
    return ORIENTATION_TAGS[orientation]


def is_same_file(source: Path, destination: Path) -> bool:
    """Compare canonical paths, then inode identity when the destination exists."""
    if source.resolve() == destination.resolve():
        return True
    if destination.exists():
        try:
            return os.path.samefile(source, destination)
        except OSError:
            return False
    return False


def resolve_plan(config: RunConfig, path: Path) -> RelocationPlan:
    """Compute where `path` belongs. A plan without destination means leave it alone."""
    try:
        orientation = classify(path)
    except ClassificationError as exc:
        LOGGER.warning("Skipping %s: %s", path, exc)
        return RelocationPlan(path, None, SKIP_DECODE_FAIL)

    tag = tag_for(orientation)
    name = path.name

    if isinstance(config.mode, MoveMode):
        if config.mode.prefix and not name.startswith(f"{tag}_"):
            name = f"{tag}_{name}"
        destination = config.mode.output_root / tag / name
        if is_same_file(path, destination):
            LOGGER.info("Already in place: %s", path)
            return RelocationPlan(path, None, SKIP_IN_PLACE)
        return RelocationPlan(path, destination)

    if name.startswith(f"{tag}_"):
        LOGGER.warning("Skipping %s: name already carries the %r prefix", path, tag)
        return RelocationPlan(path, None, SKIP_ALREADY_TAGGED)
    return RelocationPlan(path, path.parent / f"{tag}_{name}")


def resolve(config: RunConfig, path: Path) -> Path | None:
    return resolve_plan(config, path).destination
