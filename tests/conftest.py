from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image


def make_image(path: Path, width: int, height: int, fmt: str | None = None) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", (width, height), color=(200, 30, 30)).save(path, format=fmt)
    return path


@pytest.fixture
def image_dir(tmp_path: Path) -> Path:
    """An input folder with one wide, one tall and one square image."""
    root = tmp_path / "in"
    make_image(root / "wide.png", 3, 2)
    make_image(root / "tall.jpg", 2, 3)
    make_image(root / "square.gif", 2, 2)
    return root
