"""Reading source images and writing rendered patterns with Pillow."""

from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image


def open_source_image(path: Union[str, Path]) -> np.ndarray:
    """Load an image as an RGBA uint8 array shaped (height, width, 4)."""
    with Image.open(path) as image:
        return np.array(image.convert('RGBA'), dtype=np.uint8)


def save_image(pixels: np.ndarray, path: Union[str, Path]) -> Path:
    """Write an RGBA array to ``path`` (PNG), creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8)).save(path, format='PNG')
    return path
