"""Pixel buffer helpers; encoding is left to Pillow (``Image.save``)."""

from typing import Tuple

import numpy as np
from PIL import Image


def new_image_buffer(size: Tuple[int, int]) -> np.ndarray:
    """Black RGB buffer of shape (height, width, 3)."""
    width, height = size
    return np.zeros((height, width, 3), dtype=np.uint8)


def buffer_to_image(buffer: np.ndarray) -> Image.Image:
    """Wrap an RGB buffer into a Pillow image."""
    if buffer.ndim != 3 or buffer.shape[2] != 3:
        raise ValueError(f"Expected (height, width, 3) buffer, got {buffer.shape}")
    return Image.fromarray(np.ascontiguousarray(buffer, dtype=np.uint8))
