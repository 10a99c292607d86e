"""Synthetic test images built with PIL and OpenCV."""

import io
from pathlib import Path
from typing import Tuple

import cv2
import numpy as np
from PIL import Image

# Mean colour sits at the centre of the wood colour box
WOOD_RGB = (115, 77, 51)


def solid_array(width: int = 320, height: int = 240, color: Tuple[int, int, int] = WOOD_RGB) -> np.ndarray:
    array = np.zeros((height, width, 3), dtype=np.uint8)
    array[:, :] = color
    return array


def solid_image(width: int = 320, height: int = 240, color: Tuple[int, int, int] = WOOD_RGB) -> Image.Image:
    return Image.fromarray(solid_array(width, height, color))


def png_bytes(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format='PNG')
    return buffer.getvalue()


def write_png(path: Path, image: Image.Image) -> Path:
    image.save(path, format='PNG')
    return path


def line_array(angle_degrees: float = 0.0, width: int = 400, height: int = 300) -> np.ndarray:
    """White canvas with one thick dark line through the centre at the given angle."""
    array = solid_array(width, height, (255, 255, 255))
    half = (width - 40) / 2
    dy = half * np.tan(np.radians(angle_degrees))
    cx, cy = width / 2, height / 2
    start = (int(round(cx - half)), int(round(cy - dy)))
    end = (int(round(cx + half)), int(round(cy + dy)))
    cv2.line(array, start, end, (0, 0, 0), 3)
    return array


def furniture_like_array(width: int = 400, height: int = 300) -> np.ndarray:
    """Wood-coloured scene with a level table top, legs and carved detail."""
    array = solid_array(width, height, (200, 190, 175))
    cv2.rectangle(array, (60, 100), (340, 120), WOOD_RGB, -1)
    for x in (70, 310):
        cv2.rectangle(array, (x, 120), (x + 20, 260), WOOD_RGB, -1)
    for i in range(12):
        cv2.circle(array, (90 + i * 20, 140), 6, (80, 50, 30), 1)
    return array
