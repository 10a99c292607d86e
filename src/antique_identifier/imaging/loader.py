"""
Conversion of captured images into the representations each stage needs.

The capture collaborator may hand over a file path, encoded bytes, a PIL image
or a raw pixel array. Classifiers want a fixed-size square float buffer while
the heuristic signals work on a bounded-size RGB uint8 array.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from ..errors import ImageProcessingError
from ..logging import get_logger

logger = get_logger(__name__)

ImageSource = Union[str, Path, bytes, Image.Image, np.ndarray]


def load_image(source: ImageSource) -> Image.Image:
    """
    Decode any supported image source into an RGB PIL image.

    Raises:
        ImageProcessingError: If the source cannot be decoded
    """
    if isinstance(source, Image.Image):
        return _ensure_rgb(source)

    if isinstance(source, np.ndarray):
        return _array_to_pil(source)

    if isinstance(source, (bytes, bytearray)):
        if not source:
            raise ImageProcessingError("Image data is empty")
        try:
            with Image.open(io.BytesIO(source)) as img:
                img.load()
                return _ensure_rgb(img)
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
            raise ImageProcessingError(f"Failed to decode image bytes: {exc}") from exc

    if isinstance(source, (str, Path)):
        path = Path(source)
        if not path.exists():
            raise ImageProcessingError(f"Image file does not exist: {path}")
        try:
            with Image.open(path) as img:
                img.load()
                return _ensure_rgb(img)
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
            raise ImageProcessingError(f"Failed to decode image file {path}: {exc}") from exc

    raise ImageProcessingError(f"Unsupported image source type: {type(source).__name__}")


def to_model_input(source: ImageSource, size: int = 224) -> np.ndarray:
    """
    Resize an image to the square resolution a classifier expects.

    Returns:
        float32 array of shape (size, size, 3) scaled to [0, 1]
    """
    if size <= 0:
        raise ImageProcessingError(f"Model input size must be positive, got {size}")

    image = load_image(source)
    try:
        resized = image.resize((size, size), Image.BILINEAR)
        pixels = np.asarray(resized, dtype=np.float32) / 255.0
    except (ValueError, OSError, MemoryError) as exc:
        raise ImageProcessingError(f"Failed to resize image to {size}x{size}: {exc}") from exc

    logger.debug(f"Prepared model input {pixels.shape} from {image.width}x{image.height} image")
    return pixels


def to_analysis_array(source: ImageSource, max_side: int = 512) -> np.ndarray:
    """Return an RGB uint8 array whose longest side is at most max_side."""
    image = load_image(source)
    longest = max(image.width, image.height)
    if longest > max_side:
        scale = max_side / longest
        new_size = (max(1, round(image.width * scale)), max(1, round(image.height * scale)))
        image = image.resize(new_size, Image.BILINEAR)
    return np.asarray(image, dtype=np.uint8)


def encode_image_bytes(source: ImageSource, fmt: str = "PNG") -> bytes:
    """Encode an image for persistence alongside a saved record."""
    image = load_image(source)
    buffer = io.BytesIO()
    try:
        image.save(buffer, format=fmt)
    except (KeyError, ValueError, OSError) as exc:
        raise ImageProcessingError(f"Failed to encode image as {fmt}: {exc}") from exc
    return buffer.getvalue()


def _ensure_rgb(image: Image.Image) -> Image.Image:
    if image.width == 0 or image.height == 0:
        raise ImageProcessingError("Image has zero width or height")
    if image.mode != 'RGB':
        return image.convert('RGB')
    return image.copy()


def _array_to_pil(array: np.ndarray) -> Image.Image:
    if array.size == 0:
        raise ImageProcessingError("Image array is empty")

    if array.dtype != np.uint8:
        if np.issubdtype(array.dtype, np.floating) and array.max(initial=0.0) <= 1.0:
            array = array * 255.0
        array = np.clip(array, 0, 255).astype(np.uint8)

    if array.ndim == 2:
        return Image.fromarray(array).convert('RGB')
    if array.ndim == 3 and array.shape[2] == 3:
        return Image.fromarray(array)
    if array.ndim == 3 and array.shape[2] == 4:
        return Image.fromarray(array).convert('RGB')

    raise ImageProcessingError(f"Unsupported image array shape: {array.shape}")
