"""
Image-derived signals consumed by the heuristic scorers.

Each detector either returns a measurement or raises SignalUnavailableError
when the image carries no usable evidence for it (a blank frame has no salient
object, a featureless one has no dominant line).
"""

import math
from dataclasses import dataclass
from typing import Optional, Protocol, Tuple

import cv2
import numpy as np

from ..errors import SignalUnavailableError
from ..logging import get_logger

logger = get_logger(__name__)

RGB = Tuple[float, float, float]

# Wood and patina colour box on each channel, in [0, 1] units.
WOOD_RED = (0.3, 0.6)
WOOD_GREEN = (0.2, 0.4)
WOOD_BLUE = (0.1, 0.3)


class ImageSignals(Protocol):
    """Measurements the heuristic scorers read from an RGB uint8 array."""

    def saliency_confidence(self, image: np.ndarray) -> float:
        ...

    def contour_points(self, image: np.ndarray) -> int:
        ...

    def average_color(self, image: np.ndarray) -> RGB:
        ...

    def horizon_tilt(self, image: np.ndarray) -> float:
        ...


@dataclass
class SignalConfig:
    """Configuration for the OpenCV signal detectors."""

    # Edge detection parameters shared by contour and horizon detection
    canny_low: int = 50
    canny_high: int = 150
    blur_kernel_size: int = 5

    # Spectral residual saliency works on a small fixed-size map
    saliency_map_size: int = 64
    saliency_mask_factor: float = 3.0

    # Probabilistic Hough transform for the dominant horizontal line
    hough_threshold: int = 50
    min_line_ratio: float = 0.25     # of image width
    max_line_gap: int = 10
    max_horizon_angle: float = 45.0  # degrees; steeper lines are not horizons


class OpenCVSignals:
    """Default signal detectors built on OpenCV and NumPy."""

    def __init__(self, config: Optional[SignalConfig] = None):
        self.config = config or SignalConfig()

    def saliency_confidence(self, image: np.ndarray) -> float:
        """
        Confidence that a single object stands out from its background.

        Uses the spectral residual saliency map: the mean normalised saliency
        inside the region that exceeds saliency_mask_factor times the map mean.
        """
        gray = _to_gray(image).astype(np.float64)
        size = self.config.saliency_map_size
        small = cv2.resize(gray, (size, size), interpolation=cv2.INTER_AREA)

        spectrum = np.fft.fft2(small)
        log_amplitude = np.log(np.abs(spectrum) + 1e-8)
        phase = np.angle(spectrum)
        residual = log_amplitude - cv2.blur(log_amplitude, (3, 3))
        saliency = np.abs(np.fft.ifft2(np.exp(residual + 1j * phase))) ** 2
        saliency = cv2.GaussianBlur(saliency, (9, 9), 2.5)

        low, high = float(saliency.min()), float(saliency.max())
        if high - low < 1e-12 or np.std(small) < 1e-6:
            raise SignalUnavailableError("Image has no salient structure")

        normalised = (saliency - low) / (high - low)
        mask = normalised > min(normalised.mean() * self.config.saliency_mask_factor, 0.99)
        if not mask.any():
            raise SignalUnavailableError("No salient region found")

        confidence = float(normalised[mask].mean())
        logger.debug(f"Saliency confidence {confidence:.3f} over {int(mask.sum())} cells")
        return confidence

    def contour_points(self, image: np.ndarray) -> int:
        """Total number of points across all edge contours."""
        edges = self._edges(image)
        contours, _ = cv2.findContours(edges, cv2.RETR_LIST, cv2.CHAIN_APPROX_NONE)
        total = int(sum(len(contour) for contour in contours))
        logger.debug(f"Found {len(contours)} contours with {total} points")
        return total

    def average_color(self, image: np.ndarray) -> RGB:
        """Mean colour of the image as (r, g, b) in [0, 1]."""
        if image.size == 0:
            raise SignalUnavailableError("Image is empty")
        pixels = _to_rgb(image).reshape(-1, 3).astype(np.float64) / 255.0
        r, g, b = pixels.mean(axis=0)
        return float(r), float(g), float(b)

    def horizon_tilt(self, image: np.ndarray) -> float:
        """Absolute angle in degrees of the longest near-horizontal line."""
        edges = self._edges(image)
        width = edges.shape[1]
        min_length = max(20, int(width * self.config.min_line_ratio))

        lines = cv2.HoughLinesP(
            edges, 1, np.pi / 180,
            threshold=self.config.hough_threshold,
            minLineLength=min_length,
            maxLineGap=self.config.max_line_gap,
        )
        if lines is None:
            raise SignalUnavailableError("No lines detected")

        best_length = 0.0
        best_angle = None
        for x1, y1, x2, y2 in lines.reshape(-1, 4):
            dx, dy = float(x2 - x1), float(y2 - y1)
            angle = abs(math.degrees(math.atan2(dy, dx)))
            if angle > 90.0:
                angle = 180.0 - angle
            if angle > self.config.max_horizon_angle:
                continue
            length = math.hypot(dx, dy)
            if length > best_length:
                best_length = length
                best_angle = angle

        if best_angle is None:
            raise SignalUnavailableError("No near-horizontal line detected")

        logger.debug(f"Horizon tilt {best_angle:.2f} deg from line of length {best_length:.0f}")
        return best_angle

    def _edges(self, image: np.ndarray) -> np.ndarray:
        gray = _to_gray(image)
        k = self.config.blur_kernel_size
        blurred = cv2.GaussianBlur(gray, (k, k), 0)
        return cv2.Canny(blurred, self.config.canny_low, self.config.canny_high)


def brownishness(r: float, g: float, b: float) -> float:
    """
    How close a colour is to aged wood, in [0, 1].

    Each channel scores 1.0 at the centre of its wood range and falls off
    linearly to 0.5 at the range edges and 0.0 one range-width from the centre; the
    result is the mean of the three channel scores.
    """
    scores = []
    for value, (low, high) in ((r, WOOD_RED), (g, WOOD_GREEN), (b, WOOD_BLUE)):
        centre = (low + high) / 2.0
        width = high - low
        scores.append(max(0.0, 1.0 - abs(value - centre) / width))
    return min(max(sum(scores) / 3.0, 0.0), 1.0)


def _to_rgb(image: np.ndarray) -> np.ndarray:
    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2RGB)
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_RGBA2RGB)
    return image


def _to_gray(image: np.ndarray) -> np.ndarray:
    if image.size == 0:
        raise SignalUnavailableError("Image is empty")
    if image.ndim == 2:
        return image.astype(np.uint8)
    return cv2.cvtColor(_to_rgb(image).astype(np.uint8), cv2.COLOR_RGB2GRAY)
