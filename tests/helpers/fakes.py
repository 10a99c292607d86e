"""Test doubles for predictors, signal detectors and analyzers."""

from typing import List, Optional, Sequence, Tuple

import numpy as np

from antique_identifier.models import Observation


class FixedPredictor:
    """Returns the same observations for every input and records what it saw."""

    def __init__(self, observations: Sequence[Tuple[str, float]]):
        self.observations = [Observation(label, conf) for label, conf in observations]
        self.calls = 0
        self.last_pixels: Optional[np.ndarray] = None

    def predict(self, pixels: np.ndarray) -> List[Observation]:
        self.calls += 1
        self.last_pixels = pixels
        return list(self.observations)


class FailingPredictor:
    def __init__(self, exc: Exception):
        self.exc = exc

    def predict(self, pixels: np.ndarray) -> List[Observation]:
        raise self.exc


class FakeSignals:
    """
    Signal detectors returning fixed values.

    Any value given as an exception instance is raised instead of returned.
    """

    def __init__(self, saliency=0.9, points=6000, color=(0.45, 0.30, 0.20), tilt=0.0):
        self.saliency = saliency
        self.points = points
        self.color = color
        self.tilt = tilt
        self.calls = []

    def _value(self, name, value):
        self.calls.append(name)
        if isinstance(value, BaseException):
            raise value
        return value

    def saliency_confidence(self, image):
        return self._value("saliency", self.saliency)

    def contour_points(self, image):
        return self._value("contour", self.points)

    def average_color(self, image):
        return self._value("color", self.color)

    def horizon_tilt(self, image):
        return self._value("horizon", self.tilt)


def failing_signals(exc: Optional[Exception] = None) -> FakeSignals:
    exc = exc or RuntimeError("detector crashed")
    return FakeSignals(saliency=exc, points=exc, color=exc, tilt=exc)


def load_table_predictor(artifact):
    """Model loader used by CLI tests: ignores the artifact contents."""
    predictor = FixedPredictor([("dining table, board", 0.8), ("desk", 0.1)])
    predictor.artifact = artifact
    return predictor


NOT_A_LOADER = "plain value"
