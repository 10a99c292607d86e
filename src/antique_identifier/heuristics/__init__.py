"""Category-specific heuristics built on image-derived signals."""

from .engine import (
    CategoryPrior,
    FurnitureHeuristicConfig,
    HeuristicEngine,
    HeuristicResult,
    contour_complexity,
    levelness,
)
from .signals import ImageSignals, OpenCVSignals, SignalConfig, brownishness

__all__ = [
    "CategoryPrior",
    "FurnitureHeuristicConfig",
    "HeuristicEngine",
    "HeuristicResult",
    "ImageSignals",
    "OpenCVSignals",
    "SignalConfig",
    "brownishness",
    "contour_complexity",
    "levelness",
]
