"""
Classifier stages of the antique analysis pipeline.

The general classifier yields ranked labels and a coarse category; the
optional binary detector gives a direct antique verdict when its model ships.
"""

from .model import BinaryResult, Category, ClassificationResult, LabelScores, clamp_confidence
from .categories import CATEGORY_KEYWORDS, primary_term, resolve_category
from .gateway import ClassifierGateway
from .binary import Available, BinaryAntiqueDetector, DetectorStatus, Unavailable, load_binary_detector

__all__ = [
    "Available",
    "BinaryAntiqueDetector",
    "BinaryResult",
    "CATEGORY_KEYWORDS",
    "Category",
    "ClassificationResult",
    "ClassifierGateway",
    "DetectorStatus",
    "LabelScores",
    "Unavailable",
    "clamp_confidence",
    "load_binary_detector",
    "primary_term",
    "resolve_category",
]
