"""
Result types produced by the classifier stages.

Confidence values are clamped to [0.0, 1.0] on construction and label score
mappings are frozen, so results can be shared between threads.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


class Category(Enum):
    """Coarse object categories inferred from classifier labels."""
    FURNITURE = "furniture"
    CERAMIC = "ceramic"
    METAL = "metal"
    CLOCK = "clock"
    ARTWORK = "artwork"
    GLASS = "glass"
    BOOK = "book"
    JEWELRY = "jewelry"
    UNKNOWN = "unknown"


LabelScores = Mapping[str, float]


def clamp_confidence(value: float) -> float:
    """Clamp a confidence value into [0.0, 1.0]."""
    if value != value:  # NaN
        return 0.0
    return min(max(float(value), 0.0), 1.0)


def freeze_scores(scores: Mapping[str, float]) -> LabelScores:
    """Return a read-only copy of a label score mapping with clamped values."""
    return MappingProxyType({label: clamp_confidence(conf) for label, conf in scores.items()})


@dataclass(frozen=True)
class ClassificationResult:
    """Output of the general-purpose classifier for one image."""
    category: Category
    classifications: LabelScores = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "classifications", freeze_scores(self.classifications))

    def ranked_labels(self) -> Tuple[Tuple[str, float], ...]:
        """Labels sorted by confidence, highest first."""
        return tuple(sorted(self.classifications.items(), key=lambda item: (-item[1], item[0])))

    def top_label(self) -> Optional[Tuple[str, float]]:
        ranked = self.ranked_labels()
        return ranked[0] if ranked else None


@dataclass(frozen=True)
class BinaryResult:
    """Verdict of the dedicated antique/not-antique classifier."""
    is_antique: bool
    confidence: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "confidence", clamp_confidence(self.confidence))
