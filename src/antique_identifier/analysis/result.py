"""Terminal result of one analysis pass."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from ..classifier.model import Category, LabelScores, clamp_confidence, freeze_scores

FAILED_REASON = "Failed to analyze image."


@dataclass(frozen=True)
class CombinedAnalysisResult:
    """Fused verdict with the classifier output it was derived from."""
    is_antique: bool
    confidence: float
    reasons: Tuple[str, ...]
    category: Category
    classifications: LabelScores = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "confidence", clamp_confidence(self.confidence))
        object.__setattr__(self, "reasons", tuple(self.reasons))
        object.__setattr__(self, "classifications", freeze_scores(self.classifications))

    @classmethod
    def failed(cls) -> "CombinedAnalysisResult":
        """Neutral result published when analysis could not complete."""
        return cls(
            is_antique=False,
            confidence=0.0,
            reasons=(FAILED_REASON,),
            category=Category.UNKNOWN,
            classifications={},
        )

    @property
    def is_failure(self) -> bool:
        return self.reasons == (FAILED_REASON,) and not self.classifications

    @property
    def top_label(self) -> Optional[str]:
        if not self.classifications:
            return None
        return min(self.classifications.items(), key=lambda item: (-item[1], item[0]))[0]

    @property
    def confidence_level(self) -> str:
        if self.confidence > 0.75:
            return "High"
        elif self.confidence > 0.5:
            return "Medium"
        return "Low"

    @property
    def user_friendly_message(self) -> str:
        if self.category == Category.UNKNOWN:
            return "Could not identify as a known antique category."

        likelihood = "Likely" if self.is_antique else "Unlikely"
        percent = int(self.confidence * 100)
        return (
            f"{likelihood} Antique {self.category.value.capitalize()}\n"
            f"Confidence: {self.confidence_level} ({percent}%)"
        )

    @property
    def estimated_period(self) -> str:
        if not self.is_antique:
            return ""
        if self.confidence > 0.8:
            return "Estimated Period: 18th Century"
        elif self.confidence > 0.6:
            return "Estimated Period: 18th-19th Century"
        return "Estimated Period: 19th-20th Century"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "is_antique": self.is_antique,
            "confidence": self.confidence,
            "reasons": list(self.reasons),
            "category": self.category.value,
            "classifications": dict(self.classifications),
            "message": self.user_friendly_message,
            "estimated_period": self.estimated_period,
        }
