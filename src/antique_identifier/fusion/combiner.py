"""
Result Combiner fusing the binary detector with heuristic evidence.

A strongly confident binary model is allowed to decide on its own; below that
cutoff its score is blended with the heuristic so that neither noisy source
dominates. The model's verdict is always stated first in the reasons.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from ..classifier.model import BinaryResult, clamp_confidence
from ..heuristics.engine import HeuristicResult
from ..logging import get_logger
from .policy import FusionPolicy

logger = get_logger(__name__)


@dataclass(frozen=True)
class Verdict:
    """Fused decision before category and classifications are attached."""
    is_antique: bool
    confidence: float
    reasons: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "confidence", clamp_confidence(self.confidence))
        object.__setattr__(self, "reasons", tuple(self.reasons))

    @classmethod
    def from_heuristic(cls, heuristic: HeuristicResult) -> "Verdict":
        return cls(is_antique=heuristic.is_antique, confidence=heuristic.confidence, reasons=heuristic.reasons)


@dataclass
class CombinerConfig:
    """Fusion constants. Defaults are the shipped calibration."""
    high_confidence_cutoff: float = 0.8
    high_binary_weight: float = 0.9
    high_heuristic_weight: float = 0.1
    binary_weight: float = 0.6
    heuristic_weight: float = 0.4
    modern_penalty: float = 0.8
    antique_threshold: float = 0.5


class ResultCombiner:
    def __init__(self,
                 config: Optional[CombinerConfig] = None,
                 policy: FusionPolicy = FusionPolicy.OVERRIDE_BLEND):
        self.config = config or CombinerConfig()
        self.policy = policy

    def combine(self, binary: Optional[BinaryResult], heuristic: HeuristicResult) -> Verdict:
        """
        Fuse an optional binary verdict with a heuristic result.

        Without a binary verdict the heuristic result is returned unchanged.
        The max-confidence policy has no binary input and is served by
        combine_max instead.

        Raises:
            ValueError: If the combiner is configured for max-confidence fusion
        """
        if self.policy == FusionPolicy.MAX_CONFIDENCE:
            raise ValueError("max_confidence fusion uses combine_max, not combine")
        if binary is None:
            return Verdict.from_heuristic(heuristic)

        config = self.config
        overrides = self.policy != FusionPolicy.PLAIN_BLEND
        if overrides and binary.confidence > config.high_confidence_cutoff:
            return self._high_confidence(binary, heuristic)

        combined = clamp_confidence(
            config.binary_weight * binary.confidence + config.heuristic_weight * heuristic.confidence
        )
        if binary.is_antique:
            model_reason = f"Model suggests an antique ({_percent(binary.confidence)} confidence)."
        else:
            combined *= config.modern_penalty
            model_reason = f"Model suggests a modern piece ({_percent(binary.confidence)} confidence)."

        combined = clamp_confidence(combined)
        verdict = Verdict(
            is_antique=combined > config.antique_threshold,
            confidence=combined,
            reasons=(model_reason,) + heuristic.reasons,
        )
        logger.debug(f"Blended binary {binary.confidence:.2f} with heuristic {heuristic.confidence:.2f} -> {combined:.3f}")
        return verdict

    def combine_max(self, heuristic: HeuristicResult, top_label_confidence: Optional[float]) -> Verdict:
        """Keep the heuristic verdict but report the larger of the two confidences."""
        confidence = heuristic.confidence
        if top_label_confidence is not None:
            confidence = max(confidence, clamp_confidence(top_label_confidence))
        return Verdict(is_antique=heuristic.is_antique, confidence=confidence, reasons=heuristic.reasons)

    def _high_confidence(self, binary: BinaryResult, heuristic: HeuristicResult) -> Verdict:
        weight = self.config.high_binary_weight
        heuristic_weight = self.config.high_heuristic_weight
        if binary.is_antique:
            combined = weight * binary.confidence + heuristic_weight * heuristic.confidence
            model_reason = f"Model is highly confident this is an antique ({_percent(binary.confidence)})."
        else:
            combined = weight * binary.confidence + heuristic_weight * (1 - heuristic.confidence)
            model_reason = f"Model is highly confident this is a modern piece ({_percent(binary.confidence)})."

        logger.debug(f"High-confidence binary verdict {binary.is_antique} overrides heuristic")
        return Verdict(
            is_antique=binary.is_antique,
            confidence=combined,
            reasons=(model_reason,) + heuristic.reasons,
        )


def _percent(value: float) -> str:
    return f"{int(round(value * 100))}%"
