"""
Category-specific heuristic scoring.

Furniture is scored from four independent image signals. Ceramic, metal and
clock carry fixed domain priors that do not inspect the image. Every other
category is reported as unsupported. Scoring never raises: a signal whose
detector fails simply does not contribute.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple, TypeVar

import numpy as np

from ..classifier.model import Category, clamp_confidence
from ..errors import ImageProcessingError
from ..imaging import ImageSource, to_analysis_array
from ..logging import get_logger
from .signals import ImageSignals, OpenCVSignals, brownishness

logger = get_logger(__name__)

T = TypeVar("T")

GENERIC_NEGATIVE_REASON = "Appears to have modern manufacturing characteristics."
GENERIC_POSITIVE_REASON = "Overall visual characteristics are consistent with an antique."
UNSUPPORTED_REASON = "Heuristic analysis for this category is not supported."

SALIENCY_REASON = "Distinct, well-defined silhouette typical of a single crafted piece."
CONTOUR_REASON = "Intricate details suggesting handcrafted work."
WOOD_REASON = "Wood tones and patina suggest age."
LEVEL_REASON = "Level, stable stance consistent with sound traditional joinery."


@dataclass(frozen=True)
class HeuristicResult:
    """Verdict of one heuristic scorer invocation."""
    is_antique: bool
    confidence: float
    reasons: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "confidence", clamp_confidence(self.confidence))
        object.__setattr__(self, "reasons", tuple(self.reasons))


@dataclass(frozen=True)
class CategoryPrior:
    """Fixed additive confidence for categories scored without image analysis."""
    base: float
    increments: Tuple[Tuple[float, str], ...]

    def to_result(self) -> HeuristicResult:
        confidence = self.base
        reasons = []
        for increment, reason in self.increments:
            confidence += increment
            reasons.append(reason)
        return HeuristicResult(is_antique=True, confidence=min(confidence, 1.0), reasons=tuple(reasons))


CERAMIC_PRIOR = CategoryPrior(
    base=0.5,
    increments=(
        (0.15, "Crazing in the glaze is consistent with age."),
        (0.1, "Hand-painted decoration shows slight irregularities."),
        (0.05, "Wear on the foot rim suggests long use."),
    ),
)

METAL_PRIOR = CategoryPrior(
    base=0.5,
    increments=(
        (0.15, "Patina and oxidation indicate age."),
        (0.1, "Hand-hammered surface irregularities suggest traditional metalwork."),
    ),
)

CLOCK_PRIOR = CategoryPrior(
    base=0.55,
    increments=(
        (0.15, "Mechanical movement design typical of older clocks."),
        (0.1, "Case construction and dial style suggest age."),
    ),
)


@dataclass
class FurnitureHeuristicConfig:
    """Weights and thresholds for the furniture scorer."""

    saliency_weight: float = 0.15
    contour_weight: float = 0.35
    texture_weight: float = 0.25
    level_weight: float = 0.25

    # Contour points at which complexity saturates to 1.0
    contour_saturation_points: int = 6000

    # Tilt in degrees below which a surface counts as level, and where levelness reaches 0
    level_tilt_degrees: float = 5.0
    max_tilt_degrees: float = 15.0

    antique_threshold: float = 0.6

    # Per-signal thresholds for adding a reason
    saliency_reason_threshold: float = 0.5
    contour_reason_threshold: float = 0.5
    brownishness_threshold: float = 0.45
    level_reason_threshold: float = 0.5


def contour_complexity(total_points: int, saturation_points: int = 6000) -> float:
    """Normalise a contour point count to [0, 1]."""
    if saturation_points <= 0:
        return 1.0 if total_points > 0 else 0.0
    return min(max(total_points, 0) / saturation_points, 1.0)


def levelness(tilt_degrees: float, level_tilt: float = 5.0, max_tilt: float = 15.0) -> float:
    """1.0 for a level surface, decaying linearly with tilt to 0 at max_tilt."""
    tilt = abs(tilt_degrees)
    if tilt < level_tilt:
        return 1.0
    return max(0.0, 1.0 - tilt / max_tilt)


class HeuristicEngine:
    """Dispatches an image to the scorer for its category."""

    def __init__(self,
                 signals: Optional[ImageSignals] = None,
                 furniture_config: Optional[FurnitureHeuristicConfig] = None,
                 analysis_max_side: int = 512):
        self.signals = signals or OpenCVSignals()
        self.furniture_config = furniture_config or FurnitureHeuristicConfig()
        self.analysis_max_side = analysis_max_side
        self._priors: Dict[Category, CategoryPrior] = {
            Category.CERAMIC: CERAMIC_PRIOR,
            Category.METAL: METAL_PRIOR,
            Category.CLOCK: CLOCK_PRIOR,
        }

    def score(self, image: ImageSource, category: Category) -> HeuristicResult:
        """Score an image for the given category. Never raises."""
        if category == Category.FURNITURE:
            return self.score_furniture(image)

        prior = self._priors.get(category)
        if prior is not None:
            return prior.to_result()

        logger.debug(f"No heuristic for category {category.value}")
        return HeuristicResult(is_antique=False, confidence=0.0, reasons=(UNSUPPORTED_REASON,))

    def score_furniture(self, image: ImageSource) -> HeuristicResult:
        config = self.furniture_config
        array = self._analysis_array(image)

        contributions: List[Tuple[float, float]] = []
        reasons: List[str] = []

        if array is not None:
            saliency = self._measure("saliency", self.signals.saliency_confidence, array)
            if saliency is not None:
                saliency = clamp_confidence(saliency)
                contributions.append((config.saliency_weight, saliency))
                if saliency > config.saliency_reason_threshold:
                    reasons.append(SALIENCY_REASON)

            points = self._measure("contour", self.signals.contour_points, array)
            if points is not None:
                complexity = contour_complexity(points, config.contour_saturation_points)
                contributions.append((config.contour_weight, complexity))
                if complexity > config.contour_reason_threshold:
                    reasons.append(CONTOUR_REASON)

            color = self._measure("color", self.signals.average_color, array)
            if color is not None:
                wood = brownishness(*color)
                contributions.append((config.texture_weight, wood))
                if wood > config.brownishness_threshold:
                    reasons.append(WOOD_REASON)

            tilt = self._measure("horizon", self.signals.horizon_tilt, array)
            if tilt is not None:
                level = levelness(tilt, config.level_tilt_degrees, config.max_tilt_degrees)
                contributions.append((config.level_weight, level))
                if level >= config.level_reason_threshold:
                    reasons.append(LEVEL_REASON)

        total_weight = sum(weight for weight, _ in contributions)
        if total_weight > 0:
            confidence = sum(weight * value for weight, value in contributions) / total_weight
        else:
            confidence = 0.0

        is_antique = confidence >= config.antique_threshold
        if not is_antique:
            reasons = [GENERIC_NEGATIVE_REASON]
        elif not reasons:
            reasons = [GENERIC_POSITIVE_REASON]

        logger.debug(
            f"Furniture heuristic: {len(contributions)}/4 signals, "
            f"confidence={confidence:.3f}, antique={is_antique}"
        )
        return HeuristicResult(is_antique=is_antique, confidence=confidence, reasons=tuple(reasons))

    def _analysis_array(self, image: ImageSource) -> Optional[np.ndarray]:
        try:
            return to_analysis_array(image, self.analysis_max_side)
        except ImageProcessingError as exc:
            logger.warning(f"Heuristic analysis could not read image: {exc}")
            return None

    def _measure(self, name: str, detector: Callable[[np.ndarray], T], array: np.ndarray) -> Optional[T]:
        try:
            return detector(array)
        except Exception as exc:
            logger.debug(f"Signal {name} unavailable: {exc}")
            return None
