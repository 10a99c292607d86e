"""
Analysis Orchestrator sequencing the pipeline stages for one image.

    classify -> binary detector (if available) -> heuristics -> fusion

Only the final fused result, or the neutral failure result, ever leaves
analyze(); no stage failure propagates to the caller.
"""

from typing import Optional

from ..classifier import (
    Available,
    BinaryResult,
    ClassificationResult,
    ClassifierGateway,
    DetectorStatus,
    Unavailable,
)
from ..errors import AnalysisError
from ..fusion import FusionPolicy, ResultCombiner, Verdict
from ..heuristics import HeuristicEngine
from ..imaging import ImageSource, load_image
from ..logging import get_logger
from .result import CombinedAnalysisResult

logger = get_logger(__name__)


class AntiqueAnalyzer:
    """
    Runs the full antique analysis for a captured image.

    Args:
        gateway: General classifier gateway (mandatory)
        detector: Status of the optional binary antique detector
        engine: Heuristic engine
        combiner: Result combiner; its policy selects the fusion formula
    """

    def __init__(self,
                 gateway: ClassifierGateway,
                 detector: Optional[DetectorStatus] = None,
                 engine: Optional[HeuristicEngine] = None,
                 combiner: Optional[ResultCombiner] = None):
        self.gateway = gateway
        self.detector = detector if detector is not None else Unavailable()
        self.engine = engine or HeuristicEngine()
        self.combiner = combiner or ResultCombiner()

        logger.info(
            f"AntiqueAnalyzer initialized: binary detector="
            f"{'available' if isinstance(self.detector, Available) else 'unavailable'}, "
            f"policy={self.combiner.policy.value}"
        )

    def analyze(self, image: ImageSource) -> CombinedAnalysisResult:
        """Analyze an image. Always returns a result, never raises."""
        try:
            return self._analyze(image)
        except Exception as exc:
            logger.error(f"Analysis failed unexpectedly: {exc}", exc_info=True)
            return CombinedAnalysisResult.failed()

    def _analyze(self, image: ImageSource) -> CombinedAnalysisResult:
        try:
            # Decode once so every stage sees the same pixels
            decoded = load_image(image)
            classification = self.gateway.classify(decoded)
        except AnalysisError as exc:
            logger.warning(f"Classification failed: {exc}")
            return CombinedAnalysisResult.failed()

        heuristic = self.engine.score(decoded, classification.category)

        if self.combiner.policy == FusionPolicy.MAX_CONFIDENCE:
            top = classification.top_label()
            verdict = self.combiner.combine_max(heuristic, top[1] if top else None)
        else:
            binary = self._run_binary(decoded)
            verdict = self.combiner.combine(binary, heuristic)

        result = _attach(verdict, classification)
        logger.info(
            f"Analysis complete: category={result.category.value}, "
            f"antique={result.is_antique}, confidence={result.confidence:.2f}"
        )
        return result

    def _run_binary(self, image: ImageSource) -> Optional[BinaryResult]:
        detector = self.detector
        if isinstance(detector, Unavailable):
            return None

        if isinstance(detector, Available):
            try:
                return detector.detector.classify(image)
            except Exception as exc:
                logger.warning(f"Binary antique detector failed, continuing without it: {exc}")
                return None

        raise TypeError(f"Unexpected detector status: {detector!r}")


def _attach(verdict: Verdict, classification: ClassificationResult) -> CombinedAnalysisResult:
    return CombinedAnalysisResult(
        is_antique=verdict.is_antique,
        confidence=verdict.confidence,
        reasons=verdict.reasons,
        category=classification.category,
        classifications=classification.classifications,
    )
