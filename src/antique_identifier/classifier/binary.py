"""
Optional binary antique/not-antique detector.

The dedicated model may not ship with every build. Loading never raises;
instead it returns a DetectorStatus that call sites check explicitly.
"""

from dataclasses import dataclass
from typing import Union

from ..errors import ImageProcessingError, ModelUnavailableError, PredictionFailedError
from ..imaging import ImageSource, to_model_input
from ..logging import get_logger
from ..models import ModelResources, Predictor
from .model import BinaryResult

logger = get_logger(__name__)

DEFAULT_MODEL_NAME = "AntiqueClassifier"
ANTIQUE_LABEL = "antique"


class BinaryAntiqueDetector:
    def __init__(self, predictor: Predictor, model_name: str = DEFAULT_MODEL_NAME, input_size: int = 224):
        self._predictor = predictor
        self.model_name = model_name
        self.input_size = input_size

    def classify(self, image: ImageSource) -> BinaryResult:
        """
        Run the two-class model and report its top verdict.

        Raises:
            ImageProcessingError: If the image cannot be resized for the model
            PredictionFailedError: If the model yields no observations
        """
        pixels = to_model_input(image, self.input_size)

        try:
            observations = self._predictor.predict(pixels)
        except (ImageProcessingError, PredictionFailedError):
            raise
        except Exception as exc:
            raise PredictionFailedError(f"{self.model_name} prediction failed: {exc}") from exc

        if not observations:
            raise PredictionFailedError(f"{self.model_name} produced no observations")

        top = max(observations, key=lambda obs: obs.confidence)
        result = BinaryResult(
            is_antique=top.identifier.strip().lower() == ANTIQUE_LABEL,
            confidence=top.confidence,
        )
        logger.debug(f"Binary detector verdict: {top.identifier} ({result.confidence:.2f})")
        return result


@dataclass(frozen=True)
class Available:
    detector: BinaryAntiqueDetector


@dataclass(frozen=True)
class Unavailable:
    reason: str = "binary antique model not installed"


DetectorStatus = Union[Available, Unavailable]


def load_binary_detector(resources: ModelResources,
                         model_name: str = DEFAULT_MODEL_NAME,
                         input_size: int = 224) -> DetectorStatus:
    """Load the optional detector, degrading to Unavailable when its model is missing."""
    try:
        predictor = resources.load(model_name)
    except ModelUnavailableError as exc:
        logger.info(f"Binary antique detector unavailable: {exc}")
        return Unavailable(reason=str(exc))

    return Available(BinaryAntiqueDetector(predictor, model_name=model_name, input_size=input_size))
