"""
Classifier Gateway around the general-purpose multi-label image classifier.

The gateway resizes the captured image to the model's square input, keeps the
top-k observations, collapses compound labels to their primary term and
resolves the object category through the keyword table.
"""

from typing import Dict, List, Sequence, Tuple

from ..errors import ImageProcessingError, PredictionFailedError
from ..imaging import ImageSource, to_model_input
from ..logging import get_logger
from ..models import ModelResources, Observation, Predictor
from .categories import CATEGORY_KEYWORDS, primary_term, ranking_key, resolve_category
from .model import Category, ClassificationResult, clamp_confidence

logger = get_logger(__name__)

DEFAULT_MODEL_NAME = "MobileNetV2"


class ClassifierGateway:
    """
    Wraps the general classifier and maps its labels to a Category.

    The model is loaded when the gateway is constructed; a missing model is a
    fatal startup error and surfaces as ModelUnavailableError.
    """

    def __init__(self,
                 resources: ModelResources,
                 model_name: str = DEFAULT_MODEL_NAME,
                 input_size: int = 224,
                 top_k: int = 5,
                 keyword_table: Sequence[Tuple[str, Category]] = CATEGORY_KEYWORDS):
        self.model_name = model_name
        self.input_size = input_size
        self.top_k = top_k
        self.keyword_table = tuple(keyword_table)
        self._predictor: Predictor = resources.load(model_name)

        logger.info(f"ClassifierGateway initialized: model={model_name}, input={input_size}px, top_k={top_k}")

    def classify(self, image: ImageSource) -> ClassificationResult:
        """
        Classify an image and resolve its category.

        Raises:
            ImageProcessingError: If the image cannot be decoded or resized
            PredictionFailedError: If the model yields no observations
        """
        pixels = to_model_input(image, self.input_size)

        try:
            observations = self._predictor.predict(pixels)
        except (ImageProcessingError, PredictionFailedError):
            raise
        except Exception as exc:
            raise PredictionFailedError(f"{self.model_name} prediction failed: {exc}") from exc

        scores = self._top_scores(observations or [])
        if not scores:
            raise PredictionFailedError(f"{self.model_name} produced no observations")

        ranked = sorted(scores, key=lambda label: ranking_key(label, scores[label], self.keyword_table))
        category = resolve_category(ranked, self.keyword_table)

        logger.debug(f"Classified as {category.value}: {[(label, round(scores[label], 3)) for label in ranked]}")
        return ClassificationResult(category=category, classifications=scores)

    def _top_scores(self, observations: List[Observation]) -> Dict[str, float]:
        """Top-k observations keyed by primary term; duplicate terms keep the best score."""
        ordered = sorted(observations, key=lambda obs: -obs.confidence)[:self.top_k]

        scores: Dict[str, float] = {}
        for obs in ordered:
            label = primary_term(obs.identifier)
            if not label:
                continue
            confidence = clamp_confidence(obs.confidence)
            if confidence > scores.get(label, -1.0):
                scores[label] = confidence
        return scores
