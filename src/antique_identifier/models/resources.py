"""
Model resource collaborator.

Model artifacts are looked up by name (for example ``"MobileNetV2"``) in a
model directory and turned into predictors by an injected loader. Each name is
loaded at most once per ``ModelResources`` instance; the resulting predictor is
treated as read-only and shared by every later call.
"""

from __future__ import annotations

import importlib
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Protocol

import numpy as np

from ..errors import ModelUnavailableError
from ..logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Observation:
    """One label emitted by a model."""
    identifier: str
    confidence: float


class Predictor(Protocol):
    """Anything that maps a model input buffer to ranked observations."""

    def predict(self, pixels: np.ndarray) -> List[Observation]:
        ...


ModelLoader = Callable[[Path], Predictor]


class ModelResources:
    def __init__(self, model_dir: Optional[Path] = None, loader: Optional[ModelLoader] = None) -> None:
        self._model_dir = Path(model_dir) if model_dir is not None else None
        self._loader = loader
        self._predictors: Dict[str, Predictor] = {}
        self._lock = threading.Lock()

    @property
    def model_dir(self) -> Optional[Path]:
        return self._model_dir

    def register(self, name: str, predictor: Predictor) -> None:
        """Install an in-process predictor under a model name."""
        with self._lock:
            self._predictors[name] = predictor
        logger.debug(f"Registered predictor for model {name}")

    def is_loaded(self, name: str) -> bool:
        return name in self._predictors

    def load(self, name: str) -> Predictor:
        """
        Return the predictor for a named model, loading it on first use.

        Raises:
            ModelUnavailableError: If the artifact is missing or fails to load
        """
        with self._lock:
            predictor = self._predictors.get(name)
            if predictor is not None:
                return predictor

            artifact = self._find_artifact(name)
            if self._loader is None:
                raise ModelUnavailableError(f"No model loader configured for {name} ({artifact})")

            try:
                predictor = self._loader(artifact)
            except Exception as exc:
                raise ModelUnavailableError(f"Failed to load model {name} from {artifact}: {exc}") from exc

            self._predictors[name] = predictor
            logger.info(f"Loaded model {name} from {artifact}")
            return predictor

    def _find_artifact(self, name: str) -> Path:
        if self._model_dir is None or not self._model_dir.is_dir():
            raise ModelUnavailableError(f"Model {name} not found: no model directory {self._model_dir}")

        candidates = sorted(p for p in self._model_dir.glob(f"{name}.*"))
        if not candidates:
            raise ModelUnavailableError(f"Model {name} not found in {self._model_dir}")
        if len(candidates) > 1:
            logger.debug(f"Multiple artifacts for {name}, using {candidates[0].name}")
        return candidates[0]


def resolve_loader(path: str) -> ModelLoader:
    """
    Import a model loader named as ``"package.module:callable"``.

    The callable receives the artifact path and returns a predictor.

    Raises:
        ModelUnavailableError: If the path is malformed or cannot be imported
    """
    module_name, _, attr = path.strip().partition(":")
    if not module_name or not attr:
        raise ModelUnavailableError(f"Model loader must be given as 'module:callable', got {path!r}")

    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise ModelUnavailableError(f"Cannot import model loader module {module_name}: {exc}") from exc

    loader = getattr(module, attr, None)
    if loader is None or not callable(loader):
        raise ModelUnavailableError(f"Model loader {path} is not a callable")

    logger.debug(f"Using model loader {path}")
    return loader
