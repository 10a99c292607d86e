"""Named model resources and the predictor interface classifiers run against."""

from .resources import ModelLoader, ModelResources, Observation, Predictor, resolve_loader
from .stub import StubAntiquePredictor, StubLabelPredictor, register_stub_models

__all__ = [
    "ModelLoader",
    "ModelResources",
    "Observation",
    "Predictor",
    "StubAntiquePredictor",
    "StubLabelPredictor",
    "register_stub_models",
    "resolve_loader",
]
