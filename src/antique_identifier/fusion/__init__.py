"""Fusion of binary detector and heuristic outputs into one verdict."""

from .policy import FusionPolicy
from .combiner import CombinerConfig, ResultCombiner, Verdict

__all__ = [
    "CombinerConfig",
    "FusionPolicy",
    "ResultCombiner",
    "Verdict",
]
