from enum import Enum


class FusionPolicy(Enum):
    """How the final confidence is derived from the stage outputs."""
    # Binary detector overrides heuristics above its high-confidence cutoff
    OVERRIDE_BLEND = "override_blend"
    # Fixed 0.6/0.4 blend of binary detector and heuristic at every confidence
    PLAIN_BLEND = "plain_blend"
    # max(heuristic confidence, top classifier label confidence)
    MAX_CONFIDENCE = "max_confidence"
