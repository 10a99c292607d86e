import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .fusion.policy import FusionPolicy
from .logging import get_logger

logger = get_logger(__name__)


@dataclass
class Settings:
    model_dir: Path = Path("models")
    model_loader: Optional[str] = None
    general_model_name: str = "MobileNetV2"
    binary_model_name: str = "AntiqueClassifier"
    input_size: int = 224
    top_k: int = 5
    analysis_max_side: int = 512
    fusion_policy: FusionPolicy = FusionPolicy.OVERRIDE_BLEND
    use_binary_detector: bool = True

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ANTIQUE_IDENTIFIER_* environment variables."""
        settings = cls()

        model_dir = os.getenv("ANTIQUE_IDENTIFIER_MODEL_DIR")
        if model_dir:
            settings.model_dir = Path(model_dir)

        model_loader = os.getenv("ANTIQUE_IDENTIFIER_MODEL_LOADER")
        if model_loader:
            settings.model_loader = model_loader.strip()

        policy = os.getenv("ANTIQUE_IDENTIFIER_FUSION_POLICY")
        if policy:
            try:
                settings.fusion_policy = FusionPolicy(policy.strip().lower())
            except ValueError:
                logger.warning(f"Unknown fusion policy {policy!r}, using {settings.fusion_policy.value}")

        settings.input_size = _int_from_env("ANTIQUE_IDENTIFIER_INPUT_SIZE", settings.input_size)
        settings.top_k = _int_from_env("ANTIQUE_IDENTIFIER_TOP_K", settings.top_k)

        use_binary = os.getenv("ANTIQUE_IDENTIFIER_USE_BINARY")
        if use_binary is not None:
            settings.use_binary_detector = use_binary.strip().lower() not in {"0", "false", "no", "off"}

        return settings


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Ignoring non-integer {name}={raw!r}")
        return default
    if value <= 0:
        logger.warning(f"Ignoring non-positive {name}={value}")
        return default
    return value
