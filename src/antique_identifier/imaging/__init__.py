"""Image input normalisation for classifiers and heuristic signals."""

from .loader import (
    ImageSource,
    encode_image_bytes,
    load_image,
    to_analysis_array,
    to_model_input,
)

__all__ = [
    "ImageSource",
    "encode_image_bytes",
    "load_image",
    "to_analysis_array",
    "to_model_input",
]
