"""Exception taxonomy shared by the analysis stages."""


class AnalysisError(Exception):
    """Base class for failures raised by analysis stages."""


class ModelUnavailableError(AnalysisError):
    """Raised when a model resource is missing or cannot be loaded."""


class ImageProcessingError(AnalysisError):
    """Raised when an image cannot be decoded, resized or converted for a model."""


class PredictionFailedError(AnalysisError):
    """Raised when a model ran but produced no usable observations."""


class SignalUnavailableError(AnalysisError):
    """Raised by a signal detector that could not measure its signal."""


class RecordStoreError(Exception):
    """Raised when saved records cannot be read or written."""
