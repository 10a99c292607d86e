"""Analysis orchestration and result publication."""

from .result import FAILED_REASON, CombinedAnalysisResult
from .orchestrator import AntiqueAnalyzer
from .session import AnalysisSession

__all__ = [
    "AnalysisSession",
    "AntiqueAnalyzer",
    "CombinedAnalysisResult",
    "FAILED_REASON",
]
