# Modules package
from .review_analysis import Orchestrator, AnalysisResult

__all__ = [
    "Orchestrator",
    "AnalysisResult",
]
