"""
FastAPI dependencies for dependency injection.
"""

from src.modules.review_analysis import Orchestrator, get_orchestrator


def get_orchestrator_dep() -> Orchestrator:
    """Dependency for orchestrator."""
    return get_orchestrator()
