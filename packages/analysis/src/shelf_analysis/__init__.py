"""Media Shelf Analysis - AI-assisted content features.

This package provides:
- AnalysisClient: Abstract base for analysis backends
- DisabledAnalysisClient: Backend returning constant "disabled" results
- score_quiz: Score answers against quiz questions
- get_analysis_client: Factory function for backend selection
"""

from typing import Optional

from shelf_common import get_settings

from shelf_analysis.base_client import AnalysisClient, TargetLanguage
from shelf_analysis.disabled_client import DISABLED_MESSAGE, DisabledAnalysisClient
from shelf_analysis.quiz import score_quiz


def get_analysis_client(backend: Optional[str] = None, **kwargs) -> AnalysisClient:
    """Factory function to create an analysis client.

    Args:
        backend: Backend type (default: ``Settings.analysis_backend``)
        **kwargs: Additional arguments passed to client constructor

    Returns:
        AnalysisClient instance for the specified backend

    Raises:
        ValueError: If backend is unknown

    Example:
        >>> client = get_analysis_client("disabled")
        >>> await client.is_available()
        False
    """
    backend = backend or get_settings().analysis_backend

    if backend == "disabled":
        return DisabledAnalysisClient(**kwargs)
    else:
        raise ValueError(f"Unknown backend: {backend}. Use 'disabled'.")


__version__ = "1.0.0"

__all__ = [
    "AnalysisClient",
    "DisabledAnalysisClient",
    "DISABLED_MESSAGE",
    "TargetLanguage",
    "get_analysis_client",
    "score_quiz",
]
