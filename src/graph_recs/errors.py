"""
Exception types raised by the recommendation pipeline and its collaborators.
"""
from typing import Optional


class RecommendationError(Exception):
    """Base class for recommender errors."""


class DataFetchError(RecommendationError):
    """A relationship, profile or co-attendance query failed."""

    def __init__(self, source: str, detail: str = ""):
        self.source = source
        self.detail = detail
        message = f"{source} fetch failed"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class EmbeddingBackendUnavailable(RecommendationError):
    """The configured embedding backend cannot run in this environment."""

    def __init__(self, backend: str, detail: str = "", package: Optional[str] = None):
        self.backend = backend
        self.detail = detail
        self.package = package
        message = f"Embedding backend '{backend}' unavailable"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)

    @property
    def hint(self) -> Optional[str]:
        if not self.package:
            return None
        return f"Install dependencies: pip install {self.package}"


class AuthenticationError(RecommendationError):
    """No subject could be established for the request."""
