"""
Data models for the recommendations API.
"""
from typing import List, Optional

from pydantic import BaseModel

from .candidate import Candidate


class RecommendationResponse(BaseModel):
    """Response model for the recommendations endpoint."""
    data: List[Candidate]
    count: int


class ErrorResponse(BaseModel):
    """Error body; ``hint`` only for a missing optional dependency."""
    error: str
    hint: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check body."""
    status: str
    service: str
