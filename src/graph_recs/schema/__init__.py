"""
Data models for the graph recommender.
"""
from .api import ErrorResponse, HealthResponse, RecommendationResponse
from .candidate import Candidate, Tier
from .profile import Profile, Role, attribute_values, default_target_roles, parse_roles
from .relationship import RelationshipKind, RelationshipRecord

__all__ = [
    "Candidate",
    "ErrorResponse",
    "HealthResponse",
    "Profile",
    "RecommendationResponse",
    "RelationshipKind",
    "RelationshipRecord",
    "Role",
    "Tier",
    "attribute_values",
    "default_target_roles",
    "parse_roles",
]
