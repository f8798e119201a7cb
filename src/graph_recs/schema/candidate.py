"""
Data models for recommendation candidates.
"""
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from .profile import Profile, Role


class Tier(str, Enum):
    """Which scorer proposed a candidate."""
    GRAPH = "graph"
    ATTRIBUTE = "attribute"
    DIVERSITY = "diversity"


class Candidate(BaseModel):
    """An entity proposed for the subject, with justification strings."""
    id: str
    role: Role
    display_name: Optional[str] = None
    avatar_ref: Optional[str] = None
    score: Optional[float] = None
    reasons: List[str] = Field(default_factory=list)
    tier: Tier = Tier.GRAPH

    @classmethod
    def from_profile(
        cls,
        profile: Profile,
        tier: Tier,
        score: Optional[float] = None,
        reasons: Optional[List[str]] = None,
    ) -> "Candidate":
        return cls(
            id=profile.id,
            role=profile.role,
            display_name=profile.display_name,
            avatar_ref=profile.avatar_ref,
            score=score,
            reasons=list(reasons or []),
            tier=tier,
        )
