"""
Data models for relationship records feeding the graph.
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class RelationshipKind(str, Enum):
    """Kind of interaction between two entities."""
    MENTORSHIP_COMPLETED = "mentorship_completed"
    INVESTMENT_INTEREST = "investment_interest"
    EVENT_PARTICIPATION = "event_participation"


class RelationshipRecord(BaseModel):
    """One relationship signal between two entities."""
    source_id: str
    target_id: str
    kind: RelationshipKind
    weight: Optional[float] = Field(None, ge=0)
