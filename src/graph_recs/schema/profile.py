"""
Data models for profiles resolved from the platform.
"""
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional

from pydantic import BaseModel, Field


class Role(str, Enum):
    """Platform role of a profile."""
    STARTUP = "startup"
    MENTOR = "mentor"
    INVESTOR = "investor"
    ADMIN = "admin"


class Profile(BaseModel):
    """
    A resolved profile.

    ``attributes`` depends on the role:
      startup  -> industry, stage, funding_stage, location, slug
      mentor   -> industry, expertise_tags, location
      investor -> industry, sectors, investment_stages, geographic_focus, location
    """
    id: str
    display_name: Optional[str] = None
    avatar_ref: Optional[str] = None
    role: Role
    attributes: Dict[str, Any] = Field(default_factory=dict)


_ROLE_NAMES = {role.value for role in Role}


def attribute_values(value: Any) -> List[str]:
    """Normalize a scalar-or-list attribute to a list of non-empty strings."""
    if value is None:
        return []
    if isinstance(value, (list, tuple, set, frozenset)):
        items = value
    else:
        items = [value]
    return [str(v).strip() for v in items if v is not None and str(v).strip()]


def default_target_roles(subject_role: Optional[Role]) -> FrozenSet[Role]:
    """Roles a subject is matched against when the caller does not say."""
    if subject_role == Role.STARTUP:
        return frozenset({Role.MENTOR, Role.INVESTOR})
    return frozenset({Role.STARTUP})


def parse_roles(raw: Optional[str]) -> FrozenSet[Role]:
    """Parse a comma-separated role list, dropping blanks and unknown names."""
    if not raw:
        return frozenset()
    roles = set()
    for part in raw.split(","):
        name = part.strip().lower()
        if name in _ROLE_NAMES:
            roles.add(Role(name))
    return frozenset(roles)
