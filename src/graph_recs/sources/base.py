from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Sequence

from ..schema.profile import Profile, Role
from ..schema.relationship import RelationshipRecord


class RelationshipSource(ABC):
    """Supplies the relationship records relevant to a subject."""

    @abstractmethod
    def fetch_relationships(self, subject_id: str) -> List[RelationshipRecord]:
        """Relationship records for graph construction. Raises DataFetchError."""
        pass


class ProfileResolver(ABC):
    """Resolves IDs to profiles and supplies candidate pools."""

    @abstractmethod
    def resolve_profiles(self, ids: Sequence[str]) -> List[Profile]:
        """Profiles for the IDs that exist; unknown IDs are omitted."""
        pass

    @abstractmethod
    def fetch_candidate_pool(
        self, roles: Iterable[Role], exclude_ids: Iterable[str], limit: int
    ) -> List[Profile]:
        """Up to ``limit`` profiles with a role in ``roles``, excluding ``exclude_ids``."""
        pass

    def resolve_profile(self, profile_id: str) -> Optional[Profile]:
        profiles = self.resolve_profiles([profile_id])
        return profiles[0] if profiles else None


class CoAttendanceSource(ABC):
    """Event co-attendance used for reason text."""

    @abstractmethod
    def fetch_subject_events(self, subject_id: str) -> List[str]:
        """IDs of events the subject has a confirmed registration for."""
        pass

    @abstractmethod
    def count_shared_events(
        self, event_ids: Sequence[str], candidate_ids: Sequence[str]
    ) -> Dict[str, int]:
        """Per candidate, the number of ``event_ids`` they are confirmed for."""
        pass


class Authenticator(ABC):
    """Maps a session token to a user ID."""

    @abstractmethod
    def authenticate(self, token: Optional[str]) -> Optional[str]:
        pass


class Network(RelationshipSource, ProfileResolver, CoAttendanceSource, Authenticator):
    """A data backend implementing every collaborator interface."""
