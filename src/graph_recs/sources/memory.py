"""
In-memory platform data, seeded from Python objects or a YAML file.
"""
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

import yaml

from ..ingest.relationships import (
    CONFIRMED,
    co_attendance_records,
    investment_records,
    mentorship_records,
)
from ..schema.profile import Profile, Role
from ..schema.relationship import RelationshipRecord
from .base import Network


class InMemoryNetwork(Network):
    """Profiles, requests, event registrations and sessions held in memory."""

    def __init__(
        self,
        profiles: Iterable[Profile] = (),
        mentorship_requests: Iterable[Mapping] = (),
        investment_requests: Iterable[Mapping] = (),
        event_registrations: Iterable[Mapping] = (),
        sessions: Optional[Mapping[str, str]] = None,
    ):
        self.profiles: Dict[str, Profile] = {p.id: p for p in profiles}
        self.mentorship_requests: List[dict] = [dict(r) for r in mentorship_requests]
        self.investment_requests: List[dict] = [dict(r) for r in investment_requests]
        self.event_registrations: List[dict] = [
            {"status": CONFIRMED, **r} for r in event_registrations
        ]
        self.sessions: Dict[str, str] = dict(sessions or {})

    @classmethod
    def from_dict(cls, data: Mapping) -> "InMemoryNetwork":
        return cls(
            profiles=[Profile(**p) for p in data.get("profiles") or []],
            mentorship_requests=data.get("mentorship_requests") or [],
            investment_requests=data.get("investment_requests") or [],
            event_registrations=data.get("event_registrations") or [],
            sessions=data.get("sessions") or {},
        )

    @classmethod
    def from_yaml(cls, path: Path) -> "InMemoryNetwork":
        """Load a network from a YAML seed file."""
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data)

    def add_profile(self, profile: Profile) -> None:
        self.profiles[profile.id] = profile

    # RelationshipSource

    def fetch_relationships(self, subject_id: str) -> List[RelationshipRecord]:
        records = mentorship_records(self.mentorship_requests)
        records += investment_records(self.investment_requests)
        subject_events = set(self.fetch_subject_events(subject_id))
        co_regs = [r for r in self.event_registrations if r.get("event_id") in subject_events]
        records += co_attendance_records(subject_id, co_regs)
        return records

    # ProfileResolver

    def resolve_profiles(self, ids: Sequence[str]) -> List[Profile]:
        return [self.profiles[i] for i in dict.fromkeys(ids) if i in self.profiles]

    def fetch_candidate_pool(
        self, roles: Iterable[Role], exclude_ids: Iterable[str], limit: int
    ) -> List[Profile]:
        roles = set(roles)
        excluded = set(exclude_ids)
        pool = [
            p for pid, p in sorted(self.profiles.items())
            if p.role in roles and pid not in excluded
        ]
        return pool[:limit]

    # CoAttendanceSource

    def fetch_subject_events(self, subject_id: str) -> List[str]:
        events = [
            r["event_id"] for r in self.event_registrations
            if r.get("user_id") == subject_id and r.get("status") == CONFIRMED
        ]
        return list(dict.fromkeys(events))

    def count_shared_events(
        self, event_ids: Sequence[str], candidate_ids: Sequence[str]
    ) -> Dict[str, int]:
        events = set(event_ids)
        candidates = set(candidate_ids)
        counts: Dict[str, int] = {}
        for r in self.event_registrations:
            if r.get("status") != CONFIRMED:
                continue
            if r.get("event_id") in events and r.get("user_id") in candidates:
                counts[r["user_id"]] = counts.get(r["user_id"], 0) + 1
        return counts

    # Authenticator

    def authenticate(self, token: Optional[str]) -> Optional[str]:
        if not token:
            return None
        return self.sessions.get(token)
