"""
Graph-based and attribute-based candidate scorers, and the tier combinator.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from ..errors import DataFetchError
from ..schema.candidate import Candidate, Tier
from ..schema.profile import Profile, Role
from ..sources.base import CoAttendanceSource, ProfileResolver
from .rules import AttributeRule, score_profile

logger = logging.getLogger(__name__)


@dataclass
class ScoringRequest:
    """Everything a scorer needs about the current subject."""
    subject_id: str
    subject: Optional[Profile]
    target_roles: FrozenSet[Role]
    top_k: int
    ranked: List[Tuple[str, float]] = field(default_factory=list)
    subject_events: List[str] = field(default_factory=list)
    exclude_ids: FrozenSet[str] = frozenset()


class Scorer(ABC):
    """Produces an ordered candidate tier for a request."""

    tier: Tier

    @abstractmethod
    def score(self, request: ScoringRequest) -> List[Candidate]:
        pass


class GraphScorer(Scorer):
    """Turns similarity-ranked node IDs into role-filtered candidates."""

    tier = Tier.GRAPH

    def __init__(self, profiles: ProfileResolver, co_attendance: Optional[CoAttendanceSource] = None):
        self.profiles = profiles
        self.co_attendance = co_attendance

    def score(self, request: ScoringRequest) -> List[Candidate]:
        ids = [node_id for node_id, _ in request.ranked
               if node_id != request.subject_id and node_id not in request.exclude_ids]
        if not ids:
            return []

        try:
            resolved = {p.id: p for p in self.profiles.resolve_profiles(ids)}
        except DataFetchError as exc:
            logger.warning("Graph tier profile lookup failed: %s", exc)
            return []

        scores = dict(request.ranked)
        kept = [resolved[i] for i in ids if i in resolved and resolved[i].role in request.target_roles]
        shared = self._shared_event_counts(request.subject_events, [p.id for p in kept])

        candidates = []
        for profile in kept:
            reasons = []
            count = shared.get(profile.id, 0)
            if count > 0:
                reasons.append(f"Attended {count} event(s) together")
            candidates.append(Candidate.from_profile(profile, self.tier, scores.get(profile.id), reasons))
        return candidates

    def _shared_event_counts(self, event_ids: Sequence[str], candidate_ids: Sequence[str]) -> Dict[str, int]:
        if self.co_attendance is None or not event_ids or not candidate_ids:
            return {}
        try:
            return self.co_attendance.count_shared_events(event_ids, candidate_ids)
        except DataFetchError as exc:
            logger.warning("Co-attendance lookup failed: %s", exc)
            return {}


class AttributeScorer(Scorer):
    """Scores a candidate pool with the role-pair rule table."""

    tier = Tier.ATTRIBUTE

    def __init__(
        self,
        profiles: ProfileResolver,
        pool_limit: int = 200,
        rules: Optional[Dict[Tuple[Role, Role], Tuple[AttributeRule, ...]]] = None,
    ):
        self.profiles = profiles
        self.pool_limit = pool_limit
        self.rules = rules

    def fetch_pool(self, request: ScoringRequest) -> List[Profile]:
        """Profiles in the target roles, minus the subject and excluded IDs."""
        exclude = set(request.exclude_ids) | {request.subject_id}
        try:
            pool = self.profiles.fetch_candidate_pool(request.target_roles, exclude, self.pool_limit)
        except DataFetchError as exc:
            logger.warning("Candidate pool fetch failed: %s", exc)
            return []
        return [p for p in pool if p.id not in exclude and p.role in request.target_roles]

    def score_pool(self, request: ScoringRequest, pool: Iterable[Profile]) -> List[Candidate]:
        """Candidates with a strictly positive score, best first."""
        scored = []
        for profile in pool:
            score, reasons = score_profile(request.subject, profile, self.rules)
            if score > 0:
                scored.append(Candidate.from_profile(profile, self.tier, score, reasons))
        scored.sort(key=lambda c: (-c.score, c.id))
        return scored

    def score(self, request: ScoringRequest) -> List[Candidate]:
        return self.score_pool(request, self.fetch_pool(request))


def merge_tiers(tiers: Iterable[Sequence[Candidate]], top_k: int) -> List[Candidate]:
    """
    Concatenate tiers in priority order, skipping IDs already taken.

    Args:
        tiers: Candidate lists, highest priority first
        top_k: Maximum length of the result

    Returns:
        Merged list without duplicate IDs, at most ``top_k`` long
    """
    merged: List[Candidate] = []
    seen = set()
    if top_k <= 0:
        return merged
    for tier in tiers:
        for candidate in tier:
            if candidate.id in seen:
                continue
            seen.add(candidate.id)
            merged.append(candidate)
            if len(merged) >= top_k:
                return merged
    return merged
