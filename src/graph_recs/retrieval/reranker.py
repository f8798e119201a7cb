"""
Hybrid reranking of graph candidates with attribute-based fallback.
"""
import logging
from dataclasses import replace
from typing import Iterable, List, Optional, Sequence, Tuple

from ..schema.candidate import Candidate, Tier
from ..schema.profile import Profile, Role, default_target_roles
from ..sources.base import CoAttendanceSource, ProfileResolver
from .diversity import FILLER_REASON, DiversitySampler, NoDiversity
from .scorers import AttributeScorer, GraphScorer, ScoringRequest, merge_tiers

logger = logging.getLogger(__name__)


def resolve_target_roles(
    subject: Optional[Profile], explicit: Optional[Iterable[Role]] = None
) -> frozenset:
    """Explicit roles when given, otherwise the subject's default counterparts."""
    roles = frozenset(explicit or ())
    if roles:
        return roles
    return default_target_roles(subject.role if subject else None)


class HybridReranker:
    """
    Produces the final candidate list.

    Graph candidates keep their similarity order and strictly precede
    attribute candidates. The attribute tier is consulted only when the graph
    tier yields fewer than ``top_k`` entries.
    """

    def __init__(
        self,
        profiles: ProfileResolver,
        co_attendance: Optional[CoAttendanceSource] = None,
        config=None,
        diversity: Optional[DiversitySampler] = None,
        rules=None,
    ):
        """
        Initialize reranker.

        Args:
            profiles: Profile resolver collaborator
            co_attendance: Co-attendance collaborator for reason text
            config: Configuration object (pool limit, diversity slots)
            diversity: Filler sampler; defaults to none
            rules: Optional rule table replacing the built-in one
        """
        pool_limit = config.candidate_pool_limit if config is not None else 200
        self.diversity_slots = config.diversity_slots if config is not None else 0
        self.graph_scorer = GraphScorer(profiles, co_attendance)
        self.attribute_scorer = AttributeScorer(profiles, pool_limit, rules)
        self.diversity = diversity or NoDiversity()

    def rerank(
        self,
        subject_id: str,
        subject: Optional[Profile],
        ranked: Sequence[Tuple[str, float]],
        top_k: int,
        target_roles: Optional[Iterable[Role]] = None,
        subject_events: Sequence[str] = (),
    ) -> List[Candidate]:
        """
        Merge graph and attribute evidence into at most ``top_k`` candidates.

        Args:
            subject_id: Subject the list is for
            subject: Subject profile, if it resolved
            ranked: (node ID, similarity) pairs from the similarity ranker
            top_k: Maximum number of candidates
            target_roles: Roles to recommend; derived from the subject if empty
            subject_events: Subject's confirmed event IDs

        Returns:
            Ordered candidates, no duplicate IDs, all in the target roles
        """
        if top_k <= 0:
            return []

        request = ScoringRequest(
            subject_id=subject_id,
            subject=subject,
            target_roles=resolve_target_roles(subject, target_roles),
            top_k=top_k,
            ranked=list(ranked),
            subject_events=list(subject_events),
        )

        graph_tier = self.graph_scorer.score(request)
        final = merge_tiers([graph_tier], top_k)
        if len(final) >= top_k:
            logger.debug("Graph tier filled %d slots for %s", len(final), subject_id)
            return final

        request = replace(request, exclude_ids=frozenset(c.id for c in final))
        pool = self.attribute_scorer.fetch_pool(request)
        attribute_tier = self.attribute_scorer.score_pool(request, pool)
        final = merge_tiers([final, attribute_tier], top_k)

        open_slots = min(self.diversity_slots, top_k - len(final))
        if open_slots > 0:
            taken = {c.id for c in final}
            remaining = [p for p in pool if p.id not in taken]
            fillers = [
                Candidate.from_profile(p, Tier.DIVERSITY, 0.0, [FILLER_REASON])
                for p in self.diversity.sample(subject_id, remaining, open_slots)
            ]
            final = merge_tiers([final, fillers], top_k)

        logger.debug(
            "Reranked for %s: graph=%d attribute=%d final=%d roles=%s",
            subject_id, len(graph_tier), len(attribute_tier), len(final),
            sorted(r.value for r in request.target_roles),
        )
        return final
