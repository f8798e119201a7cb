"""
Similarity ranking and hybrid reranking of candidates.
"""
from .diversity import (
    FILLER_REASON,
    DiversitySampler,
    NoDiversity,
    RoundRobinDiversity,
    SeededDiversity,
    get_sampler,
)
from .reranker import HybridReranker, resolve_target_roles
from .rules import (
    DEFAULT_RULES,
    ROLE_RULES,
    AttributeRule,
    evaluate_rules,
    match_overlap,
    match_slug_prefix,
    rules_for,
    score_profile,
)
from .scorers import AttributeScorer, GraphScorer, Scorer, ScoringRequest, merge_tiers
from .similarity import SimilarityRanker, cosine_similarity

__all__ = [
    "AttributeRule",
    "AttributeScorer",
    "DEFAULT_RULES",
    "DiversitySampler",
    "FILLER_REASON",
    "GraphScorer",
    "HybridReranker",
    "NoDiversity",
    "ROLE_RULES",
    "RoundRobinDiversity",
    "Scorer",
    "ScoringRequest",
    "SeededDiversity",
    "SimilarityRanker",
    "cosine_similarity",
    "evaluate_rules",
    "get_sampler",
    "match_overlap",
    "match_slug_prefix",
    "merge_tiers",
    "resolve_target_roles",
    "rules_for",
    "score_profile",
]
