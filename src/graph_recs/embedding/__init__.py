"""
Node embedding backends and the engine that selects between them.
"""
import logging

from ..errors import EmbeddingBackendUnavailable
from .base import EmbeddingBackend, EmbeddingsMap
from .engine import EmbeddingEngine
from .neighbor_weight import NeighborWeightBackend, node_order

logger = logging.getLogger(__name__)


def get_backend(name: str, config) -> EmbeddingBackend:
    """Factory function to create backend instance."""
    if name == "random_walk":
        from .random_walk import RandomWalkBackend
        return RandomWalkBackend(config)
    elif name == "neighbor_weight":
        return NeighborWeightBackend()
    else:
        raise ValueError(f"Unknown embedding backend: {name}. Available: ['random_walk', 'neighbor_weight']")


def build_embedding_engine(config) -> EmbeddingEngine:
    """Build the engine for the configured backend, with the deterministic fallback."""
    fallback = NeighborWeightBackend() if config.embedding_fallback_enabled else None
    try:
        primary = get_backend(config.embedding_backend, config)
    except EmbeddingBackendUnavailable as exc:
        if fallback is None:
            logger.error("%s; fallback disabled, recommendations will fail", exc)
        else:
            logger.warning("%s; embeddings will use the neighbor-weight fallback", exc)
        return EmbeddingEngine(None, fallback, config.min_nodes_for_walks, unavailable=exc)
    if config.embedding_backend == "neighbor_weight":
        fallback = None
    return EmbeddingEngine(primary, fallback, config.min_nodes_for_walks)


__all__ = [
    "EmbeddingBackend",
    "EmbeddingEngine",
    "EmbeddingsMap",
    "NeighborWeightBackend",
    "build_embedding_engine",
    "get_backend",
    "node_order",
]
