"""
Embedding engine choosing between the primary and fallback strategies.
"""
import logging
from typing import Optional

import networkx as nx

from ..errors import EmbeddingBackendUnavailable
from .base import EmbeddingBackend, EmbeddingsMap

logger = logging.getLogger(__name__)


class EmbeddingEngine:
    """
    Computes node embeddings with an injected primary backend, substituting
    the fallback backend when the graph is too small for walks, when the
    primary could not be constructed, or when it fails on this graph.
    """

    def __init__(
        self,
        primary: Optional[EmbeddingBackend],
        fallback: Optional[EmbeddingBackend] = None,
        min_nodes_for_walks: int = 3,
        unavailable: Optional[EmbeddingBackendUnavailable] = None,
    ):
        """
        Initialize embedding engine.

        Args:
            primary: Preferred backend, or None if it could not be built
            fallback: Deterministic backend used in its place; None disables
                substitution
            min_nodes_for_walks: Graphs with fewer nodes use the fallback
            unavailable: Construction error of the primary, re-raised when
                no fallback is configured
        """
        if primary is None and fallback is None and unavailable is None:
            raise ValueError("EmbeddingEngine needs at least one backend")
        self.primary = primary
        self.fallback = fallback
        self.min_nodes_for_walks = min_nodes_for_walks
        self.unavailable = unavailable

    def select_backend(self, graph: nx.Graph) -> EmbeddingBackend:
        """Backend that will embed ``graph``."""
        if self.primary is None:
            if self.fallback is None:
                raise self.unavailable
            return self.fallback
        if self.fallback is None:
            return self.primary
        if graph.number_of_nodes() < self.min_nodes_for_walks or graph.number_of_edges() == 0:
            return self.fallback
        return self.primary

    def embed(self, graph: nx.Graph) -> EmbeddingsMap:
        """
        Embed every node of the graph.

        Args:
            graph: Weighted undirected graph

        Returns:
            Mapping node ID -> vector; empty for an empty graph
        """
        if graph.number_of_nodes() == 0:
            return {}

        backend = self.select_backend(graph)
        if backend is self.fallback or self.fallback is None:
            return backend.embed(graph)

        try:
            return backend.embed(graph)
        except EmbeddingBackendUnavailable as exc:
            logger.warning("%s; using %s", exc, self.fallback.name)
        except Exception:
            logger.warning(
                "Embedding backend %s failed; using %s",
                backend.name, self.fallback.name, exc_info=True,
            )
        return self.fallback.embed(graph)
