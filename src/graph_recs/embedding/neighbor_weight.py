"""
Deterministic bag-of-neighbors embedding.
"""
from typing import List

import networkx as nx
import numpy as np

from .base import EmbeddingBackend, EmbeddingsMap


def node_order(graph: nx.Graph) -> List[str]:
    """Lexicographic node order shared by every vector of one run."""
    return sorted(graph.nodes)


class NeighborWeightBackend(EmbeddingBackend):
    """
    Training-free embedding derived from the weighted neighbor list.

    Nodes are ordered lexicographically; component ``j`` of a node's vector is
    the accumulated edge weight to the ``j``-th node, 0 for itself and for
    non-neighbors. The output is a pure function of the graph.
    """

    name = "neighbor_weight"

    def embed(self, graph: nx.Graph) -> EmbeddingsMap:
        order = node_order(graph)
        index = {node: i for i, node in enumerate(order)}
        embeddings: EmbeddingsMap = {}
        for node in order:
            vec = np.zeros(len(order), dtype=np.float64)
            for neighbor, data in graph[node].items():
                if neighbor != node:
                    vec[index[neighbor]] = data.get("weight", 1.0)
            embeddings[node] = vec
        return embeddings
