from abc import ABC, abstractmethod
from typing import Dict

import networkx as nx
import numpy as np

EmbeddingsMap = Dict[str, np.ndarray]


class EmbeddingBackend(ABC):
    """Abstract base class for node embedding strategies."""

    name: str = "base"

    @abstractmethod
    def embed(self, graph: nx.Graph) -> EmbeddingsMap:
        """Return one vector per node. An empty graph yields an empty map."""
        pass
