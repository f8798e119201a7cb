"""
Weighted undirected relationship graph built with NetworkX.
"""
import logging
import math
from typing import Dict, FrozenSet, Iterable, List, Optional

import networkx as nx

from ..schema.relationship import RelationshipKind, RelationshipRecord

logger = logging.getLogger(__name__)

DEFAULT_WEIGHTS: Dict[RelationshipKind, float] = {
    RelationshipKind.MENTORSHIP_COMPLETED: 3.0,
    RelationshipKind.INVESTMENT_INTEREST: 2.0,
    RelationshipKind.EVENT_PARTICIPATION: 1.0,
}


class GraphBuilder:
    """
    Builds a simple undirected graph from relationship records.

    Records between the same unordered pair accumulate into one edge whose
    ``weight`` is the sum of the contributions. Self-referencing records are
    dropped. Contributions are summed with ``math.fsum`` once all records are
    in, so the resulting weights do not depend on record order.
    """

    def __init__(self, config=None):
        """
        Initialize graph builder.

        Args:
            config: Optional configuration object overriding the default
                weight per relationship kind
        """
        self.weights: Dict[RelationshipKind, float] = dict(DEFAULT_WEIGHTS)
        if config is not None:
            for kind, weight in config.relationship_weights().items():
                self.weights[RelationshipKind(kind)] = weight
        self._contributions: Dict[FrozenSet[str], List[float]] = {}

    def effective_weight(self, record: RelationshipRecord) -> float:
        """Explicit record weight, or the default for its kind."""
        if record.weight is not None:
            return float(record.weight)
        return self.weights[record.kind]

    def add_relationship(self, record: RelationshipRecord) -> None:
        """
        Add one record's contribution to its unordered pair.

        Args:
            record: Relationship record
        """
        if record.source_id == record.target_id:
            logger.debug("Dropping self-loop record for %s", record.source_id)
            return
        pair = frozenset((record.source_id, record.target_id))
        self._contributions.setdefault(pair, []).append(self.effective_weight(record))

    def build(self, records: Optional[Iterable[RelationshipRecord]] = None) -> nx.Graph:
        """
        Build the weighted graph.

        Args:
            records: Records to add before building; previously added
                records are included as well

        Returns:
            Undirected NetworkX graph with a ``weight`` attribute per edge
        """
        for record in records or ():
            self.add_relationship(record)

        graph = nx.Graph()
        for pair, weights in self._contributions.items():
            a, b = sorted(pair)
            graph.add_edge(a, b, weight=math.fsum(weights))

        logger.debug(
            "Built graph: %d nodes, %d edges", graph.number_of_nodes(), graph.number_of_edges()
        )
        return graph

    def reset(self) -> None:
        """Discard all accumulated contributions."""
        self._contributions.clear()


def build_graph(records: Iterable[RelationshipRecord], config=None) -> nx.Graph:
    """Build a graph from records with a fresh builder."""
    return GraphBuilder(config).build(records)


def get_edge_weight(graph: nx.Graph, a: str, b: str) -> float:
    """
    Get weight of the edge between two nodes.

    Returns:
        Edge weight, or 0.0 if no edge exists
    """
    if graph.has_edge(a, b):
        return graph[a][b].get("weight", 0.0)
    return 0.0


def get_stats(graph: nx.Graph) -> Dict[str, float]:
    """Node count, edge count and total weight of a graph."""
    return {
        "nodes": graph.number_of_nodes(),
        "edges": graph.number_of_edges(),
        "total_weight": math.fsum(w for _, _, w in graph.edges(data="weight", default=0.0)),
    }
