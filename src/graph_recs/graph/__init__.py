"""
Relationship graph construction using NetworkX.
"""
from .graph_builder import DEFAULT_WEIGHTS, GraphBuilder, build_graph, get_edge_weight, get_stats

__all__ = ["DEFAULT_WEIGHTS", "GraphBuilder", "build_graph", "get_edge_weight", "get_stats"]
