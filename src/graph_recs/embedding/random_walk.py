"""
Node2Vec-style random-walk embedding.

Biased second-order walks are generated by the ``node2vec`` package with
transition probabilities proportional to edge weight, then a gensim skip-gram
model is trained over the walk corpus.
"""
import logging
import time

import networkx as nx
import numpy as np

from ..errors import EmbeddingBackendUnavailable
from .base import EmbeddingBackend, EmbeddingsMap

logger = logging.getLogger(__name__)


class RandomWalkBackend(EmbeddingBackend):
    """Weighted node2vec embedding (walks + skip-gram)."""

    name = "random_walk"

    def __init__(self, config):
        try:
            from node2vec import Node2Vec
        except ImportError as exc:
            raise EmbeddingBackendUnavailable(self.name, str(exc), package="node2vec") from exc
        self._node2vec_cls = Node2Vec
        self.config = config

    def embed(self, graph: nx.Graph) -> EmbeddingsMap:
        if graph.number_of_nodes() == 0:
            return {}

        cfg = self.config
        # Zero-weight edges carry no transition mass; walks skip them.
        walk_graph = graph.copy()
        walk_graph.remove_edges_from(
            [(a, b) for a, b, w in graph.edges(data="weight", default=1.0) if w <= 0]
        )

        start = time.time()
        n2v = self._node2vec_cls(
            walk_graph,
            dimensions=cfg.embedding_dimensions,
            walk_length=cfg.walk_length,
            num_walks=cfg.walks_per_node,
            p=cfg.walk_p,
            q=cfg.walk_q,
            weight_key="weight",
            workers=cfg.embedding_workers,
            seed=cfg.embedding_seed,
            quiet=True,
        )
        model = n2v.fit(
            window=cfg.skipgram_window,
            min_count=1,
            batch_words=4,
            epochs=cfg.skipgram_epochs,
            seed=cfg.embedding_seed,
        )
        logger.info(
            "node2vec trained: nodes=%d walks=%d dims=%d elapsed=%.2fs",
            graph.number_of_nodes(),
            len(n2v.walks),
            cfg.embedding_dimensions,
            time.time() - start,
        )

        embeddings: EmbeddingsMap = {}
        for node in graph.nodes:
            key = str(node)
            if key in model.wv:
                embeddings[node] = np.asarray(model.wv[key], dtype=np.float64)
            else:
                embeddings[node] = np.zeros(cfg.embedding_dimensions, dtype=np.float64)
        return embeddings
