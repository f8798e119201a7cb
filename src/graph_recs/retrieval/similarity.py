"""
Cosine-similarity ranking over node embeddings.
"""
import math
from typing import List, Mapping, Optional, Sequence, Tuple

import numpy as np


def _cosine(a: Sequence[float], b: Sequence[float]) -> Optional[float]:
    n = min(len(a), len(b))
    va = np.asarray(a[:n], dtype=np.float64)
    vb = np.asarray(b[:n], dtype=np.float64)
    na = float(np.dot(va, va))
    nb = float(np.dot(vb, vb))
    if na == 0.0 or nb == 0.0:
        return None
    return float(np.dot(va, vb)) / (math.sqrt(na) * math.sqrt(nb))


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity over the common prefix of two vectors.

    Returns 0.0 when either vector has zero norm on that prefix.
    """
    score = _cosine(a, b)
    return 0.0 if score is None else score


class SimilarityRanker:
    """Ranks nodes against a subject node by embedding similarity."""

    def rank_scored(
        self,
        subject_id: str,
        embeddings: Mapping[str, Sequence[float]],
        top_k: int,
    ) -> List[Tuple[str, float]]:
        """
        Rank all other nodes by cosine similarity to the subject.

        Args:
            subject_id: Node to rank against
            embeddings: Mapping node ID -> vector
            top_k: Maximum number of results

        Returns:
            List of (node ID, score), score descending then ID ascending.
            Empty when the subject has no embedding.
        """
        source = embeddings.get(subject_id)
        if source is None or top_k <= 0:
            return []

        scored = []
        for node_id, vec in embeddings.items():
            if node_id == subject_id:
                continue
            score = _cosine(source, vec)
            # zero-norm vectors have no direction to compare
            if score is None or not math.isfinite(score):
                continue
            scored.append((node_id, score))

        scored.sort(key=lambda item: (-item[1], item[0]))
        return scored[:top_k]

    def rank(
        self,
        subject_id: str,
        embeddings: Mapping[str, Sequence[float]],
        top_k: int,
    ) -> List[str]:
        """Node IDs most similar to the subject, at most ``top_k``."""
        return [node_id for node_id, _ in self.rank_scored(subject_id, embeddings, top_k)]
