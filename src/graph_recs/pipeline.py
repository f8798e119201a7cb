"""
Recommendation pipeline: collect, build graph, embed, rank, rerank.
"""
import asyncio
import logging
import time
from typing import Iterable, List, Optional, Tuple

from .config import Config
from .embedding import EmbeddingEngine, build_embedding_engine
from .errors import EmbeddingBackendUnavailable
from .graph import GraphBuilder
from .ingest import RequestData, RequestDataCollector
from .retrieval import HybridReranker, SimilarityRanker, get_sampler
from .schema.candidate import Candidate
from .schema.profile import Role
from .sources.base import Network

logger = logging.getLogger(__name__)


def clamp_top_k(top_k: Optional[int], config: Config) -> int:
    """Default a missing ``top_k`` and clamp it to ``[0, max_top_k]``."""
    if top_k is None:
        top_k = config.default_top_k
    return max(0, min(int(top_k), config.max_top_k))


class RecommendationPipeline:
    """
    Stateless per-request recommendation pipeline.

    Nothing is retained between calls; graph, embeddings and candidates
    are built from the collaborators' live data for every request.
    """

    def __init__(
        self,
        config: Config,
        network: Network,
        engine: Optional[EmbeddingEngine] = None,
    ):
        """
        Initialize pipeline.

        Args:
            config: Configuration object
            network: Data backend implementing all collaborator interfaces
            engine: Embedding engine; built from config if omitted
        """
        self.config = config
        self.network = network
        self.engine = engine or build_embedding_engine(config)
        self.ranker = SimilarityRanker()
        self.collector = RequestDataCollector(network, network, network)
        self.reranker = HybridReranker(
            network, network, config, diversity=get_sampler(config)
        )

    def rank_graph(self, data: RequestData, top_k: int) -> List[Tuple[str, float]]:
        """
        Graph tier: build graph, embed, rank against the subject.

        Synchronous and CPU-bound; run it off the event loop.
        """
        start = time.time()
        graph = GraphBuilder(self.config).build(data.relationships)
        embeddings = self.engine.embed(graph)
        ranked = self.ranker.rank_scored(
            data.subject_id, embeddings, self.config.graph_candidate_count(top_k)
        )
        logger.info(
            "[GRAPH] subject=%s nodes=%d edges=%d ranked=%d (%.2fs)",
            data.subject_id,
            graph.number_of_nodes(),
            graph.number_of_edges(),
            len(ranked),
            time.time() - start,
        )
        return ranked

    async def _graph_tier(self, data: RequestData, top_k: int) -> List[Tuple[str, float]]:
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(self.rank_graph, data, top_k),
                timeout=self.config.request_timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "[GRAPH] subject=%s timed out after %.1fs; using attribute tier only",
                data.subject_id, self.config.request_timeout_seconds,
            )
            return []
        except EmbeddingBackendUnavailable:
            raise
        except Exception:
            logger.warning(
                "[GRAPH] subject=%s graph tier failed; using attribute tier only",
                data.subject_id, exc_info=True,
            )
            return []

    async def recommend(
        self,
        subject_id: str,
        top_k: Optional[int] = None,
        target_roles: Optional[Iterable[Role]] = None,
    ) -> List[Candidate]:
        """
        Recommend connections for a subject.

        Args:
            subject_id: Subject to recommend for
            top_k: Maximum number of candidates; clamped to the configured range
            target_roles: Roles to recommend; derived from the subject when empty

        Returns:
            Ordered candidate list, at most ``top_k`` long
        """
        top_k = clamp_top_k(top_k, self.config)
        if top_k == 0:
            return []

        start = time.time()
        data = await self.collector.collect(subject_id)
        ranked = await self._graph_tier(data, top_k)
        candidates = await asyncio.to_thread(
            self.reranker.rerank,
            subject_id,
            data.subject,
            ranked,
            top_k,
            target_roles,
            data.subject_events,
        )
        logger.info(
            "[DONE] subject=%s top_k=%d results=%d (%.2fs total)",
            subject_id, top_k, len(candidates), time.time() - start,
        )
        return candidates
