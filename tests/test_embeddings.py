import networkx as nx
import numpy as np
import pytest

from graph_recs.config import Config
from graph_recs.embedding import (
    EmbeddingBackend,
    EmbeddingEngine,
    NeighborWeightBackend,
    build_embedding_engine,
    get_backend,
    node_order,
)
from graph_recs.errors import EmbeddingBackendUnavailable
from graph_recs.graph import build_graph
from graph_recs.retrieval import cosine_similarity
from graph_recs.schema import RelationshipKind, RelationshipRecord


def triangle():
    """A-B (3), A-C (1), B-C (1), inserted out of lexicographic order."""
    return build_graph([
        RelationshipRecord(source_id="C", target_id="B", kind=RelationshipKind.EVENT_PARTICIPATION),
        RelationshipRecord(source_id="B", target_id="A", kind=RelationshipKind.EVENT_PARTICIPATION, weight=3.0),
        RelationshipRecord(source_id="A", target_id="C", kind=RelationshipKind.EVENT_PARTICIPATION),
    ])


class FailingBackend(EmbeddingBackend):
    name = "failing"

    def __init__(self, exc):
        self.exc = exc
        self.calls = 0

    def embed(self, graph):
        self.calls += 1
        raise self.exc


class RecordingBackend(NeighborWeightBackend):
    name = "recording"

    def __init__(self):
        self.calls = 0

    def embed(self, graph):
        self.calls += 1
        return super().embed(graph)


def test_neighbor_weight_vectors():
    embeddings = NeighborWeightBackend().embed(triangle())
    assert node_order(triangle()) == ["A", "B", "C"]
    np.testing.assert_array_equal(embeddings["A"], [0.0, 3.0, 1.0])
    np.testing.assert_array_equal(embeddings["B"], [3.0, 0.0, 1.0])
    np.testing.assert_array_equal(embeddings["C"], [1.0, 1.0, 0.0])


def test_neighbor_weight_cosine_from_exact_vectors():
    embeddings = NeighborWeightBackend().embed(triangle())
    # (0*3 + 3*0 + 1*1) / (sqrt(10) * sqrt(10))
    assert cosine_similarity(embeddings["A"], embeddings["B"]) == pytest.approx(0.1)


def test_neighbor_weight_is_deterministic():
    backend = NeighborWeightBackend()
    first = backend.embed(triangle())
    second = backend.embed(triangle())
    assert list(first) == list(second)
    for node in first:
        assert first[node].tobytes() == second[node].tobytes()


def test_neighbor_weight_shared_dimension():
    embeddings = NeighborWeightBackend().embed(triangle())
    assert {len(v) for v in embeddings.values()} == {3}


def test_neighbor_weight_empty_graph():
    assert NeighborWeightBackend().embed(nx.Graph()) == {}


def test_engine_empty_graph_returns_empty_map():
    engine = EmbeddingEngine(FailingBackend(RuntimeError("unused")), NeighborWeightBackend())
    assert engine.embed(nx.Graph()) == {}


def test_engine_uses_fallback_for_small_graph():
    primary = RecordingBackend()
    fallback = NeighborWeightBackend()
    engine = EmbeddingEngine(primary, fallback, min_nodes_for_walks=3)
    graph = nx.Graph()
    graph.add_edge("a", "b", weight=1.0)

    assert engine.select_backend(graph) is fallback
    engine.embed(graph)
    assert primary.calls == 0


def test_engine_uses_primary_for_large_graph():
    primary = RecordingBackend()
    engine = EmbeddingEngine(primary, NeighborWeightBackend(), min_nodes_for_walks=3)
    engine.embed(triangle())
    assert primary.calls == 1


def test_engine_falls_back_when_primary_fails():
    primary = FailingBackend(RuntimeError("walks exploded"))
    engine = EmbeddingEngine(primary, NeighborWeightBackend())
    embeddings = engine.embed(triangle())
    assert primary.calls == 1
    np.testing.assert_array_equal(embeddings["A"], [0.0, 3.0, 1.0])


def test_engine_falls_back_when_primary_unavailable_at_runtime():
    primary = FailingBackend(EmbeddingBackendUnavailable("failing", "missing"))
    engine = EmbeddingEngine(primary, NeighborWeightBackend())
    assert set(engine.embed(triangle())) == {"A", "B", "C"}


def test_engine_without_fallback_propagates_failure():
    engine = EmbeddingEngine(FailingBackend(RuntimeError("boom")))
    with pytest.raises(RuntimeError, match="boom"):
        engine.embed(triangle())


def test_engine_unavailable_without_fallback_raises():
    exc = EmbeddingBackendUnavailable("random_walk", "No module named 'node2vec'", package="node2vec")
    engine = EmbeddingEngine(None, None, unavailable=exc)
    with pytest.raises(EmbeddingBackendUnavailable) as info:
        engine.embed(triangle())
    assert info.value.hint == "Install dependencies: pip install node2vec"


def test_engine_needs_a_backend():
    with pytest.raises(ValueError):
        EmbeddingEngine(None)


def test_get_backend_unknown():
    with pytest.raises(ValueError, match="Unknown embedding backend"):
        get_backend("spectral", Config())


def test_build_engine_neighbor_weight_has_no_fallback():
    engine = build_embedding_engine(Config(embedding_backend="neighbor_weight"))
    assert isinstance(engine.primary, NeighborWeightBackend)
    assert engine.fallback is None


def test_random_walk_backend_embeds_every_node():
    pytest.importorskip("node2vec")
    config = Config(
        embedding_dimensions=8, walk_length=6, walks_per_node=4,
        skipgram_epochs=1, embedding_workers=1,
    )
    backend = get_backend("random_walk", config)
    graph = triangle()
    graph.add_edge("C", "D", weight=2.0)

    embeddings = backend.embed(graph)

    assert set(embeddings) == {"A", "B", "C", "D"}
    for vec in embeddings.values():
        assert vec.shape == (8,)
        assert np.all(np.isfinite(vec))


def test_build_engine_random_walk_keeps_fallback():
    pytest.importorskip("node2vec")
    engine = build_embedding_engine(Config())
    assert engine.primary.name == "random_walk"
    assert isinstance(engine.fallback, NeighborWeightBackend)
