import pytest
from pydantic import ValidationError

from graph_recs.config import Config
from graph_recs.schema import Role, default_target_roles, parse_roles


def test_defaults():
    config = Config()
    assert config.embedding_backend == "random_walk"
    assert config.embedding_dimensions == 64
    assert config.default_top_k == 8
    assert config.diversity_mode == "off"
    assert config.relationship_weights() == {
        "mentorship_completed": 3.0,
        "investment_interest": 2.0,
        "event_participation": 1.0,
    }


def test_graph_candidate_count():
    config = Config()
    assert config.graph_candidate_count(2) == 12
    assert config.graph_candidate_count(8) == 24


def test_from_yaml(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("walk_length: 20\ndiversity_mode: seeded\nmentorship_weight: 4.5\n")
    config = Config.from_yaml(path)
    assert config.walk_length == 20
    assert config.diversity_mode == "seeded"
    assert config.relationship_weights()["mentorship_completed"] == 4.5


def test_from_env(monkeypatch):
    monkeypatch.setenv("WALK_LENGTH", "25")
    monkeypatch.setenv("EMBEDDING_FALLBACK_ENABLED", "false")
    monkeypatch.setenv("DATA_BACKEND", "memory")
    config = Config.from_env()
    assert config.walk_length == 25
    assert config.embedding_fallback_enabled is False
    assert config.data_backend == "memory"


def test_default_prefers_config_file(tmp_path, monkeypatch):
    (tmp_path / "config.yaml").write_text("default_top_k: 3\n")
    monkeypatch.chdir(tmp_path)
    assert Config.default().default_top_k == 3


@pytest.mark.parametrize("field,value", [
    ("walk_length", 1),
    ("embedding_dimensions", 0),
    ("walk_p", 0),
    ("embedding_backend", "spectral"),
    ("mentorship_weight", -1.0),
])
def test_invalid_values_rejected(field, value):
    with pytest.raises(ValidationError):
        Config(**{field: value})


def test_parse_roles():
    assert parse_roles("Mentor, investor ,bogus,,") == {Role.MENTOR, Role.INVESTOR}
    assert parse_roles("") == frozenset()
    assert parse_roles(None) == frozenset()


def test_default_target_roles():
    assert default_target_roles(Role.STARTUP) == {Role.MENTOR, Role.INVESTOR}
    assert default_target_roles(Role.MENTOR) == {Role.STARTUP}
    assert default_target_roles(None) == {Role.STARTUP}
