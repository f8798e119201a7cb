import pytest

from graph_recs.config import Config
from graph_recs.errors import DataFetchError
from graph_recs.ingest import co_attendance_records, investment_records, mentorship_records
from graph_recs.schema import Profile, RelationshipKind, Role
from graph_recs.sources import InMemoryNetwork, SQLiteNetwork, get_network

from conftest import make_profiles


@pytest.fixture
def sqlite_network(tmp_path):
    network = SQLiteNetwork(str(tmp_path / "recs.db"))
    network.init_schema()
    for profile in make_profiles():
        network.add_profile(profile)
    network.add_mentorship_request("s1", "m1", "accepted")
    network.add_mentorship_request("s2", "m3", "pending")
    network.add_investment_request("s2", "i2", "pending")
    network.add_investment_request("s1", "i2", "rejected")
    network.add_event_registration("e1", "s1")
    network.add_event_registration("e1", "m1")
    network.add_event_registration("e2", "s1")
    network.add_event_registration("e2", "m1")
    network.add_event_registration("e2", "s2", status="cancelled")
    network.add_event_registration("e3", "m2")
    network.add_session("tok-s1", "s1")
    return network


def summary(records):
    return sorted((r.source_id, r.target_id, r.kind.value) for r in records)


def test_mentorship_records_keep_accepted_only():
    rows = [
        {"startup_id": "s1", "mentor_id": "m1", "status": "accepted"},
        {"startup_id": "s1", "mentor_id": "m2", "status": "pending"},
        {"startup_id": "s1", "mentor_id": None, "status": "accepted"},
    ]
    assert summary(mentorship_records(rows)) == [("s1", "m1", "mentorship_completed")]


def test_investment_records_keep_pending_and_accepted():
    rows = [
        {"startup_id": "s1", "investor_id": "i1", "status": "pending"},
        {"startup_id": "s1", "investor_id": "i2", "status": "accepted"},
        {"startup_id": "s1", "investor_id": "i3", "status": "rejected"},
    ]
    assert [r.target_id for r in investment_records(rows)] == ["i1", "i2"]


def test_co_attendance_records_one_per_confirmed_co_registrant():
    rows = [
        {"event_id": "e1", "user_id": "s1", "status": "confirmed"},
        {"event_id": "e1", "user_id": "m1", "status": "confirmed"},
        {"event_id": "e2", "user_id": "m1", "status": "confirmed"},
        {"event_id": "e2", "user_id": "m2", "status": "cancelled"},
    ]
    records = co_attendance_records("s1", rows)
    assert summary(records) == [("s1", "m1", "event_participation")] * 2
    assert all(r.weight is None for r in records)


@pytest.mark.parametrize("backend", ["memory", "sqlite"])
def test_fetch_relationships(backend, network, sqlite_network):
    source = network if backend == "memory" else sqlite_network
    records = source.fetch_relationships("s1")
    assert summary(records) == [
        ("s1", "m1", "event_participation"),
        ("s1", "m1", "event_participation"),
        ("s1", "m1", "mentorship_completed"),
        ("s2", "i2", "investment_interest"),
    ]


def test_sqlite_profiles_round_trip(sqlite_network):
    m2, i1, s1 = sqlite_network.resolve_profiles(["m2", "i1", "s1", "ghost"])

    assert (m2.id, i1.id, s1.id) == ("m2", "i1", "s1")
    assert m2.role == Role.MENTOR
    assert m2.display_name == "Max"
    assert m2.attributes == {"industry": "FinTech", "expertise_tags": ["Payments"], "location": "Berlin"}
    assert i1.attributes["sectors"] == ["FinTech", "AI"]
    assert i1.attributes["investment_stages"] == ["Seed"]
    assert i1.attributes["geographic_focus"] == ["Europe"]
    assert s1.attributes["funding_stage"] == "Seed"
    assert s1.attributes["slug"] == "pay-flow"


def test_sqlite_resolve_single_profile(sqlite_network):
    assert sqlite_network.resolve_profile("a1").role == Role.ADMIN
    assert sqlite_network.resolve_profile("ghost") is None
    assert sqlite_network.resolve_profiles([]) == []


@pytest.mark.parametrize("backend", ["memory", "sqlite"])
def test_candidate_pool(backend, network, sqlite_network):
    source = network if backend == "memory" else sqlite_network
    pool = source.fetch_candidate_pool({Role.MENTOR, Role.INVESTOR}, ["s1", "m1"], 3)
    assert [p.id for p in pool] == ["i1", "i2", "m2"]
    assert source.fetch_candidate_pool({Role.STARTUP}, [], 10)[0].id == "s1"
    assert source.fetch_candidate_pool(set(), [], 10) == []


@pytest.mark.parametrize("backend", ["memory", "sqlite"])
def test_co_attendance(backend, network, sqlite_network):
    source = network if backend == "memory" else sqlite_network
    events = source.fetch_subject_events("s1")
    assert events == ["e1", "e2"]
    assert source.count_shared_events(events, ["m1", "s2", "m2"]) == {"m1": 2}
    assert source.count_shared_events([], ["m1"]) == {}


@pytest.mark.parametrize("backend", ["memory", "sqlite"])
def test_authenticate(backend, network, sqlite_network):
    source = network if backend == "memory" else sqlite_network
    assert source.authenticate("tok-s1") == "s1"
    assert source.authenticate("nope") is None
    assert source.authenticate(None) is None


def test_sqlite_errors_become_data_fetch_errors(tmp_path):
    network = SQLiteNetwork(str(tmp_path / "empty.db"))
    with pytest.raises(DataFetchError) as info:
        network.fetch_relationships("s1")
    assert info.value.source == "relationships"


def test_memory_network_from_yaml(tmp_path):
    seed = tmp_path / "seed.yaml"
    seed.write_text(
        "profiles:\n"
        "  - {id: s1, role: startup, attributes: {industry: FinTech}}\n"
        "  - {id: m1, role: mentor, display_name: Mia}\n"
        "mentorship_requests:\n"
        "  - {startup_id: s1, mentor_id: m1, status: accepted}\n"
        "sessions:\n"
        "  tok: s1\n"
    )
    network = get_network(Config(data_backend="memory", seed_path=str(seed)))

    assert isinstance(network, InMemoryNetwork)
    assert network.resolve_profile("m1").display_name == "Mia"
    assert network.authenticate("tok") == "s1"
    assert network.fetch_relationships("s1")[0].kind == RelationshipKind.MENTORSHIP_COMPLETED


def test_get_network_sqlite_initializes_schema(tmp_path):
    network = get_network(Config(data_backend="sqlite", database_path=str(tmp_path / "x.db")))
    assert isinstance(network, SQLiteNetwork)
    assert network.fetch_relationships("anyone") == []


def test_sqlite_scalar_list_attributes_round_trip(tmp_path):
    """Scalar values for list columns are stored as one-element lists."""
    network = SQLiteNetwork(str(tmp_path / "recs.db"))
    network.init_schema()
    network.add_profile(Profile(id="m1", role=Role.MENTOR, attributes={"expertise_tags": "Payments"}))
    network.add_profile(Profile(id="i1", role=Role.INVESTOR, attributes={
        "sectors": "FinTech", "investment_stages": ("Seed", " "), "geographic_focus": None,
    }))

    assert network.resolve_profile("m1").attributes["expertise_tags"] == ["Payments"]
    investor = network.resolve_profile("i1")
    assert investor.attributes["sectors"] == ["FinTech"]
    assert investor.attributes["investment_stages"] == ["Seed"]
    assert "geographic_focus" not in investor.attributes
