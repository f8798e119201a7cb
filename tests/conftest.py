"""
Shared fixtures: a small platform with startups, mentors and investors.
"""
import pytest

from graph_recs.config import Config
from graph_recs.embedding import EmbeddingEngine, NeighborWeightBackend
from graph_recs.schema import Profile, Role
from graph_recs.sources import InMemoryNetwork


def make_profiles():
    return [
        Profile(id="s1", display_name="PayFlow", role=Role.STARTUP, attributes={
            "industry": "FinTech", "stage": "mvp", "funding_stage": "Seed",
            "location": "Berlin", "slug": "pay-flow",
        }),
        Profile(id="s2", display_name="MediCore", role=Role.STARTUP, attributes={
            "industry": "HealthTech", "stage": "growth", "funding_stage": "Series A",
            "location": "Paris", "slug": "medi-core",
        }),
        Profile(id="m1", display_name="Mia", role=Role.MENTOR, attributes={
            "industry": "SaaS", "expertise_tags": ["Growth"], "location": "London",
        }),
        Profile(id="m2", display_name="Max", role=Role.MENTOR, attributes={
            "industry": "FinTech", "expertise_tags": ["Payments"], "location": "Berlin",
        }),
        Profile(id="m3", display_name="Mo", role=Role.MENTOR, attributes={
            "industry": "EdTech", "location": "Tokyo",
        }),
        Profile(id="i1", display_name="Ivy Capital", role=Role.INVESTOR, attributes={
            "sectors": ["FinTech", "AI"], "investment_stages": ["Seed"],
            "geographic_focus": ["Europe"], "location": "Berlin",
        }),
        Profile(id="i2", display_name="Iron Ventures", role=Role.INVESTOR, attributes={
            "sectors": ["Climate"], "investment_stages": ["Series B"], "location": "New York",
        }),
        Profile(id="a1", display_name="Admin", role=Role.ADMIN),
    ]


@pytest.fixture
def config():
    return Config(
        embedding_backend="neighbor_weight",
        data_backend="memory",
        cache_stale_after_seconds=0,
    )


@pytest.fixture
def engine():
    return EmbeddingEngine(NeighborWeightBackend())


@pytest.fixture
def profiles():
    return make_profiles()


@pytest.fixture
def network(profiles):
    return InMemoryNetwork(
        profiles=profiles,
        mentorship_requests=[
            {"startup_id": "s1", "mentor_id": "m1", "status": "accepted"},
            {"startup_id": "s2", "mentor_id": "m3", "status": "rejected"},
        ],
        investment_requests=[
            {"startup_id": "s2", "investor_id": "i2", "status": "pending"},
        ],
        event_registrations=[
            {"event_id": "e1", "user_id": "s1"},
            {"event_id": "e1", "user_id": "m1"},
            {"event_id": "e2", "user_id": "s1"},
            {"event_id": "e2", "user_id": "m1"},
            {"event_id": "e2", "user_id": "s2", "status": "cancelled"},
        ],
        sessions={"tok-s1": "s1"},
    )
