"""
Example usage of the graph recommender.
"""
import asyncio

from graph_recs.config import Config, setup_logging
from graph_recs.pipeline import RecommendationPipeline
from graph_recs.schema import Role
from graph_recs.sources import InMemoryNetwork

# Sample platform data
platform = {
    "profiles": [
        {"id": "s-payflow", "display_name": "PayFlow", "role": "startup",
         "attributes": {"industry": "FinTech", "funding_stage": "Seed", "location": "Berlin"}},
        {"id": "s-medicore", "display_name": "MediCore", "role": "startup",
         "attributes": {"industry": "HealthTech", "funding_stage": "Series A", "location": "Paris"}},
        {"id": "m-anna", "display_name": "Anna", "role": "mentor",
         "attributes": {"industry": "FinTech", "expertise_tags": ["Payments"], "location": "Berlin"}},
        {"id": "m-ben", "display_name": "Ben", "role": "mentor",
         "attributes": {"industry": "HealthTech", "expertise_tags": ["Regulation"]}},
        {"id": "i-northstar", "display_name": "Northstar Capital", "role": "investor",
         "attributes": {"sectors": ["FinTech"], "investment_stages": ["Seed"],
                        "geographic_focus": ["Berlin"]}},
    ],
    "mentorship_requests": [
        {"startup_id": "s-medicore", "mentor_id": "m-ben", "status": "accepted"},
    ],
    "investment_requests": [
        {"startup_id": "s-payflow", "investor_id": "i-northstar", "status": "pending"},
    ],
    "event_registrations": [
        {"event_id": "demo-day", "user_id": "s-payflow"},
        {"event_id": "demo-day", "user_id": "m-ben"},
        {"event_id": "demo-day", "user_id": "s-medicore"},
    ],
}


async def main():
    """Run example."""
    # Initialize
    config = Config(embedding_backend="neighbor_weight", data_backend="memory")
    setup_logging(config.log_level)
    network = InMemoryNetwork.from_dict(platform)
    pipeline = RecommendationPipeline(config, network)

    requests = [
        ("s-payflow", None),
        ("s-payflow", {Role.MENTOR}),
        ("m-anna", None),
    ]

    for subject_id, roles in requests:
        print(f"\nRecommendations for {subject_id} (roles: {roles or 'default'})")
        print("-" * 50)

        candidates = await pipeline.recommend(subject_id, top_k=5, target_roles=roles)

        for candidate in candidates:
            score = "-" if candidate.score is None else f"{candidate.score:.2f}"
            print(f"{candidate.display_name:<20} {candidate.tier.value:<10} {score:>6}  "
                  f"{'; '.join(candidate.reasons)}")


if __name__ == "__main__":
    asyncio.run(main())
