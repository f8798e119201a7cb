"""
Configuration management for the graph recommender.
"""
import os
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field


class Config(BaseModel):
    """Configuration class for the recommendation service."""

    # Relationship weights
    mentorship_weight: float = Field(3.0, ge=0)
    investment_weight: float = Field(2.0, ge=0)
    event_weight: float = Field(1.0, ge=0)

    # Embedding
    embedding_backend: Literal["random_walk", "neighbor_weight"] = "random_walk"
    embedding_fallback_enabled: bool = True
    min_nodes_for_walks: int = Field(3, ge=2)
    embedding_dimensions: int = Field(64, ge=1, le=512)
    walk_length: int = Field(40, ge=2, le=200)
    walks_per_node: int = Field(10, ge=1, le=100)
    walk_p: float = Field(1.0, gt=0)
    walk_q: float = Field(1.0, gt=0)
    skipgram_window: int = Field(5, ge=1, le=20)
    skipgram_epochs: int = Field(5, ge=1, le=50)
    embedding_workers: int = Field(1, ge=1)
    embedding_seed: int = 42

    # Ranking
    graph_candidate_multiplier: int = Field(3, ge=1)
    graph_candidate_floor: int = Field(12, ge=0)

    # Reranking
    default_top_k: int = Field(8, ge=0)
    max_top_k: int = Field(50, ge=1)
    candidate_pool_limit: int = Field(200, ge=1)

    # Diversity filler
    diversity_mode: Literal["off", "round_robin", "seeded"] = "off"
    diversity_slots: int = Field(1, ge=0)
    diversity_seed: int = 0

    # Request handling
    request_timeout_seconds: float = Field(10.0, gt=0)
    cache_stale_after_seconds: float = Field(300.0, ge=0)

    # Data
    data_backend: Literal["sqlite", "memory"] = "sqlite"
    database_path: str = "graph_recs.db"
    seed_path: Optional[str] = None

    # Logging
    log_level: str = "INFO"

    @classmethod
    def from_yaml(cls, path: Path) -> "Config":
        """Load configuration from YAML file."""
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    @classmethod
    def from_env(cls) -> "Config":
        """
        Load configuration from environment variables.

        Each field is read from the upper-cased field name, e.g. ``WALK_LENGTH``.
        Unset variables keep their defaults; pydantic coerces the strings.
        """
        values = {}
        for name in cls.model_fields:
            raw = os.getenv(name.upper())
            if raw is not None and raw != "":
                values[name] = raw
        return cls(**values)

    @classmethod
    def default(cls) -> "Config":
        """Create default configuration."""
        config_path = Path("config.yaml")
        if config_path.exists():
            return cls.from_yaml(config_path)
        return cls.from_env()

    def relationship_weights(self) -> dict:
        """Default edge weight per relationship kind name."""
        return {
            "mentorship_completed": self.mentorship_weight,
            "investment_interest": self.investment_weight,
            "event_participation": self.event_weight,
        }

    def graph_candidate_count(self, top_k: int) -> int:
        """Number of raw graph candidates to request for a final list of ``top_k``."""
        return max(top_k * self.graph_candidate_multiplier, self.graph_candidate_floor)
