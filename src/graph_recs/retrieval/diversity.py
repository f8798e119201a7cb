"""
Deterministic filler selection for lists the scorers could not fill.
"""
import random
import zlib
from abc import ABC, abstractmethod
from typing import List, Sequence

from ..schema.profile import Profile

FILLER_REASON = "Suggested for you"


class DiversitySampler(ABC):
    """Picks score-zero filler profiles from the remaining pool."""

    @abstractmethod
    def sample(self, subject_id: str, pool: Sequence[Profile], slots: int) -> List[Profile]:
        pass


class NoDiversity(DiversitySampler):
    def sample(self, subject_id: str, pool: Sequence[Profile], slots: int) -> List[Profile]:
        return []


class RoundRobinDiversity(DiversitySampler):
    """
    Walks the ID-sorted pool starting at an offset derived from the subject,
    so each subject gets a stable, different starting point.
    """

    def sample(self, subject_id: str, pool: Sequence[Profile], slots: int) -> List[Profile]:
        if slots <= 0 or not pool:
            return []
        ordered = sorted(pool, key=lambda p: p.id)
        offset = zlib.crc32(subject_id.encode("utf-8")) % len(ordered)
        rotated = ordered[offset:] + ordered[:offset]
        return rotated[:slots]


class SeededDiversity(DiversitySampler):
    """Seeded sample per subject; the same seed and pool give the same picks."""

    def __init__(self, seed: int = 0):
        self.seed = seed

    def sample(self, subject_id: str, pool: Sequence[Profile], slots: int) -> List[Profile]:
        if slots <= 0 or not pool:
            return []
        ordered = sorted(pool, key=lambda p: p.id)
        rng = random.Random(f"{self.seed}:{subject_id}")
        return rng.sample(ordered, min(slots, len(ordered)))


def get_sampler(config) -> DiversitySampler:
    """Factory function to create the configured sampler."""
    if config.diversity_mode == "off":
        return NoDiversity()
    elif config.diversity_mode == "round_robin":
        return RoundRobinDiversity()
    elif config.diversity_mode == "seeded":
        return SeededDiversity(config.diversity_seed)
    else:
        raise ValueError(f"Unknown diversity mode: {config.diversity_mode}")
