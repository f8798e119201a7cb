"""
Collaborators supplying relationships, profiles, co-attendance and sessions.
"""
from pathlib import Path

from .base import Authenticator, CoAttendanceSource, Network, ProfileResolver, RelationshipSource
from .memory import InMemoryNetwork
from .sqlite import SQLiteNetwork


def get_network(config) -> Network:
    """Factory function to create the configured data backend."""
    if config.data_backend == "memory":
        if config.seed_path:
            return InMemoryNetwork.from_yaml(Path(config.seed_path))
        return InMemoryNetwork()
    elif config.data_backend == "sqlite":
        network = SQLiteNetwork(config.database_path)
        network.init_schema()
        return network
    else:
        raise ValueError(f"Unknown data backend: {config.data_backend}. Available: ['sqlite', 'memory']")


__all__ = [
    "Authenticator",
    "CoAttendanceSource",
    "InMemoryNetwork",
    "Network",
    "ProfileResolver",
    "RelationshipSource",
    "SQLiteNetwork",
    "get_network",
]
