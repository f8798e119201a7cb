"""
Concurrent collection of the live data one recommendation request needs.
"""
import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, TypeVar

from ..errors import DataFetchError
from ..schema.profile import Profile
from ..schema.relationship import RelationshipRecord
from ..sources.base import CoAttendanceSource, ProfileResolver, RelationshipSource

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class RequestData:
    """Inputs gathered for one subject."""
    subject_id: str
    subject: Optional[Profile] = None
    relationships: List[RelationshipRecord] = field(default_factory=list)
    subject_events: List[str] = field(default_factory=list)


class RequestDataCollector:
    """Fetches relationships, the subject profile and subject events in parallel."""

    def __init__(
        self,
        relationships: RelationshipSource,
        profiles: ProfileResolver,
        co_attendance: Optional[CoAttendanceSource] = None,
    ):
        self.relationships = relationships
        self.profiles = profiles
        self.co_attendance = co_attendance

    async def _fetch(self, what: str, fn: Callable[..., T], *args, default: T) -> T:
        try:
            return await asyncio.to_thread(fn, *args)
        except DataFetchError as exc:
            logger.warning("Fetching %s failed, continuing without it: %s", what, exc)
            return default

    async def collect(self, subject_id: str) -> RequestData:
        """
        Gather request inputs; a failed fetch contributes an empty value.

        Args:
            subject_id: Subject of the recommendation request

        Returns:
            RequestData for the subject
        """
        start = time.time()
        fetches = [
            self._fetch("relationships", self.relationships.fetch_relationships, subject_id, default=[]),
            self._fetch("subject profile", self.profiles.resolve_profile, subject_id, default=None),
        ]
        if self.co_attendance is not None:
            fetches.append(
                self._fetch("subject events", self.co_attendance.fetch_subject_events, subject_id, default=[])
            )
        results = await asyncio.gather(*fetches)

        data = RequestData(
            subject_id=subject_id,
            relationships=list(results[0]),
            subject=results[1],
            subject_events=list(results[2]) if len(results) > 2 else [],
        )
        logger.info(
            "[COLLECT] subject=%s role=%s relationships=%d events=%d (%.2fs)",
            subject_id,
            data.subject.role.value if data.subject else None,
            len(data.relationships),
            len(data.subject_events),
            time.time() - start,
        )
        return data
