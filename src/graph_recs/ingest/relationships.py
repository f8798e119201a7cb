"""
Conversion of platform request and registration rows into relationship records.
"""
from typing import Iterable, List, Mapping

from ..schema.relationship import RelationshipKind, RelationshipRecord

MENTORSHIP_STATUSES = ("accepted",)
INVESTMENT_STATUSES = ("pending", "accepted")
CONFIRMED = "confirmed"


def mentorship_records(rows: Iterable[Mapping]) -> List[RelationshipRecord]:
    """Accepted mentorship requests become strong startup-mentor ties."""
    records = []
    for row in rows:
        if row.get("status") not in MENTORSHIP_STATUSES:
            continue
        if row.get("startup_id") and row.get("mentor_id"):
            records.append(RelationshipRecord(
                source_id=row["startup_id"],
                target_id=row["mentor_id"],
                kind=RelationshipKind.MENTORSHIP_COMPLETED,
            ))
    return records


def investment_records(rows: Iterable[Mapping]) -> List[RelationshipRecord]:
    """Pending or accepted investment requests become medium startup-investor ties."""
    records = []
    for row in rows:
        if row.get("status") not in INVESTMENT_STATUSES:
            continue
        if row.get("startup_id") and row.get("investor_id"):
            records.append(RelationshipRecord(
                source_id=row["startup_id"],
                target_id=row["investor_id"],
                kind=RelationshipKind.INVESTMENT_INTEREST,
            ))
    return records


def co_attendance_records(subject_id: str, registrations: Iterable[Mapping]) -> List[RelationshipRecord]:
    """
    Weak ties from the subject to everyone confirmed for the same events.

    Args:
        subject_id: Current subject
        registrations: Registration rows (event_id, user_id, status) for the
            subject's events

    Returns:
        One record per co-registration, so repeated co-attendance accumulates
    """
    records = []
    for row in registrations:
        user_id = row.get("user_id")
        if row.get("status", CONFIRMED) != CONFIRMED:
            continue
        if user_id and user_id != subject_id:
            records.append(RelationshipRecord(
                source_id=subject_id,
                target_id=user_id,
                kind=RelationshipKind.EVENT_PARTICIPATION,
            ))
    return records
