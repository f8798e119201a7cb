"""
SQLite-backed platform data.

Tables mirror the platform schema: a base ``profiles`` table, one attribute
table per role, request tables for mentorship and investment, event
registrations and session tokens. List-valued columns hold JSON arrays.
"""
import json
import logging
import sqlite3
from contextlib import contextmanager
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..errors import DataFetchError
from ..ingest.relationships import (
    CONFIRMED,
    INVESTMENT_STATUSES,
    MENTORSHIP_STATUSES,
    co_attendance_records,
    investment_records,
    mentorship_records,
)
from ..schema.profile import Profile, Role, attribute_values
from ..schema.relationship import RelationshipRecord
from .base import Network

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS profiles (
    id TEXT PRIMARY KEY,
    full_name TEXT,
    avatar_url TEXT,
    role TEXT NOT NULL CHECK (role IN ('startup', 'mentor', 'investor', 'admin')),
    location TEXT
);
CREATE TABLE IF NOT EXISTS startup_profiles (
    user_id TEXT PRIMARY KEY REFERENCES profiles(id) ON DELETE CASCADE,
    company_name TEXT,
    industry TEXT,
    stage TEXT,
    funding_stage TEXT,
    location TEXT,
    slug TEXT
);
CREATE TABLE IF NOT EXISTS mentor_profiles (
    user_id TEXT PRIMARY KEY REFERENCES profiles(id) ON DELETE CASCADE,
    industry_focus TEXT,
    expertise_tags TEXT,
    location TEXT
);
CREATE TABLE IF NOT EXISTS investor_profiles (
    user_id TEXT PRIMARY KEY REFERENCES profiles(id) ON DELETE CASCADE,
    industry_focus TEXT,
    sectors TEXT,
    investment_stage TEXT,
    geographic_focus TEXT,
    location TEXT
);
CREATE TABLE IF NOT EXISTS mentorship_requests (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    startup_id TEXT,
    mentor_id TEXT,
    status TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS investment_requests (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    startup_id TEXT,
    investor_id TEXT,
    status TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS event_registrations (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    event_id TEXT NOT NULL,
    user_id TEXT NOT NULL,
    status TEXT NOT NULL DEFAULT 'confirmed'
);
CREATE TABLE IF NOT EXISTS sessions (
    token TEXT PRIMARY KEY,
    user_id TEXT NOT NULL
);
"""


def _dict_row(cursor, row):
    return {col[0]: row[i] for i, col in enumerate(cursor.description)}


def _placeholders(values: Sequence) -> str:
    return ",".join("?" * len(values))


def _json_list(text: Optional[str]) -> List[str]:
    """Decode a JSON array column; plain text is read as a comma-separated list."""
    if not text:
        return []
    try:
        value = json.loads(text)
    except ValueError:
        return [part.strip() for part in text.split(",") if part.strip()]
    if isinstance(value, list):
        return [str(v) for v in value]
    return [str(value)]


class SQLiteNetwork(Network):
    """Collaborator implementation over a SQLite database file."""

    def __init__(self, db_path: str):
        self.db_path = db_path

    @contextmanager
    def _connect(self, source: str):
        try:
            conn = sqlite3.connect(self.db_path)
        except sqlite3.Error as exc:
            raise DataFetchError(source, str(exc)) from exc
        conn.row_factory = _dict_row
        try:
            yield conn
        except sqlite3.Error as exc:
            raise DataFetchError(source, str(exc)) from exc
        finally:
            conn.close()

    def init_schema(self) -> None:
        """Create the tables if they do not exist."""
        with self._connect("schema") as conn:
            conn.executescript(SCHEMA)
            conn.commit()

    # Seeding helpers

    def add_profile(self, profile: Profile) -> None:
        """Insert or replace a profile and its role attribute row."""
        attrs = profile.attributes
        with self._connect("profiles") as conn:
            conn.execute(
                "INSERT OR REPLACE INTO profiles (id, full_name, avatar_url, role, location) "
                "VALUES (?, ?, ?, ?, ?)",
                (profile.id, profile.display_name, profile.avatar_ref,
                 profile.role.value, attrs.get("location")),
            )
            if profile.role == Role.STARTUP:
                conn.execute(
                    "INSERT OR REPLACE INTO startup_profiles "
                    "(user_id, company_name, industry, stage, funding_stage, location, slug) "
                    "VALUES (?, ?, ?, ?, ?, ?, ?)",
                    (profile.id, attrs.get("company_name"), attrs.get("industry"),
                     attrs.get("stage"), attrs.get("funding_stage"),
                     attrs.get("location"), attrs.get("slug")),
                )
            elif profile.role == Role.MENTOR:
                conn.execute(
                    "INSERT OR REPLACE INTO mentor_profiles "
                    "(user_id, industry_focus, expertise_tags, location) VALUES (?, ?, ?, ?)",
                    (profile.id, attrs.get("industry"),
                     json.dumps(attribute_values(attrs.get("expertise_tags"))), attrs.get("location")),
                )
            elif profile.role == Role.INVESTOR:
                conn.execute(
                    "INSERT OR REPLACE INTO investor_profiles "
                    "(user_id, industry_focus, sectors, investment_stage, geographic_focus, location) "
                    "VALUES (?, ?, ?, ?, ?, ?)",
                    (profile.id, attrs.get("industry"),
                     json.dumps(attribute_values(attrs.get("sectors"))),
                     json.dumps(attribute_values(attrs.get("investment_stages"))),
                     json.dumps(attribute_values(attrs.get("geographic_focus"))),
                     attrs.get("location")),
                )
            conn.commit()

    def add_mentorship_request(self, startup_id: str, mentor_id: str, status: str = "accepted") -> None:
        with self._connect("mentorship_requests") as conn:
            conn.execute(
                "INSERT INTO mentorship_requests (startup_id, mentor_id, status) VALUES (?, ?, ?)",
                (startup_id, mentor_id, status),
            )
            conn.commit()

    def add_investment_request(self, startup_id: str, investor_id: str, status: str = "pending") -> None:
        with self._connect("investment_requests") as conn:
            conn.execute(
                "INSERT INTO investment_requests (startup_id, investor_id, status) VALUES (?, ?, ?)",
                (startup_id, investor_id, status),
            )
            conn.commit()

    def add_event_registration(self, event_id: str, user_id: str, status: str = CONFIRMED) -> None:
        with self._connect("event_registrations") as conn:
            conn.execute(
                "INSERT INTO event_registrations (event_id, user_id, status) VALUES (?, ?, ?)",
                (event_id, user_id, status),
            )
            conn.commit()

    def add_session(self, token: str, user_id: str) -> None:
        with self._connect("sessions") as conn:
            conn.execute(
                "INSERT OR REPLACE INTO sessions (token, user_id) VALUES (?, ?)", (token, user_id)
            )
            conn.commit()

    # RelationshipSource

    def fetch_relationships(self, subject_id: str) -> List[RelationshipRecord]:
        with self._connect("relationships") as conn:
            mentorships = conn.execute(
                f"SELECT startup_id, mentor_id, status FROM mentorship_requests "
                f"WHERE status IN ({_placeholders(MENTORSHIP_STATUSES)})",
                MENTORSHIP_STATUSES,
            ).fetchall()
            investments = conn.execute(
                f"SELECT startup_id, investor_id, status FROM investment_requests "
                f"WHERE status IN ({_placeholders(INVESTMENT_STATUSES)})",
                INVESTMENT_STATUSES,
            ).fetchall()
            co_regs = conn.execute("""
                SELECT r.event_id, r.user_id, r.status
                FROM event_registrations r
                WHERE r.status = ?
                  AND r.event_id IN (
                      SELECT event_id FROM event_registrations
                      WHERE user_id = ? AND status = ?
                  )
            """, (CONFIRMED, subject_id, CONFIRMED)).fetchall()
        records = mentorship_records(mentorships)
        records += investment_records(investments)
        records += co_attendance_records(subject_id, co_regs)
        logger.debug(
            "Fetched relationships for %s: mentorship=%d investment=%d co-registrations=%d",
            subject_id, len(mentorships), len(investments), len(co_regs),
        )
        return records

    # ProfileResolver

    def _attach_attributes(self, conn, base_rows: List[dict]) -> List[Profile]:
        by_role: Dict[str, List[str]] = {}
        for row in base_rows:
            by_role.setdefault(row["role"], []).append(row["id"])

        attrs: Dict[str, Dict[str, Any]] = {}
        startup_ids = by_role.get(Role.STARTUP.value, [])
        if startup_ids:
            for r in conn.execute(f"""
                SELECT user_id, company_name, industry, stage, funding_stage, location, slug
                FROM startup_profiles WHERE user_id IN ({_placeholders(startup_ids)})
            """, startup_ids).fetchall():
                attrs[r.pop("user_id")] = r
        mentor_ids = by_role.get(Role.MENTOR.value, [])
        if mentor_ids:
            for r in conn.execute(f"""
                SELECT user_id, industry_focus, expertise_tags, location
                FROM mentor_profiles WHERE user_id IN ({_placeholders(mentor_ids)})
            """, mentor_ids).fetchall():
                attrs[r["user_id"]] = {
                    "industry": r["industry_focus"],
                    "expertise_tags": _json_list(r["expertise_tags"]),
                    "location": r["location"],
                }
        investor_ids = by_role.get(Role.INVESTOR.value, [])
        if investor_ids:
            for r in conn.execute(f"""
                SELECT user_id, industry_focus, sectors, investment_stage, geographic_focus, location
                FROM investor_profiles WHERE user_id IN ({_placeholders(investor_ids)})
            """, investor_ids).fetchall():
                attrs[r["user_id"]] = {
                    "industry": r["industry_focus"],
                    "sectors": _json_list(r["sectors"]),
                    "investment_stages": _json_list(r["investment_stage"]),
                    "geographic_focus": _json_list(r["geographic_focus"]),
                    "location": r["location"],
                }

        profiles = []
        for row in base_rows:
            attributes = {k: v for k, v in attrs.get(row["id"], {}).items() if v not in (None, [])}
            if row.get("location") and not attributes.get("location"):
                attributes["location"] = row["location"]
            profiles.append(Profile(
                id=row["id"],
                display_name=row["full_name"],
                avatar_ref=row["avatar_url"],
                role=Role(row["role"]),
                attributes=attributes,
            ))
        return profiles

    def resolve_profiles(self, ids: Sequence[str]) -> List[Profile]:
        ids = list(dict.fromkeys(ids))
        if not ids:
            return []
        with self._connect("profiles") as conn:
            rows = conn.execute(f"""
                SELECT id, full_name, avatar_url, role, location
                FROM profiles WHERE id IN ({_placeholders(ids)})
            """, ids).fetchall()
            profiles = self._attach_attributes(conn, rows)
        order = {pid: i for i, pid in enumerate(ids)}
        return sorted(profiles, key=lambda p: order[p.id])

    def fetch_candidate_pool(
        self, roles: Iterable[Role], exclude_ids: Iterable[str], limit: int
    ) -> List[Profile]:
        role_names = sorted({Role(r).value for r in roles})
        excluded = list(dict.fromkeys(exclude_ids))
        if not role_names or limit <= 0:
            return []
        query = (
            f"SELECT id, full_name, avatar_url, role, location FROM profiles "
            f"WHERE role IN ({_placeholders(role_names)})"
        )
        params: List[Any] = list(role_names)
        if excluded:
            query += f" AND id NOT IN ({_placeholders(excluded)})"
            params += excluded
        query += " ORDER BY id LIMIT ?"
        params.append(limit)
        with self._connect("candidate_pool") as conn:
            rows = conn.execute(query, params).fetchall()
            return self._attach_attributes(conn, rows)

    # CoAttendanceSource

    def fetch_subject_events(self, subject_id: str) -> List[str]:
        with self._connect("event_registrations") as conn:
            rows = conn.execute(
                "SELECT DISTINCT event_id FROM event_registrations "
                "WHERE user_id = ? AND status = ? ORDER BY event_id",
                (subject_id, CONFIRMED),
            ).fetchall()
        return [r["event_id"] for r in rows]

    def count_shared_events(
        self, event_ids: Sequence[str], candidate_ids: Sequence[str]
    ) -> Dict[str, int]:
        event_ids = list(event_ids)
        candidate_ids = list(candidate_ids)
        if not event_ids or not candidate_ids:
            return {}
        with self._connect("co_attendance") as conn:
            rows = conn.execute(f"""
                SELECT user_id, COUNT(*) AS shared
                FROM event_registrations
                WHERE status = ?
                  AND user_id IN ({_placeholders(candidate_ids)})
                  AND event_id IN ({_placeholders(event_ids)})
                GROUP BY user_id
            """, [CONFIRMED, *candidate_ids, *event_ids]).fetchall()
        return {r["user_id"]: r["shared"] for r in rows}

    # Authenticator

    def authenticate(self, token: Optional[str]) -> Optional[str]:
        if not token:
            return None
        with self._connect("sessions") as conn:
            row = conn.execute("SELECT user_id FROM sessions WHERE token = ?", (token,)).fetchone()
        return row["user_id"] if row else None
