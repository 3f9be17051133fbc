"""Persistent storage of live-streaming sessions backed by SQLite."""

from __future__ import annotations

import os
import sqlite3
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Union

_SCHEMA = """
CREATE TABLE IF NOT EXISTS sessions (
    session_id        TEXT PRIMARY KEY,
    room_id           TEXT NOT NULL,
    owner_user_id     TEXT NOT NULL,
    start_time        TEXT,
    end_time          TEXT,
    status            TEXT NOT NULL,
    total_events      INTEGER NOT NULL DEFAULT 0,
    total_danmaku     INTEGER NOT NULL DEFAULT 0,
    total_gifts_value INTEGER NOT NULL DEFAULT 0,
    total_likes       INTEGER NOT NULL DEFAULT 0,
    total_watched     INTEGER NOT NULL DEFAULT 0,
    created_at        TEXT NOT NULL,
    session_title     TEXT,
    anchor_name       TEXT,
    room_title        TEXT
)
"""

_COLUMNS = (
    "session_id, room_id, owner_user_id, start_time, end_time, status, "
    "total_events, total_danmaku, total_gifts_value, total_likes, total_watched, "
    "created_at, session_title, anchor_name, room_title"
)


class NoRowsError(LookupError):
    """Raised when a query that must yield exactly one row finds none."""


@dataclass
class SessionRecord:
    """A row of the sessions table."""

    session_id: str
    room_id: str
    owner_user_id: str
    start_time: Optional[datetime]
    end_time: Optional[datetime]
    status: str
    total_events: int = 0
    total_danmaku: int = 0
    total_gifts_value: int = 0
    total_likes: int = 0
    total_watched: int = 0
    created_at: Optional[datetime] = None
    session_title: Optional[str] = None
    anchor_name: Optional[str] = None
    room_title: Optional[str] = None


@dataclass
class CreateSessionParams:
    session_id: str
    room_id: str
    owner_user_id: str
    start_time: Optional[datetime]
    status: str
    session_title: Optional[str] = None
    anchor_name: Optional[str] = None
    room_title: Optional[str] = None


@dataclass
class EndSessionParams:
    session_id: str
    end_time: Optional[datetime]


@dataclass
class UpdateSessionAggregatesParams:
    session_id: str
    total_events: int = 0
    total_danmaku: int = 0
    total_gifts_value: int = 0
    total_likes: int = 0
    total_watched: int = 0


@dataclass
class ListSessionsParams:
    limit: int
    offset: int
    status: str = ""
    room_id: str = ""
    owner_user_id: str = ""


@dataclass
class GetSessionsCountParams:
    status: str = ""
    room_id: str = ""
    owner_user_id: str = ""


def _to_text(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def _from_text(value: Optional[str]) -> Optional[datetime]:
    return None if value is None else datetime.fromisoformat(value)


def _record(row: sqlite3.Row) -> SessionRecord:
    return SessionRecord(
        session_id=row["session_id"],
        room_id=row["room_id"],
        owner_user_id=row["owner_user_id"],
        start_time=_from_text(row["start_time"]),
        end_time=_from_text(row["end_time"]),
        status=row["status"],
        total_events=row["total_events"],
        total_danmaku=row["total_danmaku"],
        total_gifts_value=row["total_gifts_value"],
        total_likes=row["total_likes"],
        total_watched=row["total_watched"],
        created_at=_from_text(row["created_at"]),
        session_title=row["session_title"],
        anchor_name=row["anchor_name"],
        room_title=row["room_title"],
    )


class SessionRepository:
    """Data access for sessions, stored in a SQLite database."""

    def __init__(self, path: Union[str, os.PathLike] = ":memory:") -> None:
        self._lock = threading.RLock()
        self._conn = sqlite3.connect(os.fspath(path), check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        with self._conn:
            self._conn.execute(_SCHEMA)

    def __enter__(self) -> "SessionRepository":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _fetch_one(self, sql: str, args: tuple) -> sqlite3.Row:
        row = self._conn.execute(sql, args).fetchone()
        if row is None:
            raise NoRowsError("no rows in result set")
        return row

    def _select_by_id(self, session_id: str) -> SessionRecord:
        row = self._fetch_one(
            f"SELECT {_COLUMNS} FROM sessions WHERE session_id = ? LIMIT 1",
            (session_id,),
        )
        return _record(row)

    def create_session(self, params: CreateSessionParams) -> SessionRecord:
        """Insert a new session and return the stored row."""
        with self._lock, self._conn:
            self._conn.execute(
                "INSERT INTO sessions (session_id, room_id, owner_user_id, start_time,"
                " status, session_title, anchor_name, room_title, created_at)"
                " VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    params.session_id,
                    params.room_id,
                    params.owner_user_id,
                    _to_text(params.start_time),
                    params.status,
                    params.session_title,
                    params.anchor_name,
                    params.room_title,
                    _to_text(datetime.now(timezone.utc)),
                ),
            )
            return self._select_by_id(params.session_id)

    def get_session_by_id(self, session_id: str) -> SessionRecord:
        with self._lock:
            return self._select_by_id(session_id)

    def end_session(self, params: EndSessionParams) -> SessionRecord:
        """Mark a live session as ended; raises NoRowsError if none is live."""
        with self._lock, self._conn:
            cursor = self._conn.execute(
                "UPDATE sessions SET status = 'ended', end_time = ?"
                " WHERE session_id = ? AND status = 'live'",
                (_to_text(params.end_time), params.session_id),
            )
            if cursor.rowcount == 0:
                raise NoRowsError("no rows in result set")
            return self._select_by_id(params.session_id)

    def update_session_aggregates(
        self, params: UpdateSessionAggregatesParams
    ) -> SessionRecord:
        with self._lock, self._conn:
            cursor = self._conn.execute(
                "UPDATE sessions SET total_events = ?, total_danmaku = ?,"
                " total_gifts_value = ?, total_likes = ?, total_watched = ?"
                " WHERE session_id = ?",
                (
                    params.total_events,
                    params.total_danmaku,
                    params.total_gifts_value,
                    params.total_likes,
                    params.total_watched,
                    params.session_id,
                ),
            )
            if cursor.rowcount == 0:
                raise NoRowsError("no rows in result set")
            return self._select_by_id(params.session_id)

    def get_live_session_by_room_id(self, room_id: str) -> SessionRecord:
        with self._lock:
            row = self._fetch_one(
                f"SELECT {_COLUMNS} FROM sessions"
                " WHERE room_id = ? AND status = 'live' LIMIT 1",
                (room_id,),
            )
            return _record(row)

    def get_live_session_id_by_room_id(self, room_id: str) -> str:
        with self._lock:
            row = self._fetch_one(
                "SELECT session_id FROM sessions"
                " WHERE room_id = ? AND status = 'live' LIMIT 1",
                (room_id,),
            )
            return row["session_id"]

    def delete_session(self, session_id: str) -> None:
        """Delete a session; deleting a missing session is not an error."""
        with self._lock, self._conn:
            self._conn.execute("DELETE FROM sessions WHERE session_id = ?", (session_id,))

    def list_sessions(self, params: ListSessionsParams) -> list[SessionRecord]:
        """List sessions, newest first, with optional filters and paging."""
        if params.limit < 0:
            raise ValueError("LIMIT must not be negative")
        if params.offset < 0:
            raise ValueError("OFFSET must not be negative")
        with self._lock:
            rows = self._conn.execute(
                f"SELECT {_COLUMNS} FROM sessions"
                " WHERE (status = ? OR ? = '')"
                " AND (room_id = ? OR ? = '')"
                " AND (owner_user_id = ? OR ? = '')"
                " ORDER BY created_at DESC, rowid DESC"
                " LIMIT ? OFFSET ?",
                (
                    params.status,
                    params.status,
                    params.room_id,
                    params.room_id,
                    params.owner_user_id,
                    params.owner_user_id,
                    params.limit,
                    params.offset,
                ),
            ).fetchall()
        return [_record(row) for row in rows]

    def get_sessions_count(self, params: GetSessionsCountParams) -> int:
        with self._lock:
            row = self._conn.execute(
                "SELECT COUNT(*) FROM sessions"
                " WHERE (status = ? OR ? = '')"
                " AND (room_id = ? OR ? = '')"
                " AND (owner_user_id = ? OR ? = '')",
                (
                    params.status,
                    params.status,
                    params.room_id,
                    params.room_id,
                    params.owner_user_id,
                    params.owner_user_id,
                ),
            ).fetchone()
        return int(row[0])

    def ping(self) -> None:
        """Check that the database answers; raises ConnectionError otherwise."""
        try:
            with self._lock:
                self._conn.execute("SELECT 1").fetchone()
        except sqlite3.Error as exc:
            raise ConnectionError(f"database ping failed: {exc}") from exc

    def list_live_session_ids(self) -> list[str]:
        with self._lock:
            rows = self._conn.execute(
                "SELECT session_id FROM sessions WHERE status = 'live'"
            ).fetchall()
        return [row["session_id"] for row in rows]

    def close(self) -> None:
        with self._lock:
            self._conn.close()