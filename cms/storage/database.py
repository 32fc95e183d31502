"""
SQLite Persistence

Editors and the three content tables. Content rows share one schema;
the table is chosen by ContentKind. Rows are returned as API-shaped
dicts (camelCase keys, parsed content, embedded author summary).
"""

import json
import sqlite3
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from cms.configs import get_logger
from cms.content_kinds import ContentKind
from cms.documents import empty_document
from cms.exceptions import ConflictError, DatabaseError

logger = get_logger("storage.database")

STATUS_DRAFT = "DRAFT"
STATUS_PUBLISHED = "PUBLISHED"
PUBLISH_STATUSES = (STATUS_DRAFT, STATUS_PUBLISHED)

ROLE_ADMIN = "admin"
ROLE_EDITOR = "editor"

_USERS_SQL = """
CREATE TABLE IF NOT EXISTS users (
    id TEXT PRIMARY KEY,
    email TEXT NOT NULL UNIQUE,
    username TEXT NOT NULL UNIQUE,
    password TEXT NOT NULL,
    role TEXT NOT NULL DEFAULT 'editor',
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
"""

_CONTENT_SQL = """
CREATE TABLE IF NOT EXISTS {table} (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL DEFAULT '',
    subtitle TEXT,
    category TEXT,
    content TEXT NOT NULL DEFAULT '{{"type":"doc","content":[]}}',
    status TEXT NOT NULL DEFAULT 'DRAFT',
    date TEXT NOT NULL,
    author_id TEXT NOT NULL,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    FOREIGN KEY (author_id) REFERENCES users(id)
);
CREATE INDEX IF NOT EXISTS idx_{table}_status ON {table}(status);
"""

# API field -> column, for partial updates
_CONTENT_COLUMNS = {
    "title": "title",
    "subtitle": "subtitle",
    "category": "category",
    "content": "content",
    "status": "status",
    "date": "date",
}


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class Database:
    """
    Thin repository over a single SQLite file.

    Usage:
        db = Database("/tmp/cms.sqlite3")
        user = db.create_user("a@b.c", "alice", password_hash)
        record = db.create_content(ContentKind.BLOG, user["id"], title="Hi")
    """

    def __init__(self, path: str | Path):
        self.path = str(path)
        if self.path != ":memory:":
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)
        self._conn = sqlite3.connect(self.path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA foreign_keys = ON")
        self._lock = threading.RLock()
        self.init_schema()

    def init_schema(self) -> None:
        with self._lock:
            script = _USERS_SQL + "".join(
                _CONTENT_SQL.format(table=kind.table) for kind in ContentKind
            )
            self._conn.executescript(script)
            self._conn.commit()

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    # --- Users ---

    def create_user(
        self,
        email: str,
        username: str,
        password_hash: str,
        role: str = ROLE_EDITOR,
    ) -> dict[str, Any]:
        """
        Insert a user.

        Raises:
            ConflictError: email or username already taken
        """
        user_id = str(uuid.uuid4())
        now = _now()
        with self._lock:
            if self._fetch_user("email", email) is not None:
                raise ConflictError("Email already registered")
            if self._fetch_user("username", username) is not None:
                raise ConflictError("Username already taken")
            try:
                self._conn.execute(
                    "INSERT INTO users (id, email, username, password, role, created_at, updated_at) "
                    "VALUES (?, ?, ?, ?, ?, ?, ?)",
                    (user_id, email, username, password_hash, role, now, now),
                )
                self._conn.commit()
            except sqlite3.IntegrityError as e:
                self._conn.rollback()
                if "users.email" in str(e):
                    raise ConflictError("Email already registered") from e
                raise ConflictError("Username already taken") from e
        logger.info(f"Created user {username} ({role})")
        return self.get_user(user_id)

    def count_users(self) -> int:
        with self._lock:
            return self._conn.execute("SELECT COUNT(*) FROM users").fetchone()[0]

    def get_user(self, user_id: str) -> Optional[dict[str, Any]]:
        return self._fetch_user("id", user_id)

    def get_user_by_email(self, email: str) -> Optional[dict[str, Any]]:
        return self._fetch_user("email", email)

    def get_user_by_username(self, username: str) -> Optional[dict[str, Any]]:
        return self._fetch_user("username", username)

    def _fetch_user(self, column: str, value: str) -> Optional[dict[str, Any]]:
        with self._lock:
            row = self._conn.execute(
                f"SELECT * FROM users WHERE {column} = ?", (value,)
            ).fetchone()
        if row is None:
            return None
        return {
            "id": row["id"],
            "email": row["email"],
            "username": row["username"],
            "password": row["password"],
            "role": row["role"],
            "createdAt": row["created_at"],
            "updatedAt": row["updated_at"],
        }

    # --- Content ---

    def create_content(
        self,
        kind: ContentKind,
        author_id: str,
        title: str = "",
        subtitle: Optional[str] = None,
        category: Optional[str] = None,
        content: Any = None,
        status: str = STATUS_DRAFT,
        date: Optional[str] = None,
    ) -> dict[str, Any]:
        """Insert a content record and return it."""
        kind = ContentKind.parse(kind)
        record_id = str(uuid.uuid4())
        now = _now()
        if content is None:
            content = empty_document()
        with self._lock:
            try:
                self._conn.execute(
                    f"INSERT INTO {kind.table} "
                    "(id, title, subtitle, category, content, status, date, author_id, created_at, updated_at) "
                    "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                    (
                        record_id,
                        title,
                        subtitle,
                        category,
                        json.dumps(content),
                        status,
                        date or now,
                        author_id,
                        now,
                        now,
                    ),
                )
                self._conn.commit()
            except sqlite3.Error as e:
                self._conn.rollback()
                raise DatabaseError(f"Failed to create {kind.value}: {e}") from e
        return self.get_content(kind, record_id)

    def get_content(self, kind: ContentKind, record_id: str) -> Optional[dict[str, Any]]:
        kind = ContentKind.parse(kind)
        with self._lock:
            row = self._conn.execute(
                self._select_sql(kind) + " WHERE c.id = ?", (record_id,)
            ).fetchone()
        return self._row_to_content(row) if row else None

    def list_content(self, kind: ContentKind, published_only: bool = True) -> list[dict[str, Any]]:
        """List records newest first, optionally only published ones."""
        kind = ContentKind.parse(kind)
        sql = self._select_sql(kind)
        params: tuple = ()
        if published_only:
            sql += " WHERE c.status = ?"
            params = (STATUS_PUBLISHED,)
        sql += " ORDER BY c.created_at DESC"
        with self._lock:
            rows = self._conn.execute(sql, params).fetchall()
        return [self._row_to_content(row) for row in rows]

    def update_content(
        self,
        kind: ContentKind,
        record_id: str,
        fields: dict[str, Any],
    ) -> Optional[dict[str, Any]]:
        """
        Apply a partial update. Keys absent from ``fields`` are left unchanged.

        Returns:
            Updated record, or None if it does not exist
        """
        kind = ContentKind.parse(kind)
        assignments = []
        values: list[Any] = []
        for key, value in fields.items():
            column = _CONTENT_COLUMNS.get(key)
            if column is None:
                raise DatabaseError(f"Unknown content field: {key}")
            if key == "content":
                value = json.dumps(value)
            assignments.append(f"{column} = ?")
            values.append(value)
        assignments.append("updated_at = ?")
        values.append(_now())
        values.append(record_id)

        with self._lock:
            cursor = self._conn.execute(
                f"UPDATE {kind.table} SET {', '.join(assignments)} WHERE id = ?",
                values,
            )
            self._conn.commit()
        if cursor.rowcount == 0:
            return None
        return self.get_content(kind, record_id)

    def delete_content(self, kind: ContentKind, record_id: str) -> bool:
        kind = ContentKind.parse(kind)
        with self._lock:
            cursor = self._conn.execute(f"DELETE FROM {kind.table} WHERE id = ?", (record_id,))
            self._conn.commit()
        return cursor.rowcount > 0

    @staticmethod
    def _select_sql(kind: ContentKind) -> str:
        return (
            "SELECT c.*, u.username AS author_username, u.email AS author_email "
            f"FROM {kind.table} c LEFT JOIN users u ON u.id = c.author_id"
        )

    @staticmethod
    def _row_to_content(row: sqlite3.Row) -> dict[str, Any]:
        try:
            content = json.loads(row["content"])
        except (TypeError, ValueError):
            content = empty_document()
        return {
            "id": row["id"],
            "title": row["title"],
            "subtitle": row["subtitle"],
            "category": row["category"],
            "content": content,
            "status": row["status"],
            "date": row["date"],
            "authorId": row["author_id"],
            "createdAt": row["created_at"],
            "updatedAt": row["updated_at"],
            "author": {
                "id": row["author_id"],
                "username": row["author_username"],
                "email": row["author_email"],
            },
        }
