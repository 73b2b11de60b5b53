"""SQLite-backed key-value store for project records."""

import logging
import sqlite3
from contextlib import closing
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from src.models.records import ProjectRecord

logger = logging.getLogger(__name__)


class StorageError(Exception):
    pass


class ProjectNotFoundError(LookupError):
    def __init__(self, project_id: str):
        super().__init__(f"Project with ID {project_id} not found")
        self.project_id = project_id


class ProjectStore:
    def __init__(self, db_path: str = "data/projects.db"):
        self.db_path = db_path
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._ensure_tables()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_tables(self) -> None:
        try:
            with closing(self._connect()) as conn, conn:
                conn.executescript("""
                    CREATE TABLE IF NOT EXISTS projects (
                        project_id TEXT PRIMARY KEY,
                        name TEXT,
                        project_json TEXT,
                        created_at TIMESTAMP,
                        updated_at TIMESTAMP
                    );
                """)
        except sqlite3.Error as e:
            logger.error("Failed to initialize project store at %s: %s", self.db_path, e)
            raise StorageError("Project storage is not available") from e

    def _exists(self, conn: sqlite3.Connection, project_id: str) -> bool:
        row = conn.execute(
            "SELECT 1 FROM projects WHERE project_id = ?", (project_id,)
        ).fetchone()
        return row is not None

    def save(self, record: ProjectRecord) -> ProjectRecord:
        """Insert a new project, or replace an existing one and bump updated_at."""
        try:
            with closing(self._connect()) as conn, conn:
                if self._exists(conn, record.id):
                    record = record.model_copy(update={"updated_at": datetime.now(timezone.utc)})
                conn.execute(
                    "INSERT OR REPLACE INTO projects "
                    "(project_id, name, project_json, created_at, updated_at) "
                    "VALUES (?, ?, ?, ?, ?)",
                    (
                        record.id,
                        record.name,
                        record.to_json(),
                        record.created_at.isoformat(),
                        record.updated_at.isoformat(),
                    ),
                )
        except sqlite3.Error as e:
            logger.error("Failed to save project %s: %s", record.id, e)
            raise StorageError("Failed to save project") from e
        return record

    def get(self, project_id: str) -> ProjectRecord | None:
        """Return the stored project or None if missing."""
        try:
            with closing(self._connect()) as conn, conn:
                row = conn.execute(
                    "SELECT project_json FROM projects WHERE project_id = ?", (project_id,)
                ).fetchone()
        except sqlite3.Error as e:
            logger.error("Failed to load project %s: %s", project_id, e)
            raise StorageError("Failed to load project") from e
        if row:
            return ProjectRecord.from_json(row["project_json"])
        return None

    def list_all(self) -> list[ProjectRecord]:
        """All stored projects, oldest first."""
        try:
            with closing(self._connect()) as conn, conn:
                rows = conn.execute(
                    "SELECT project_json FROM projects ORDER BY created_at, project_id"
                ).fetchall()
        except sqlite3.Error as e:
            logger.error("Failed to load projects: %s", e)
            raise StorageError("Failed to load projects") from e
        return [ProjectRecord.from_json(row["project_json"]) for row in rows]

    def delete(self, project_id: str) -> bool:
        """Delete a project. Returns False if it did not exist."""
        try:
            with closing(self._connect()) as conn, conn:
                cursor = conn.execute("DELETE FROM projects WHERE project_id = ?", (project_id,))
                deleted = cursor.rowcount > 0
        except sqlite3.Error as e:
            logger.error("Failed to delete project %s: %s", project_id, e)
            raise StorageError("Failed to delete project") from e
        return deleted

    def export_project(self, project_id: str) -> str:
        """Serialize a stored project to JSON."""
        record = self.get(project_id)
        if record is None:
            raise ProjectNotFoundError(project_id)
        return record.to_json()

    @staticmethod
    def import_project(json_data: str | bytes) -> ProjectRecord:
        """Parse an exported project (text, or UTF-8 bytes). Does not save it."""
        try:
            if isinstance(json_data, bytes):
                json_data = json_data.decode("utf-8")
            return ProjectRecord.from_json(json_data)
        except (UnicodeDecodeError, ValidationError) as e:
            logger.warning("Rejected project import: %s", e)
            raise StorageError("Failed to import project: Invalid JSON data") from e
