"""SQLite store for person attributes."""

import sqlite3
from pathlib import Path
from typing import Optional
from datetime import date

from kinship.models import Person
from kinship.config import settings

_COLUMNS = (
    "first_name", "middle_name", "last_name", "maiden_name",
    "birth_date", "death_date", "gender", "biography", "profile_image_url",
    "birth_place", "death_place", "current_location", "occupation",
    "nationality", "is_public", "visibility",
)


class PersonStore:
    """Store person attributes in SQLite, keyed by graph identity."""

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path or settings.database.persons_db_path
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self):
        """Initialize database schema."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS persons (
                    id INTEGER PRIMARY KEY,
                    first_name TEXT,
                    middle_name TEXT,
                    last_name TEXT,
                    maiden_name TEXT,
                    birth_date TEXT,
                    death_date TEXT,
                    gender TEXT,
                    biography TEXT,
                    profile_image_url TEXT,
                    birth_place TEXT,
                    death_place TEXT,
                    current_location TEXT,
                    occupation TEXT,
                    nationality TEXT,
                    is_public INTEGER NOT NULL DEFAULT 0,
                    visibility TEXT,
                    updated_at TEXT DEFAULT CURRENT_TIMESTAMP
                )
            """)
            conn.execute("CREATE INDEX IF NOT EXISTS idx_last_name ON persons(last_name)")

    def upsert_person(self, person: Person) -> None:
        """Insert a person or overwrite the stored attributes."""
        values = person.attributes.model_dump(mode="json")
        values["is_public"] = int(person.is_public)
        placeholders = ", ".join("?" for _ in ("id",) + _COLUMNS)
        updates = ", ".join(f"{c} = excluded.{c}" for c in _COLUMNS)
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                f"INSERT INTO persons (id, {', '.join(_COLUMNS)}) VALUES ({placeholders}) "
                f"ON CONFLICT(id) DO UPDATE SET {updates}, updated_at = CURRENT_TIMESTAMP",
                [person.id] + [values[c] for c in _COLUMNS],
            )

    def get_all(self) -> list[Person]:
        """Get all persons."""
        with sqlite3.connect(self.db_path) as conn:
            conn.row_factory = sqlite3.Row
            rows = conn.execute("SELECT * FROM persons ORDER BY id").fetchall()
            return [self._row_to_person(row) for row in rows]

    def delete_person(self, person_id: int) -> bool:
        """Delete a person by ID."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute("DELETE FROM persons WHERE id = ?", (person_id,))
            return cursor.rowcount > 0

    def _row_to_person(self, row: sqlite3.Row) -> Person:
        """Convert database row to Person model."""
        return Person(
            id=row["id"],
            first_name=row["first_name"],
            middle_name=row["middle_name"],
            last_name=row["last_name"],
            maiden_name=row["maiden_name"],
            birth_date=date.fromisoformat(row["birth_date"]) if row["birth_date"] else None,
            death_date=date.fromisoformat(row["death_date"]) if row["death_date"] else None,
            gender=row["gender"] or "UNKNOWN",
            biography=row["biography"],
            profile_image_url=row["profile_image_url"],
            birth_place=row["birth_place"],
            death_place=row["death_place"],
            current_location=row["current_location"],
            occupation=row["occupation"],
            nationality=row["nationality"],
            is_public=bool(row["is_public"]),
            visibility=row["visibility"] or "PRIVATE",
        )
