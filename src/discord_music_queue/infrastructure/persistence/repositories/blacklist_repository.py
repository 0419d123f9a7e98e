"""SQLite implementation of the blacklist repository."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from discord_music_queue.domain.access.entities import BlacklistEntry, BlacklistKind, BlacklistPage
from discord_music_queue.domain.access.repository import BlacklistRepository
from discord_music_queue.domain.shared.constants import DatabaseTables
from discord_music_queue.domain.shared.datetime_utils import from_iso, to_iso

if TYPE_CHECKING:
    from ..database import Database

logger = logging.getLogger(__name__)

_TABLES = {
    BlacklistKind.USER: DatabaseTables.BLACKLISTED_USERS,
    BlacklistKind.SERVER: DatabaseTables.BLACKLISTED_SERVERS,
}


class SQLiteBlacklistRepository(BlacklistRepository):
    def __init__(self, database: Database) -> None:
        self._db = database

    async def add(self, kind: BlacklistKind, entry: BlacklistEntry) -> bool:
        table = _TABLES[kind]
        inserted = await self._db.execute(
            f"""
            INSERT OR IGNORE INTO {table} (id, name, added_at, seq)
            VALUES (?, ?, ?, (SELECT COALESCE(MAX(seq), 0) + 1 FROM {table}))
            """,
            (entry.id, entry.name, to_iso(entry.added_at)),
        )
        return inserted > 0

    async def remove(self, kind: BlacklistKind, entry_id: int) -> bool:
        deleted = await self._db.execute(
            f"DELETE FROM {_TABLES[kind]} WHERE id = ?",
            (entry_id,),
        )
        return deleted > 0

    async def contains(self, kind: BlacklistKind, entry_id: int) -> bool:
        row = await self._db.fetch_one(
            f"SELECT 1 AS hit FROM {_TABLES[kind]} WHERE id = ?",
            (entry_id,),
        )
        return row is not None

    async def list_page(self, kind: BlacklistKind, page: int = 0, limit: int = 10) -> BlacklistPage:
        table = _TABLES[kind]
        page = max(page, 0)

        count_row = await self._db.fetch_one(f"SELECT COUNT(*) AS total FROM {table}")
        total = int(count_row["total"]) if count_row else 0

        rows = await self._db.fetch_all(
            f"SELECT id, name, added_at FROM {table} ORDER BY seq LIMIT ? OFFSET ?",
            (limit, page * limit),
        )
        entries = tuple(
            BlacklistEntry(id=row["id"], name=row["name"], added_at=from_iso(row["added_at"]))
            for row in rows
        )

        return BlacklistPage(
            kind=kind,
            entries=entries,
            page=page,
            total=total,
            has_more=(page + 1) * limit < total,
        )
