from __future__ import annotations
import aiosqlite
from datetime import datetime
from typing import List, Optional

from ..core.timeutil import now_utc, truncate_to_second
from ..domain.models import StoredMeasurement
from ..domain.temperature import Celsius
from .elasticsearch_store import bucket_key
from .errors import InvalidDestination, RequestFailed, UnexpectedResponse


class SQLiteStore:
    """Embedded measurement store with the same upsert/recency contract."""

    def __init__(self, path: str) -> None:
        self._path = path

    async def init(self) -> None:
        try:
            async with aiosqlite.connect(self._path) as db:
                await db.execute(
                    """
                    CREATE TABLE IF NOT EXISTS measurements (
                        address TEXT NOT NULL,
                        ts_utc TEXT NOT NULL,
                        bucket TEXT NOT NULL,
                        temp_c REAL NOT NULL,
                        PRIMARY KEY (address, ts_utc)
                    )
                    """
                )
                await db.execute("CREATE INDEX IF NOT EXISTS idx_measurements_bucket ON measurements(bucket)")
                await db.commit()
        except aiosqlite.Error as e:
            raise InvalidDestination(f"Cannot open database {self._path!r}: {e}") from e

    async def write(
        self, address: str, temperature: Celsius, date: Optional[datetime] = None
    ) -> StoredMeasurement:
        date = truncate_to_second(date if date is not None else now_utc())
        try:
            async with aiosqlite.connect(self._path) as db:
                await db.execute(
                    "INSERT INTO measurements(address, ts_utc, bucket, temp_c) VALUES (?, ?, ?, ?) "
                    "ON CONFLICT(address, ts_utc) DO UPDATE SET temp_c=excluded.temp_c",
                    (address, date.isoformat(), bucket_key(date), float(temperature)),
                )
                await db.commit()
        except aiosqlite.Error as e:
            raise RequestFailed(f"The request to the database failed: {e}") from e
        return StoredMeasurement(address=address, date=date, temperature=temperature)

    async def read_recent(self, address: str, limit: int) -> List[StoredMeasurement]:
        try:
            async with aiosqlite.connect(self._path) as db:
                cur = await db.execute(
                    """
                    SELECT address, ts_utc, temp_c
                    FROM measurements
                    WHERE address = ?
                    ORDER BY ts_utc DESC
                    LIMIT ?
                    """,
                    (address, limit),
                )
                rows = await cur.fetchall()
        except aiosqlite.Error as e:
            raise RequestFailed(f"The request to the database failed: {e}") from e

        out: list[StoredMeasurement] = []
        for addr, ts, temp in rows:
            try:
                out.append(
                    StoredMeasurement(
                        address=addr,
                        date=datetime.fromisoformat(ts),
                        temperature=Celsius(float(temp)),
                    )
                )
            except (TypeError, ValueError) as e:
                raise UnexpectedResponse(f"Unexpected row for {addr}: {e}") from e
        return list(reversed(out))

    async def drop_bucket(self, bucket: str) -> int:
        """Delete one day of measurements; returns the number of rows removed."""
        try:
            async with aiosqlite.connect(self._path) as db:
                cur = await db.execute("DELETE FROM measurements WHERE bucket = ?", (bucket,))
                await db.commit()
                return cur.rowcount
        except aiosqlite.Error as e:
            raise RequestFailed(f"The request to the database failed: {e}") from e
