"""Throttle flags persisted in a relational table."""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

from sqlalchemy import delete, insert, select
from sqlalchemy.exc import IntegrityError

from setsync.domain.ports.throttle import utcnow

from .engine import configured_engine
from .mappings import throttle_flag_table

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from setsync.domain.ports.throttle import Clock, ThrottleStore


class SqlAlchemyThrottleStore:
    """Throttle store shared by every process pointing at the same database.

    ``acquire`` relies on the primary key: of two concurrent inserts for the same
    key, exactly one succeeds.
    """

    def __init__(self, engine: Engine | None = None, *, clock: Clock = utcnow) -> None:
        self._engine = engine or configured_engine()
        self._clock = clock

    def get(self, key: str) -> str | None:
        stmt = select(throttle_flag_table.c.value, throttle_flag_table.c.expires_at).where(
            throttle_flag_table.c.key == key
        )
        with self._engine.connect() as connection:
            row = connection.execute(stmt).one_or_none()
        if row is None or row.expires_at <= self._clock():
            return None
        return row.value

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        expires_at = self._clock() + timedelta(seconds=ttl_seconds)
        with self._engine.begin() as connection:
            connection.execute(delete(throttle_flag_table).where(throttle_flag_table.c.key == key))
            connection.execute(
                insert(throttle_flag_table).values(key=key, value=value, expires_at=expires_at)
            )

    def acquire(self, key: str, value: str, ttl_seconds: int) -> bool:
        now = self._clock()
        with self._engine.begin() as connection:
            connection.execute(
                delete(throttle_flag_table)
                .where(throttle_flag_table.c.key == key)
                .where(throttle_flag_table.c.expires_at <= now)
            )
        try:
            with self._engine.begin() as connection:
                connection.execute(
                    insert(throttle_flag_table).values(
                        key=key,
                        value=value,
                        expires_at=now + timedelta(seconds=ttl_seconds),
                    )
                )
        except IntegrityError:
            return False
        return True

    def clear(self, key: str) -> None:
        with self._engine.begin() as connection:
            connection.execute(delete(throttle_flag_table).where(throttle_flag_table.c.key == key))


if TYPE_CHECKING:
    _store_check: ThrottleStore = SqlAlchemyThrottleStore()
