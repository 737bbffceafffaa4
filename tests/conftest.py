from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable, Iterator

import pytest

from myfast.db.database import MEMORY_URL, SqlDatabase, open_database
from myfast.db.migrations import init_database
from myfast.db.models import Fast
from myfast.db.repositories.fasts_repo import end_fast, start_fast


@pytest.fixture()
def db() -> Iterator[SqlDatabase]:
    database = open_database(MEMORY_URL)
    init_database(database)
    yield database
    database.close()


@pytest.fixture()
def complete_fast(db: SqlDatabase) -> Callable[..., Fast]:
    def _complete(
        started_at: datetime,
        duration_hours: float,
        target_hours: float = 16,
        protocol: str = "16:8",
        notes: str | None = None,
    ) -> Fast:
        start_fast(db, protocol, target_hours, started_at)
        return end_fast(db, started_at + timedelta(hours=duration_hours), notes)

    return _complete
