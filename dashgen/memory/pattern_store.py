"""
Pattern Stores

Persistence collaborators for the pattern memory. A store only needs to
append records and return the most recent ones inside a time window.
Failures surface as ``MemoryUnavailableError``.
"""

from typing import Optional, Any, List, Dict, Callable
from datetime import datetime, timedelta, timezone
import json
import logging

from sqlalchemy import (
    Column,
    DateTime,
    MetaData,
    String,
    Table,
    Text,
    create_engine,
    select,
)
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from dashgen.core.models import PatternRecord, SchemaFingerprint
from dashgen.exceptions import MemoryUnavailableError

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PatternStore:
    """Append-only storage for pattern records."""

    def append(self, record: PatternRecord) -> None:
        raise NotImplementedError

    def query_recent(self, window_days: int, limit: int) -> List[PatternRecord]:
        """Records created within ``window_days``, newest first, at most ``limit``."""
        raise NotImplementedError


class InMemoryPatternStore(PatternStore):
    """Process-local store, used in tests and one-off CLI runs."""

    def __init__(
        self,
        records: Optional[List[PatternRecord]] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._records: List[PatternRecord] = list(records or [])
        self._clock = clock

    def append(self, record: PatternRecord) -> None:
        self._records.append(record)

    def query_recent(self, window_days: int, limit: int) -> List[PatternRecord]:
        cutoff = self._clock() - timedelta(days=window_days)
        recent = [r for r in self._records if r.created_at >= cutoff]
        recent.sort(key=lambda r: r.created_at, reverse=True)
        return recent[:limit]

    def __len__(self) -> int:
        return len(self._records)


metadata = MetaData()

dashboard_memory = Table(
    "dashboard_memory",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("data_schema", Text, nullable=False),
    Column("user_intent", Text, nullable=False),
    Column("successful_elements", Text, nullable=False),
    Column("common_mistakes", Text, nullable=False),
    Column("best_practices", Text, nullable=False),
    Column("created_at", DateTime, nullable=False, index=True),  # naive UTC
)


class SqlPatternStore(PatternStore):
    """
    Pattern store backed by any SQLAlchemy-supported database.

    The ``dashboard_memory`` table is created on first use.
    """

    def __init__(self, database_url: str):
        """
        Initialize the store.

        Args:
            database_url: SQLAlchemy URL, e.g. ``sqlite:///./memory.db``
        """
        self.database_url = database_url
        self._engine: Optional[Engine] = None

    @property
    def engine(self) -> Engine:
        """Get or create the database engine."""
        if self._engine is None:
            self._engine = self._create_engine()
        return self._engine

    def _create_engine(self) -> Engine:
        engine_kwargs: Dict[str, Any] = {"pool_pre_ping": True}

        # In-memory SQLite must share one connection or each checkout sees an empty database
        if self.database_url in ("sqlite://", "sqlite:///:memory:"):
            engine_kwargs.update({
                "poolclass": StaticPool,
                "connect_args": {"check_same_thread": False},
            })

        try:
            engine = create_engine(self.database_url, **engine_kwargs)
        except SQLAlchemyError as e:
            raise MemoryUnavailableError(f"Failed to open pattern store: {e}") from e

        try:
            metadata.create_all(engine)
        except SQLAlchemyError as e:
            engine.dispose()
            raise MemoryUnavailableError(f"Failed to create pattern table: {e}") from e

        logger.info(f"Opened pattern store: {engine.url.render_as_string(hide_password=True)}")
        return engine

    def append(self, record: PatternRecord) -> None:
        created_at = record.created_at.astimezone(timezone.utc).replace(tzinfo=None)
        values = {
            "id": record.id,
            "data_schema": json.dumps(record.schema_fingerprint.to_dict()),
            "user_intent": record.original_intent,
            "successful_elements": json.dumps(list(record.successful_elements)),
            "common_mistakes": json.dumps(list(record.common_mistakes)),
            "best_practices": json.dumps(list(record.best_practices)),
            "created_at": created_at,
        }
        try:
            with self.engine.begin() as conn:
                conn.execute(dashboard_memory.insert().values(**values))
        except SQLAlchemyError as e:
            raise MemoryUnavailableError(f"Failed to store pattern: {e}") from e

    def query_recent(self, window_days: int, limit: int) -> List[PatternRecord]:
        cutoff = (_utcnow() - timedelta(days=window_days)).replace(tzinfo=None)
        query = (
            select(dashboard_memory)
            .where(dashboard_memory.c.created_at >= cutoff)
            .order_by(dashboard_memory.c.created_at.desc())
            .limit(limit)
        )
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(query).mappings().all()
        except SQLAlchemyError as e:
            raise MemoryUnavailableError(f"Failed to query patterns: {e}") from e

        records = []
        for row in rows:
            try:
                records.append(self._row_to_record(row))
            except (ValueError, TypeError) as e:
                logger.warning(f"Skipping unreadable pattern {row['id']}: {e}")
        return records

    @staticmethod
    def _row_to_record(row) -> PatternRecord:
        return PatternRecord(
            id=row["id"],
            schema_fingerprint=SchemaFingerprint.from_dict(json.loads(row["data_schema"])),
            original_intent=row["user_intent"],
            successful_elements=tuple(json.loads(row["successful_elements"])),
            common_mistakes=tuple(json.loads(row["common_mistakes"])),
            best_practices=tuple(json.loads(row["best_practices"])),
            created_at=row["created_at"].replace(tzinfo=timezone.utc),
        )

    def close(self):
        """Dispose of the engine."""
        if self._engine:
            self._engine.dispose()
            self._engine = None
            logger.info("Pattern store closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
