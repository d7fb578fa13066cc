"""
Pattern Memory

Stores the outcome of past dashboard generations keyed by dataset shape
and retrieves the most similar ones for a new dataset. Memory is
best-effort: failures are logged and never reach the caller.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Iterable, Set
import logging
import uuid

from dashgen.config import MemoryConfig
from dashgen.core.models import (
    ColumnType,
    DataInsights,
    PatternMatch,
    PatternRecord,
    SchemaFingerprint,
)
from dashgen.memory.pattern_store import PatternStore

logger = logging.getLogger(__name__)


@dataclass
class MemoryContext:
    """Signature of the current dataset plus the user's request."""
    data_columns: List[str]
    data_types: Dict[str, str]
    user_prompt: str
    business_context: Optional[str] = None
    recommended_charts: List[str] = field(default_factory=list)
    recommended_kpis: List[str] = field(default_factory=list)


def create_memory_context(
    headers: Iterable[str],
    column_types: Dict[str, ColumnType],
    user_prompt: str,
    insights: Optional[DataInsights] = None,
) -> MemoryContext:
    """Build a memory context, optionally enriched with analysis results."""
    context = MemoryContext(
        data_columns=list(headers),
        data_types={c: t.value for c, t in column_types.items()},
        user_prompt=user_prompt,
    )

    if insights is not None:
        context.business_context = insights.business_context.value
        context.recommended_charts = [
            f"{chart.type.value}: {chart.title}" for chart in insights.chart_recommendations
        ]
        context.recommended_kpis = [
            f"{kpi.metric} ({kpi.card_type.value})" for kpi in insights.key_metrics
        ]

    return context


def jaccard(first: Set[str], second: Set[str]) -> float:
    """|A ∩ B| / |A ∪ B|; two empty sets have similarity 0."""
    union = first | second
    if not union:
        return 0.0
    return len(first & second) / len(union)


def schema_similarity(
    context: MemoryContext,
    fingerprint: SchemaFingerprint,
    column_weight: float = 0.7,
    type_weight: float = 0.3,
) -> float:
    """Weighted column-name and column-type similarity."""
    current_columns = {c.lower() for c in context.data_columns}
    stored_columns = {c.lower() for c in fingerprint.column_names}
    column_similarity = jaccard(current_columns, stored_columns)

    type_similarity = jaccard(set(context.data_types.values()), set(fingerprint.column_types))

    return column_weight * column_similarity + type_weight * type_similarity


def _unique(items: Iterable[str]) -> tuple:
    return tuple(dict.fromkeys(items))


class PatternMemory:
    """
    Best-effort memory of what worked for similar datasets.

    The store is passed in explicitly so callers and tests control
    which persistence backend is used.
    """

    def __init__(self, pattern_store: PatternStore, config: Optional[MemoryConfig] = None):
        """
        Initialize the memory.

        Args:
            pattern_store: Persistence collaborator
            config: Memory configuration
        """
        self.pattern_store = pattern_store
        self.config = config or MemoryConfig()

    def store(
        self,
        context: MemoryContext,
        successful_elements: Iterable[str],
        common_mistakes: Iterable[str] = (),
        best_practices: Iterable[str] = (),
    ) -> Optional[PatternRecord]:
        """
        Record the outcome of a generation.

        Returns:
            The stored record, or None when memory is disabled or the write failed
        """
        if not self.config.enabled:
            return None

        try:
            record = PatternRecord(
                id=uuid.uuid4().hex,
                schema_fingerprint=SchemaFingerprint.from_columns(
                    context.data_columns, context.data_types
                ),
                original_intent=context.user_prompt,
                successful_elements=_unique(successful_elements),
                common_mistakes=_unique(common_mistakes),
                best_practices=_unique(best_practices),
            )
            self.pattern_store.append(record)
        except Exception as e:
            logger.warning(f"Error storing dashboard pattern: {e}")
            return None

        logger.info(f"Stored dashboard pattern {record.id}")
        return record

    def retrieve(self, context: MemoryContext) -> List[PatternMatch]:
        """
        Find past patterns for datasets shaped like the current one.

        Returns:
            Up to ``top_k`` matches above ``min_similarity``, most similar first
        """
        if not self.config.enabled:
            return []

        try:
            records = self.pattern_store.query_recent(
                self.config.window_days, self.config.fetch_limit
            )
            matches = []
            for record in records:
                similarity = schema_similarity(
                    context,
                    record.schema_fingerprint,
                    self.config.column_weight,
                    self.config.type_weight,
                )
                if similarity > self.config.min_similarity:
                    matches.append(PatternMatch(record=record, similarity=similarity))
        except Exception as e:
            logger.warning(f"Error retrieving patterns: {e}")
            return []

        matches.sort(key=lambda m: m.similarity, reverse=True)
        matches = matches[:self.config.top_k]
        logger.info(f"Retrieved {len(matches)} relevant patterns from {len(records)} recent records")
        return matches
