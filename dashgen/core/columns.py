"""
Column helpers shared by the recommenders.
"""

from typing import Dict, List, Iterable
import re

from dashgen.core.models import ColumnType, Aggregation


def format_column_name(column: str) -> str:
    """Turn ``order_total`` or ``order-total`` into ``Order Total``."""
    return " ".join(
        word[:1].upper() + word[1:].lower()
        for word in re.split(r"[-_\s]", column)
    )


def find_columns_by_keywords(headers: Iterable[str], keywords: Iterable[str]) -> List[str]:
    """Columns whose lower-cased name contains any keyword."""
    keywords = [k.lower() for k in keywords]
    return [
        header for header in headers
        if any(keyword in header.lower() for keyword in keywords)
    ]


def numeric_columns(column_types: Dict[str, ColumnType]) -> List[str]:
    return [c for c, t in column_types.items() if t.is_numeric]


def date_columns(column_types: Dict[str, ColumnType]) -> List[str]:
    return [c for c, t in column_types.items() if t == ColumnType.DATE]


def category_columns(column_types: Dict[str, ColumnType]) -> List[str]:
    return [c for c, t in column_types.items() if t == ColumnType.STRING]


def appropriate_aggregation(column: str) -> Aggregation:
    """Pick the aggregation a business user most likely expects for a column."""
    name = column.lower()
    if any(k in name for k in ("revenue", "sales", "total")):
        return Aggregation.SUM
    elif any(k in name for k in ("rate", "average", "score")):
        return Aggregation.AVG
    elif any(k in name for k in ("count", "number")):
        return Aggregation.COUNT
    # Default for most business metrics
    return Aggregation.SUM
