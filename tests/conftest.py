"""
DashGen test fixtures.
"""

from datetime import date, timedelta
from typing import Any, Dict, List

import pytest

from dashgen.core.ingestion import FileIngestor
from dashgen.core.models import ColumnType, Dataset
from dashgen.core.type_inference import TypeInferencer
from dashgen.memory.pattern_store import InMemoryPatternStore

REGIONS = [
    "North", "South", "East", "West", "Central", "Coastal",
    "Mountain", "Valley", "Desert", "Island", "Harbor", "Prairie",
]


def make_dataset(columns: Dict[str, List[Any]]) -> Dataset:
    """Build a dataset from column name -> values."""
    headers = list(columns)
    rows = list(zip(*columns.values()))
    return Dataset(headers=tuple(headers), rows=tuple(rows))


def build_sales_dataset(region_count: int = 3, row_count: int = 30) -> Dataset:
    """``[date, region, revenue]`` with CSV-style text cells."""
    start = date(2024, 1, 1)
    return make_dataset({
        "date": [(start + timedelta(days=i)).isoformat() for i in range(row_count)],
        "region": [REGIONS[i % region_count] for i in range(row_count)],
        "revenue": [str(100 + i * 7) for i in range(row_count)],
    })


def sales_csv(region_count: int = 3, row_count: int = 30) -> bytes:
    dataset = build_sales_dataset(region_count, row_count)
    lines = [",".join(dataset.headers)]
    lines.extend(",".join(row) for row in dataset.rows)
    return ("\n".join(lines) + "\n").encode("utf-8")


@pytest.fixture
def sales_dataset() -> Dataset:
    return build_sales_dataset()


@pytest.fixture
def sales_types(sales_dataset) -> Dict[str, ColumnType]:
    return TypeInferencer().infer(sales_dataset)


@pytest.fixture
def ingestor() -> FileIngestor:
    return FileIngestor()


@pytest.fixture
def memory_store() -> InMemoryPatternStore:
    return InMemoryPatternStore()
