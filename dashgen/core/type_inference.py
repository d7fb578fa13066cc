"""
Type Inferencer

Classifies each column of a dataset into one of the column types by
sampling its first non-empty values and applying an ordered list of rules.
"""

from typing import Dict, List, Any, Callable, Tuple
from datetime import date, datetime
import logging
import math
import re
import warnings

import pandas as pd

from dashgen.core.models import ColumnType, Dataset, is_missing

logger = logging.getLogger(__name__)

BOOLEAN_VALUES = {"true", "false", "1", "0", "yes", "no"}

_DIGIT = re.compile(r"\d")


def is_number(value: Any) -> bool:
    """Check if a value parses as a finite number."""
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return math.isfinite(value)
    text = str(value).strip()
    if not text or "_" in text:
        return False
    try:
        number = float(text)
    except ValueError:
        return False
    return math.isfinite(number)


def is_date(value: Any) -> bool:
    """Check if a value is, or parses as, a calendar date."""
    if isinstance(value, (datetime, date)):
        return True
    if not isinstance(value, str) or not _DIGIT.search(value):
        return False
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        try:
            parsed = pd.to_datetime(value, errors="coerce")
        except (ValueError, TypeError, OverflowError):
            return False
    return not pd.isna(parsed)


def _numeric_type(sample: List[Any]) -> ColumnType:
    if any("." in str(v) for v in sample):
        return ColumnType.FLOAT
    return ColumnType.INTEGER


# Evaluated in declared order; the first matching rule wins.
# Numeric precedes date, so a bare year such as "2024" is a number.
TYPE_RULES: List[Tuple[str, Callable[[List[Any]], bool], Callable[[List[Any]], ColumnType]]] = [
    ("numeric", lambda s: all(is_number(v) for v in s), _numeric_type),
    ("date", lambda s: any(is_date(v) for v in s), lambda s: ColumnType.DATE),
    (
        "boolean",
        lambda s: all(str(v).lower() in BOOLEAN_VALUES for v in s),
        lambda s: ColumnType.BOOLEAN,
    ),
]


class TypeInferencer:
    """Infers a ``ColumnType`` for every column of a dataset."""

    def __init__(self, sample_size: int = 100):
        self.sample_size = sample_size

    def sample(self, values: List[Any]) -> List[Any]:
        """First ``sample_size`` non-missing values."""
        sample = []
        for value in values:
            if is_missing(value):
                continue
            sample.append(value)
            if len(sample) >= self.sample_size:
                break
        return sample

    def infer_column(self, values: List[Any]) -> ColumnType:
        """Classify one column from its values."""
        sample = self.sample(values)
        if not sample:
            return ColumnType.UNKNOWN

        for name, matches, resolve in TYPE_RULES:
            if matches(sample):
                return resolve(sample)
        return ColumnType.STRING

    def infer(self, dataset: Dataset) -> Dict[str, ColumnType]:
        """
        Infer types for all columns.

        Args:
            dataset: Ingested dataset

        Returns:
            Mapping of column name to type, in header order
        """
        column_types = {
            header: self.infer_column(dataset.column_values(header))
            for header in dataset.headers
        }
        logger.debug(
            "Inferred column types: "
            + ", ".join(f"{c}={t.value}" for c, t in column_types.items())
        )
        return column_types
