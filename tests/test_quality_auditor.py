"""Tests for the data quality audit."""

import re

from dashgen.core.models import DataQualitySeverity
from dashgen.core.quality_auditor import QualityAuditor
from dashgen.core.type_inference import TypeInferencer

from tests.conftest import build_sales_dataset, make_dataset


def _audit(dataset):
    types = TypeInferencer().infer(dataset)
    return QualityAuditor().audit(dataset, types)


def _with_missing(missing: int, rows: int = 20):
    return make_dataset({
        "id": [str(i) for i in range(rows)],
        "notes": ["" if i < missing else "ok" for i in range(rows)],
    })


def test_clean_dataset_has_no_issues(sales_dataset):
    assert _audit(sales_dataset) == []


def test_missing_values_over_ten_percent():
    issues = _audit(_with_missing(4))

    assert len(issues) == 1
    issue = issues[0]
    assert issue.column == "notes"
    assert issue.issue_type == "missing_values"
    assert issue.severity == DataQualitySeverity.WARNING
    assert issue.description == "notes has 20.0% missing values"

    percent = float(re.search(r"([\d.]+)%", issue.description).group(1))
    assert percent > 10


def test_exactly_ten_percent_is_not_flagged():
    assert _audit(_with_missing(2)) == []


def test_half_missing_is_critical():
    issues = _audit(_with_missing(10))

    assert issues[0].severity == DataQualitySeverity.CRITICAL
    assert issues[0].description == "notes has 50.0% missing values"


def test_small_dataset_warning():
    small = _audit(build_sales_dataset(row_count=5))
    large = _audit(build_sales_dataset(row_count=50))

    assert any("dataset is very small" in i.description.lower() for i in small)
    assert not any("dataset is very small" in i.description.lower() for i in large)
    assert small[-1].column is None
    assert small[-1].severity == DataQualitySeverity.INFO


def test_high_cardinality_text_column():
    dataset = make_dataset({
        "email": [f"user.{chr(97 + i)}@example.com" for i in range(20)],
        "amount": [str(i) for i in range(20)],
    })

    issues = _audit(dataset)

    assert [i.issue_type for i in issues] == ["high_cardinality"]
    assert issues[0].description == (
        "email has very high cardinality (20 unique values) - consider grouping"
    )
