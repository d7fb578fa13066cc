"""
Quality Auditor

Flags missing data, high-cardinality text columns and tiny datasets.
All findings are advisory; the audit never fails a generation.
"""

from typing import Dict, List, Optional
import logging

from dashgen.config import ReasoningConfig
from dashgen.core.models import (
    ColumnType,
    DataQualityIssue,
    DataQualitySeverity,
    Dataset,
)

logger = logging.getLogger(__name__)


class QualityAuditor:
    """
    Detects data quality issues in an ingested dataset.

    This module handles:
    - Missing value rates per column
    - Cardinality of text columns
    - Dataset volume
    """

    def __init__(self, config: Optional[ReasoningConfig] = None):
        self.config = config or ReasoningConfig()

    def audit(
        self,
        dataset: Dataset,
        column_types: Dict[str, ColumnType],
    ) -> List[DataQualityIssue]:
        """
        Audit a dataset.

        Args:
            dataset: Ingested dataset
            column_types: Inferred type per column

        Returns:
            Quality issues in column order, followed by dataset-level issues
        """
        issues: List[DataQualityIssue] = []
        total_rows = dataset.row_count

        if total_rows:
            for col in dataset.headers:
                issue = self._check_missing(dataset, col, total_rows)
                if issue:
                    issues.append(issue)

            for col, col_type in column_types.items():
                if col_type != ColumnType.STRING:
                    continue
                unique_count = dataset.distinct_count(col)
                if unique_count > total_rows * self.config.high_cardinality_ratio:
                    issues.append(DataQualityIssue(
                        column=col,
                        issue_type="high_cardinality",
                        severity=DataQualitySeverity.WARNING,
                        description=(
                            f"{col} has very high cardinality ({unique_count} unique values)"
                            f" - consider grouping"
                        ),
                    ))

        if total_rows < self.config.min_rows:
            issues.append(DataQualityIssue(
                column=None,
                issue_type="small_dataset",
                severity=DataQualitySeverity.INFO,
                description="Dataset is very small - some statistical analyses may not be reliable",
            ))

        logger.info(f"Data quality audit complete. Found {len(issues)} issues.")
        return issues

    def _check_missing(
        self,
        dataset: Dataset,
        column: str,
        total_rows: int,
    ) -> Optional[DataQualityIssue]:
        missing_ratio = dataset.missing_count(column) / total_rows
        if missing_ratio <= self.config.missing_value_threshold:
            return None

        if missing_ratio >= self.config.missing_value_critical:
            severity = DataQualitySeverity.CRITICAL
        else:
            severity = DataQualitySeverity.WARNING

        return DataQualityIssue(
            column=column,
            issue_type="missing_values",
            severity=severity,
            description=f"{column} has {missing_ratio * 100:.1f}% missing values",
        )
