"""
Data Model

Central data structures shared by every stage of the reasoning pipeline:
the ingested dataset, inferred column types, the recommendations that make
up a dashboard plan, and the pattern records kept by the memory layer.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any, Tuple, Union
from enum import Enum
from datetime import datetime, timezone
import json
import math


class ColumnType(Enum):
    """Inferred column type."""
    INTEGER = "integer"
    FLOAT = "float"
    DATE = "date"
    BOOLEAN = "boolean"
    STRING = "string"
    UNKNOWN = "unknown"

    @property
    def is_numeric(self) -> bool:
        return self in (ColumnType.INTEGER, ColumnType.FLOAT)


class BusinessDomain(Enum):
    """Coarse business context inferred from column names."""
    SALES_COMMERCE = "sales-commerce"
    WEB_ANALYTICS = "web-analytics"
    HUMAN_RESOURCES = "human-resources"
    INVENTORY_MANAGEMENT = "inventory-management"
    CUSTOMER_SUPPORT = "customer-support"
    MARKETING = "marketing"
    FINANCIAL = "financial"
    PROJECT_MANAGEMENT = "project-management"
    GENERAL_BUSINESS = "general-business"


class Importance(Enum):
    """KPI importance levels."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return {"high": 3, "medium": 2, "low": 1}[self.value]


class CardType(Enum):
    """How a KPI card renders its value."""
    NUMBER = "number"
    PERCENTAGE = "percentage"
    CURRENCY = "currency"
    TREND = "trend"
    COMPARISON = "comparison"


class ChartType(Enum):
    """Supported chart types."""
    LINE = "line"
    BAR = "bar"
    PIE = "pie"
    AREA = "area"
    SCATTER = "scatter"
    HISTOGRAM = "histogram"
    FUNNEL = "funnel"


class Aggregation(Enum):
    """Aggregation applied to a chart's value axis."""
    SUM = "sum"
    AVG = "avg"
    COUNT = "count"
    MAX = "max"
    MIN = "min"
    MEDIAN = "median"


class SectionType(Enum):
    """Dashboard section kinds."""
    KPI_ROW = "kpi-row"
    TREND_ANALYSIS = "trend-analysis"
    CHART_GRID = "chart-grid"
    DETAILED_TABLE = "detailed-table"


class FilterType(Enum):
    """Interactive filter widgets."""
    DROPDOWN = "dropdown"
    DATE_RANGE = "date-range"
    MULTI_SELECT = "multi-select"
    SEARCH = "search"
    SLIDER = "slider"


class LayoutType(Enum):
    """Overall dashboard layouts."""
    SINGLE_COLUMN = "single-column"
    TWO_COLUMN = "two-column"
    GRID = "grid"
    MIXED = "mixed"


class DataQualitySeverity(Enum):
    """Severity levels for data quality issues."""
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


def is_missing(value: Any) -> bool:
    """Check if a cell counts as missing (None, NaN or empty string)."""
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and value == ""


@dataclass(frozen=True)
class Dataset:
    """
    Normalized in-memory table produced by ingestion.

    Rows are positional and aligned to ``headers``.
    """
    headers: Tuple[str, ...]
    rows: Tuple[Tuple[Any, ...], ...]
    source_name: Optional[str] = None

    def __post_init__(self):
        headers = tuple(self.headers)
        rows = tuple(tuple(row) for row in self.rows)

        if len(set(headers)) != len(headers):
            duplicates = sorted({h for h in headers if headers.count(h) > 1})
            raise ValueError(f"Duplicate column names: {', '.join(duplicates)}")

        width = len(headers)
        for index, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(
                    f"Row {index} has {len(row)} values, expected {width}"
                )

        object.__setattr__(self, "headers", headers)
        object.__setattr__(self, "rows", rows)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.headers)

    def column_values(self, column: str) -> List[Any]:
        """Get all values of a column in row order."""
        index = self.headers.index(column)
        return [row[index] for row in self.rows]

    def distinct_count(self, column: str) -> int:
        """Count distinct non-missing values of a column."""
        return len({
            _hashable(value) for value in self.column_values(column)
            if not is_missing(value)
        })

    def missing_count(self, column: str) -> int:
        """Count missing values of a column."""
        return sum(1 for value in self.column_values(column) if is_missing(value))


def _hashable(value: Any) -> Any:
    # JSON cells may hold lists or dicts
    if isinstance(value, (list, dict)):
        return json.dumps(value, sort_keys=True, default=str)
    return value


@dataclass(frozen=True)
class KPIRecommendation:
    """A suggested KPI card."""
    metric: str
    description: str
    calculation: str
    importance: Importance
    card_type: CardType
    columns: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "metric": self.metric,
            "description": self.description,
            "calculation": self.calculation,
            "importance": self.importance.value,
            "cardType": self.card_type.value,
            "columns": list(self.columns),
        }


@dataclass(frozen=True)
class ChartRecommendation:
    """A suggested visualization with axes and a priority rank."""
    type: ChartType
    title: str
    description: str
    x_axis: str
    y_axis: Union[str, Tuple[str, ...]]
    aggregation: Aggregation
    reasoning: str
    priority: int = 0
    group_by: Optional[str] = None

    @property
    def y_axis_label(self) -> str:
        if isinstance(self.y_axis, tuple):
            return ", ".join(self.y_axis)
        return self.y_axis

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "type": self.type.value,
            "title": self.title,
            "description": self.description,
            "xAxis": self.x_axis,
            "yAxis": list(self.y_axis) if isinstance(self.y_axis, tuple) else self.y_axis,
            "aggregation": self.aggregation.value,
            "reasoning": self.reasoning,
            "priority": self.priority,
        }
        if self.group_by is not None:
            data["groupBy"] = self.group_by
        return data


@dataclass(frozen=True)
class DashboardSection:
    """A block of the dashboard layout."""
    title: str
    type: SectionType
    position: int
    description: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "type": self.type.value,
            "position": self.position,
            "description": self.description,
        }


@dataclass(frozen=True)
class FilterRecommendation:
    """An interactive filter bound to one column."""
    column: str
    type: FilterType
    priority: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "column": self.column,
            "type": self.type.value,
            "priority": self.priority,
        }


@dataclass(frozen=True)
class DashboardStructure:
    """Layout, ordered sections and priority-sorted filters."""
    layout: LayoutType
    sections: Tuple[DashboardSection, ...] = ()
    filters: Tuple[FilterRecommendation, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "layout": self.layout.value,
            "sections": [s.to_dict() for s in self.sections],
            "filters": [f.to_dict() for f in self.filters],
        }


@dataclass(frozen=True)
class DataQualityIssue:
    """Represents an advisory data quality finding."""
    column: Optional[str]
    issue_type: str
    severity: DataQualitySeverity
    description: str


@dataclass(frozen=True)
class DataInsights:
    """
    Complete analytical plan for one dataset.

    Created once per analysis call and never mutated afterwards.
    """
    business_context: BusinessDomain
    key_metrics: Tuple[KPIRecommendation, ...]
    chart_recommendations: Tuple[ChartRecommendation, ...]
    analytical_insights: Tuple[str, ...]
    dashboard_structure: DashboardStructure
    data_quality_issues: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        """Convert insights to the camelCase contract shape."""
        return {
            "businessContext": self.business_context.value,
            "keyMetrics": [k.to_dict() for k in self.key_metrics],
            "chartRecommendations": [c.to_dict() for c in self.chart_recommendations],
            "analyticalInsights": list(self.analytical_insights),
            "dashboardStructure": self.dashboard_structure.to_dict(),
            "dataQualityIssues": list(self.data_quality_issues),
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert insights to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, default=str)


@dataclass(frozen=True)
class SchemaFingerprint:
    """Column names and type values used as the similarity key."""
    column_names: Tuple[str, ...]
    column_types: Tuple[str, ...]

    @classmethod
    def from_columns(
        cls,
        columns: List[str],
        types: Dict[str, Any],
    ) -> "SchemaFingerprint":
        type_values = [
            t.value if isinstance(t, ColumnType) else str(t)
            for t in types.values()
        ]
        return cls(column_names=tuple(columns), column_types=tuple(type_values))

    def to_dict(self) -> Dict[str, Any]:
        return {"columns": list(self.column_names), "types": list(self.column_types)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SchemaFingerprint":
        types = data.get("types", [])
        # Older records kept types as a column -> type mapping
        if isinstance(types, dict):
            types = list(types.values())
        return cls(
            column_names=tuple(data.get("columns", [])),
            column_types=tuple(types),
        )


@dataclass(frozen=True)
class PatternRecord:
    """Stored outcome of a past generation, keyed by dataset schema."""
    id: str
    schema_fingerprint: SchemaFingerprint
    original_intent: str
    successful_elements: Tuple[str, ...] = ()
    common_mistakes: Tuple[str, ...] = ()
    best_practices: Tuple[str, ...] = ()
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "schemaFingerprint": self.schema_fingerprint.to_dict(),
            "originalIntent": self.original_intent,
            "successfulElements": list(self.successful_elements),
            "commonMistakes": list(self.common_mistakes),
            "bestPractices": list(self.best_practices),
            "createdAt": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class PatternMatch:
    """A retrieved pattern record and its schema similarity."""
    record: PatternRecord
    similarity: float
