"""
Chart Recommender

Proposes ranked chart specifications. Candidates are generated in rule
order, then ranked once: earlier candidates always outrank later ones.
"""

from dataclasses import replace
from typing import Dict, List, Optional
import logging

from dashgen.config import ReasoningConfig
from dashgen.core.columns import (
    appropriate_aggregation,
    category_columns,
    date_columns,
    format_column_name,
    numeric_columns,
)
from dashgen.core.models import (
    Aggregation,
    ChartRecommendation,
    ChartType,
    ColumnType,
    Dataset,
)

logger = logging.getLogger(__name__)

TOP_PRIORITY = 10


def assign_priorities(
    candidates: List[ChartRecommendation],
    top_priority: int = TOP_PRIORITY,
) -> List[ChartRecommendation]:
    """Rank candidates by generation order and sort by priority descending."""
    ranked = [
        replace(chart, priority=top_priority - index)
        for index, chart in enumerate(candidates)
    ]
    return sorted(ranked, key=lambda c: c.priority, reverse=True)


class ChartRecommender:
    """Builds chart recommendations from the typed dataset."""

    def __init__(self, config: Optional[ReasoningConfig] = None):
        self.config = config or ReasoningConfig()

    def recommend(
        self,
        dataset: Dataset,
        column_types: Dict[str, ColumnType],
    ) -> List[ChartRecommendation]:
        """
        Recommend charts.

        Args:
            dataset: Ingested dataset, used for category cardinality
            column_types: Inferred type per column

        Returns:
            Charts sorted by priority, highest first
        """
        numeric = numeric_columns(column_types)
        dates = date_columns(column_types)
        categories = category_columns(column_types)
        candidates: List[ChartRecommendation] = []

        # Time series
        if dates and numeric:
            for col in numeric[:self.config.max_line_charts]:
                candidates.append(ChartRecommendation(
                    type=ChartType.LINE,
                    title=f"{format_column_name(col)} Trend Over Time",
                    description=f"Track {col.lower()} changes over time",
                    x_axis=dates[0],
                    y_axis=col,
                    aggregation=appropriate_aggregation(col),
                    reasoning="Time series data is best visualized with line charts to show trends",
                ))

        # Category distribution
        if categories and numeric:
            category = categories[0]
            value = numeric[0]
            if dataset.distinct_count(category) <= self.config.pie_max_categories:
                candidates.append(ChartRecommendation(
                    type=ChartType.PIE,
                    title=f"{format_column_name(value)} by {format_column_name(category)}",
                    description=f"Distribution of {value.lower()} across {category.lower()} categories",
                    x_axis=category,
                    y_axis=value,
                    aggregation=appropriate_aggregation(value),
                    reasoning="Pie charts work well for showing distribution across a small number of categories",
                ))
            else:
                candidates.append(ChartRecommendation(
                    type=ChartType.BAR,
                    title=f"Top {format_column_name(category)} by {format_column_name(value)}",
                    description=f"Compare {value.lower()} across {category.lower()}",
                    x_axis=category,
                    y_axis=value,
                    aggregation=appropriate_aggregation(value),
                    reasoning="Bar charts are ideal for comparing values across many categories",
                ))

        # Correlation
        if len(numeric) >= 2:
            first, second = numeric[0], numeric[1]
            candidates.append(ChartRecommendation(
                type=ChartType.SCATTER,
                title=f"{format_column_name(first)} vs {format_column_name(second)}",
                description=f"Explore correlation between {first.lower()} and {second.lower()}",
                x_axis=first,
                y_axis=second,
                aggregation=Aggregation.SUM,
                reasoning="Scatter plots reveal relationships and correlations between numeric variables",
            ))

        # Distribution
        if numeric:
            col = numeric[0]
            candidates.append(ChartRecommendation(
                type=ChartType.HISTOGRAM,
                title=f"{format_column_name(col)} Distribution",
                description=f"Show the distribution pattern of {col.lower()} values",
                x_axis=col,
                y_axis="frequency",
                aggregation=Aggregation.COUNT,
                reasoning="Histograms help understand the distribution and patterns in numeric data",
            ))

        # Multi-dimensional
        if len(categories) >= 2 and numeric:
            value = numeric[0]
            first, second = categories[0], categories[1]
            candidates.append(ChartRecommendation(
                type=ChartType.BAR,
                title=(
                    f"{format_column_name(value)} by {format_column_name(first)} "
                    f"and {format_column_name(second)}"
                ),
                description=f"Multi-dimensional analysis of {value.lower()}",
                x_axis=first,
                y_axis=value,
                group_by=second,
                aggregation=appropriate_aggregation(value),
                reasoning="Grouped bar charts show relationships across multiple categorical dimensions",
            ))

        charts = assign_priorities(candidates)
        logger.debug(f"Recommended {len(charts)} charts")
        return charts
