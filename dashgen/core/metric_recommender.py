"""
Metric Recommender

Proposes KPI cards from the column names and inferred types.
"""

from typing import Dict, List, Optional
import logging

from dashgen.config import ReasoningConfig
from dashgen.core.columns import (
    date_columns,
    find_columns_by_keywords,
    format_column_name,
    numeric_columns,
)
from dashgen.core.models import (
    CardType,
    ColumnType,
    Importance,
    KPIRecommendation,
)

logger = logging.getLogger(__name__)

REVENUE_KEYWORDS = ("revenue", "sales", "income", "earnings")
CONVERSION_KEYWORDS = ("conversion", "success", "completed")


class MetricRecommender:
    """Builds the KPI card list, most important first."""

    def __init__(self, config: Optional[ReasoningConfig] = None):
        self.config = config or ReasoningConfig()

    def recommend(self, column_types: Dict[str, ColumnType]) -> List[KPIRecommendation]:
        """
        Recommend KPI cards.

        Args:
            column_types: Inferred type per column, in header order

        Returns:
            KPIs sorted by importance; ties keep construction order
        """
        headers = list(column_types)
        numeric = numeric_columns(column_types)
        dates = date_columns(column_types)
        metrics: List[KPIRecommendation] = []

        revenue_columns = find_columns_by_keywords(headers, REVENUE_KEYWORDS)
        for col in revenue_columns:
            name = format_column_name(col)
            metrics.append(KPIRecommendation(
                metric=f"Total {name}",
                description=f"Sum of all {col.lower()} values",
                calculation=f"SUM({col})",
                importance=Importance.HIGH,
                card_type=CardType.CURRENCY,
                columns=(col,),
            ))

            if dates:
                metrics.append(KPIRecommendation(
                    metric=f"{name} Growth",
                    description=f"Month-over-month growth in {col.lower()}",
                    calculation=(
                        f"((Current Month {col} - Previous Month {col}) "
                        f"/ Previous Month {col}) * 100"
                    ),
                    importance=Importance.HIGH,
                    card_type=CardType.PERCENTAGE,
                    columns=(col, dates[0]),
                ))

        metrics.append(KPIRecommendation(
            metric="Total Records",
            description="Total number of data entries",
            calculation="COUNT(*)",
            importance=Importance.MEDIUM,
            card_type=CardType.NUMBER,
            columns=(),
        ))

        unused = [c for c in numeric if c not in revenue_columns]
        for col in unused[:self.config.max_average_kpis]:
            metrics.append(KPIRecommendation(
                metric=f"Average {format_column_name(col)}",
                description=f"Mean value of {col.lower()}",
                calculation=f"AVG({col})",
                importance=Importance.MEDIUM,
                card_type=CardType.NUMBER,
                columns=(col,),
            ))

        conversion_columns = find_columns_by_keywords(headers, CONVERSION_KEYWORDS)
        if conversion_columns:
            metrics.append(KPIRecommendation(
                metric="Conversion Rate",
                description="Percentage of successful conversions",
                calculation=f"(SUM({conversion_columns[0]}) / COUNT(*)) * 100",
                importance=Importance.HIGH,
                card_type=CardType.PERCENTAGE,
                columns=tuple(conversion_columns),
            ))

        # sorted() is stable, so equal importance keeps construction order
        metrics = sorted(metrics, key=lambda k: k.importance.rank, reverse=True)
        logger.debug(f"Recommended {len(metrics)} KPIs")
        return metrics
