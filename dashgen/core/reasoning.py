"""
Data Reasoning Engine

Runs every analysis stage over one typed dataset and assembles the
immutable ``DataInsights`` plan.
"""

from collections import Counter
from typing import Dict, List, Optional
import logging

from dashgen.config import DashGenConfig
from dashgen.core.chart_recommender import ChartRecommender
from dashgen.core.columns import category_columns, date_columns, numeric_columns
from dashgen.core.domain_classifier import DomainClassifier
from dashgen.core.metric_recommender import MetricRecommender
from dashgen.core.models import BusinessDomain, ColumnType, DataInsights, Dataset
from dashgen.core.quality_auditor import QualityAuditor
from dashgen.core.structure_planner import StructurePlanner
from dashgen.core.type_inference import TypeInferencer

logger = logging.getLogger(__name__)

DOMAIN_FOCUS = {
    BusinessDomain.SALES_COMMERCE:
        "Sales data detected - focus on revenue trends, customer segments, and product performance",
    BusinessDomain.WEB_ANALYTICS:
        "Web analytics data - emphasize user behavior, conversion funnels, and traffic sources",
    BusinessDomain.HUMAN_RESOURCES:
        "HR data identified - highlight workforce metrics, performance trends, and departmental analysis",
    BusinessDomain.MARKETING:
        "Marketing data found - prioritize campaign performance, ROI analysis, and audience insights",
}
GENERAL_FOCUS = "General business data - recommend comprehensive overview with key metrics and trends"


class DataReasoningEngine:
    """
    Produces a dashboard plan for a dataset.

    The stages run sequentially and independently over the same typed
    dataset:
    1. Business domain classification
    2. KPI recommendation
    3. Chart recommendation
    4. Analytical insights
    5. Dashboard structure planning
    6. Data quality audit
    """

    def __init__(self, config: Optional[DashGenConfig] = None):
        """
        Initialize the engine and its stages.

        Args:
            config: DashGen configuration
        """
        self.config = config or DashGenConfig()
        reasoning = self.config.reasoning

        self.type_inferencer = TypeInferencer(sample_size=reasoning.type_sample_size)
        self.domain_classifier = DomainClassifier()
        self.metric_recommender = MetricRecommender(reasoning)
        self.chart_recommender = ChartRecommender(reasoning)
        self.structure_planner = StructurePlanner(reasoning)
        self.quality_auditor = QualityAuditor(reasoning)

    def analyze(
        self,
        dataset: Dataset,
        column_types: Optional[Dict[str, ColumnType]] = None,
    ) -> DataInsights:
        """
        Analyze a dataset.

        Args:
            dataset: Ingested dataset
            column_types: Previously inferred types; inferred when omitted

        Returns:
            Complete data insights
        """
        if column_types is None:
            column_types = self.type_inferencer.infer(dataset)

        logger.info(f"Analyzing {dataset.source_name or 'dataset'}...")

        business_context = self.domain_classifier.classify(dataset.headers)
        key_metrics = self.metric_recommender.recommend(column_types)
        charts = self.chart_recommender.recommend(dataset, column_types)
        insights = self.generate_analytical_insights(dataset, column_types, business_context)
        structure = self.structure_planner.plan(dataset, column_types)
        issues = self.quality_auditor.audit(dataset, column_types)

        logger.info(
            f"Analysis complete: {business_context.value}, {len(key_metrics)} KPIs, "
            f"{len(charts)} charts, {len(issues)} quality issues"
        )

        return DataInsights(
            business_context=business_context,
            key_metrics=tuple(key_metrics),
            chart_recommendations=tuple(charts),
            analytical_insights=tuple(insights),
            dashboard_structure=structure,
            data_quality_issues=tuple(issue.description for issue in issues),
        )

    def generate_analytical_insights(
        self,
        dataset: Dataset,
        column_types: Dict[str, ColumnType],
        business_context: BusinessDomain,
    ) -> List[str]:
        """Plain-language observations about the dataset's shape."""
        insights = [
            f"Dataset contains {dataset.row_count} records across {dataset.column_count} dimensions"
        ]

        numeric = numeric_columns(column_types)
        dates = date_columns(column_types)
        categories = category_columns(column_types)

        if numeric:
            insights.append(f"{len(numeric)} numeric columns available for quantitative analysis")
        if dates:
            insights.append(f"{len(dates)} date columns enable time-series and trend analysis")
        if categories:
            insights.append(
                f"{len(categories)} categorical columns provide grouping and segmentation opportunities"
            )

        insights.append(DOMAIN_FOCUS.get(business_context, GENERAL_FOCUS))

        if len(numeric) > 5:
            insights.append(
                "Rich numeric data suggests opportunity for advanced analytics and correlation analysis"
            )

        return insights


def summarize(dataset: Dataset, column_types: Dict[str, ColumnType]) -> str:
    """Render a short text summary of a dataset's shape and types."""
    lines = [
        f"Dataset contains {dataset.row_count} rows and {dataset.column_count} columns.",
        "",
        f"Columns: {', '.join(dataset.headers)}",
        "",
        "Data types:",
    ]

    distribution = Counter(t.value for t in column_types.values())
    for type_name, count in distribution.items():
        lines.append(f"- {count} {type_name} column(s)")

    lines.append("")
    lines.append("Key insights:")

    numeric = numeric_columns(column_types)
    dates = date_columns(column_types)
    categories = category_columns(column_types)
    if numeric:
        lines.append(f"- {len(numeric)} numeric columns suitable for charts and metrics")
    if dates:
        lines.append(f"- {len(dates)} date columns for time-series analysis")
    if categories:
        lines.append(f"- {len(categories)} categorical columns for grouping and filtering")

    return "\n".join(lines)
