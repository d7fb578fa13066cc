"""End-to-end tests for the data reasoning engine."""

import dataclasses
import json

import pytest

from dashgen.config import DashGenConfig, ReasoningConfig
from dashgen.core.models import BusinessDomain, ChartType, LayoutType
from dashgen.core.reasoning import GENERAL_FOCUS, DataReasoningEngine, summarize
from dashgen.core.type_inference import TypeInferencer

from tests.conftest import build_sales_dataset, make_dataset


@pytest.fixture
def engine():
    return DataReasoningEngine()


def test_sales_scenario(engine, sales_dataset):
    insights = engine.analyze(sales_dataset)

    assert insights.business_context == BusinessDomain.SALES_COMMERCE
    assert insights.key_metrics[0].metric == "Total Revenue"
    assert insights.chart_recommendations[0].type == ChartType.LINE
    assert insights.chart_recommendations[0].priority == 10
    assert insights.chart_recommendations[1].type == ChartType.PIE
    assert insights.dashboard_structure.layout == LayoutType.TWO_COLUMN
    assert insights.data_quality_issues == ()


def test_many_regions_flip_pie_to_bar(engine):
    insights = engine.analyze(build_sales_dataset(region_count=12))

    types = [c.type for c in insights.chart_recommendations]
    assert ChartType.PIE not in types
    assert types[1] == ChartType.BAR


def test_small_dataset_is_reported(engine):
    insights = engine.analyze(build_sales_dataset(row_count=5))

    assert any("very small" in issue for issue in insights.data_quality_issues)


def test_analytical_insights(engine, sales_dataset):
    insights = engine.analyze(sales_dataset)

    assert insights.analytical_insights == (
        "Dataset contains 30 records across 3 dimensions",
        "1 numeric columns available for quantitative analysis",
        "1 date columns enable time-series and trend analysis",
        "1 categorical columns provide grouping and segmentation opportunities",
        "Sales data detected - focus on revenue trends, customer segments, and product performance",
    )


def test_general_focus_and_rich_numeric_note(engine):
    dataset = make_dataset({f"m{i}": [str(i), str(i + 1)] for i in range(6)})

    insights = engine.analyze(dataset).analytical_insights

    assert GENERAL_FOCUS in insights
    assert insights[-1].startswith("Rich numeric data")


def test_precomputed_types_are_used(engine, sales_dataset):
    types = TypeInferencer().infer(sales_dataset)

    assert engine.analyze(sales_dataset, types) == engine.analyze(sales_dataset)


def test_insights_are_immutable(engine, sales_dataset):
    insights = engine.analyze(sales_dataset)

    with pytest.raises(dataclasses.FrozenInstanceError):
        insights.business_context = BusinessDomain.MARKETING


def test_to_json_contract_shape(engine, sales_dataset):
    data = json.loads(engine.analyze(sales_dataset).to_json())

    assert set(data) == {
        "businessContext",
        "keyMetrics",
        "chartRecommendations",
        "analyticalInsights",
        "dashboardStructure",
        "dataQualityIssues",
    }
    assert data["businessContext"] == "sales-commerce"
    assert data["chartRecommendations"][1]["type"] == "pie"


def test_configured_thresholds():
    config = DashGenConfig(reasoning=ReasoningConfig(pie_max_categories=2))

    insights = DataReasoningEngine(config).analyze(build_sales_dataset(region_count=3))

    assert insights.chart_recommendations[1].type == ChartType.BAR


def test_summarize(sales_dataset):
    types = TypeInferencer().infer(sales_dataset)

    summary = summarize(sales_dataset, types)

    assert summary.startswith("Dataset contains 30 rows and 3 columns.")
    assert "Columns: date, region, revenue" in summary
    assert "- 1 integer column(s)" in summary
    assert "- 1 date columns for time-series analysis" in summary
