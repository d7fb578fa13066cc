"""
Structure Planner

Lays out the dashboard: which sections appear in which order, which
filters to offer and whether to use a grid layout.
"""

from typing import Dict, List, Optional, Tuple

from dashgen.config import ReasoningConfig
from dashgen.core.columns import category_columns, date_columns, numeric_columns
from dashgen.core.models import (
    ColumnType,
    DashboardSection,
    DashboardStructure,
    Dataset,
    FilterRecommendation,
    FilterType,
    LayoutType,
    SectionType,
)

DATE_FILTER_PRIORITY = 10
CATEGORY_FILTER_TOP_PRIORITY = 9


class StructurePlanner:
    """Plans sections, filters and layout for a dashboard."""

    def __init__(self, config: Optional[ReasoningConfig] = None):
        self.config = config or ReasoningConfig()

    def plan(
        self,
        dataset: Dataset,
        column_types: Dict[str, ColumnType],
    ) -> DashboardStructure:
        """
        Plan the dashboard structure.

        Args:
            dataset: Ingested dataset
            column_types: Inferred type per column

        Returns:
            Dashboard structure with positioned sections and sorted filters
        """
        numeric = numeric_columns(column_types)

        if len(numeric) > self.config.grid_min_numeric_columns:
            layout = LayoutType.GRID
        else:
            layout = LayoutType.TWO_COLUMN

        return DashboardStructure(
            layout=layout,
            sections=tuple(self._plan_sections(dataset, column_types)),
            filters=tuple(self._plan_filters(dataset, column_types)),
        )

    def _plan_sections(
        self,
        dataset: Dataset,
        column_types: Dict[str, ColumnType],
    ) -> List[DashboardSection]:
        blocks: List[Tuple[str, SectionType, str]] = [
            ("Key Performance Indicators", SectionType.KPI_ROW,
             "High-level metrics and performance indicators"),
        ]

        if date_columns(column_types):
            blocks.append(("Trends & Time Analysis", SectionType.TREND_ANALYSIS,
                           "Time-based trends and historical analysis"))

        blocks.append(("Analytical Charts", SectionType.CHART_GRID,
                       "Detailed charts and visualizations"))

        if dataset.column_count > self.config.detailed_table_min_columns:
            blocks.append(("Detailed Data", SectionType.DETAILED_TABLE,
                           "Comprehensive data table with filtering"))

        return [
            DashboardSection(title=title, type=kind, position=position, description=description)
            for position, (title, kind, description) in enumerate(blocks, start=1)
        ]

    def _plan_filters(
        self,
        dataset: Dataset,
        column_types: Dict[str, ColumnType],
    ) -> List[FilterRecommendation]:
        filters: List[FilterRecommendation] = []

        dates = date_columns(column_types)
        if dates:
            filters.append(FilterRecommendation(
                column=dates[0],
                type=FilterType.DATE_RANGE,
                priority=DATE_FILTER_PRIORITY,
            ))

        categories = category_columns(column_types)[:self.config.max_category_filters]
        for index, col in enumerate(categories):
            if dataset.distinct_count(col) <= self.config.dropdown_max_values:
                filter_type = FilterType.DROPDOWN
            else:
                filter_type = FilterType.SEARCH
            filters.append(FilterRecommendation(
                column=col,
                type=filter_type,
                priority=CATEGORY_FILTER_TOP_PRIORITY - index,
            ))

        return sorted(filters, key=lambda f: f.priority, reverse=True)
