"""
Prompt Templates for Dashboard Generation

Contains the text blocks used to turn a data analysis into instructions
for the code-generating model.
"""

from typing import Dict, List, Any, Optional, Sequence
from dataclasses import dataclass

from dashgen.core.models import (
    ChartRecommendation,
    ColumnType,
    DashboardSection,
    Dataset,
    FilterRecommendation,
    KPIRecommendation,
    is_missing,
)


@dataclass
class PromptTemplates:
    """Collection of prompt templates for dashboard generation."""

    ANALYSIS_HEADER = "## INTELLIGENT DATA ANALYSIS"

    BUSINESS_CONTEXT = "**Business Context**: {description}"

    KPI_HEADER = "**Recommended KPIs** (implement these as metric cards):"

    CHART_HEADER = "**Recommended Charts** (implement these visualizations):"

    STRUCTURE_HEADER = "**Dashboard Structure** ({layout} layout):"

    FILTER_HEADER = "**Recommended Filters**:"

    INSIGHT_HEADER = "**Key Insights**:"

    QUALITY_HEADER = "**Data Quality Notes**:"

    COLUMN_HEADER = "**Column Details**:"

    MEMORY_INTRO = "Based on similar dashboards created before, here are some recommendations:"

    MEMORY_SUCCESS_HEADER = "Recommended components that work well with similar data:"

    MEMORY_MISTAKE_HEADER = "Common issues to avoid:"

    MEMORY_PRACTICE_HEADER = "Best practices for this type of data:"

    MEMORY_CLOSING = "Please incorporate these learnings into your dashboard design."

    # Contract the generated code must satisfy
    IMPLEMENTATION_CONTRACT = """**Implementation Instructions**:
- Use the exact column names from the data: {columns}
- Never rename, abbreviate or invent columns; match names exactly, including case
- Load the data defensively: check that arrays exist and are non-empty before mapping
- Handle missing or malformed values without crashing and show an error state when loading fails
- Include loading states and error handling
- Implement responsive design with proper spacing
- Add interactive elements like hover effects and tooltips
- Use appropriate color schemes for data visualization"""

    CLOSING = (
        "Please create a comprehensive dashboard that implements these intelligent "
        "recommendations based on the data analysis."
    )

    @classmethod
    def format_kpis(cls, kpis: Sequence[KPIRecommendation]) -> str:
        lines = [cls.KPI_HEADER]
        for index, kpi in enumerate(kpis, start=1):
            lines.append(
                f"{index}. **{kpi.metric}**: {kpi.description} "
                f"({kpi.card_type.value} format, {kpi.calculation})"
            )
        return "\n".join(lines)

    @classmethod
    def format_charts(cls, charts: Sequence[ChartRecommendation]) -> str:
        lines = [cls.CHART_HEADER]
        for index, chart in enumerate(charts, start=1):
            lines.append(f"{index}. **{chart.type.value.upper()} Chart**: {chart.title}")
            axes = f"   - X-axis: {chart.x_axis}, Y-axis: {chart.y_axis_label}"
            if chart.group_by:
                axes += f", Group by: {chart.group_by}"
            lines.append(axes + f" ({chart.aggregation.value})")
            lines.append(f"   - Reasoning: {chart.reasoning}")
        return "\n".join(lines)

    @classmethod
    def format_sections(cls, layout: str, sections: Sequence[DashboardSection]) -> str:
        lines = [cls.STRUCTURE_HEADER.format(layout=layout)]
        for section in sections:
            lines.append(f"{section.position}. {section.title}: {section.description}")
        return "\n".join(lines)

    @classmethod
    def format_filters(cls, filters: Sequence[FilterRecommendation]) -> str:
        lines = [cls.FILTER_HEADER]
        lines.extend(f"- {f.column} ({f.type.value})" for f in filters)
        return "\n".join(lines)

    @staticmethod
    def format_bullets(header: str, items: Sequence[str]) -> str:
        return "\n".join([header] + [f"- {item}" for item in items])

    @classmethod
    def format_column_details(
        cls,
        dataset: Dataset,
        column_types: Dict[str, ColumnType],
        samples_per_column: int = 3,
    ) -> str:
        """Each column with its type and a few sample values."""
        lines = [cls.COLUMN_HEADER]
        for header in dataset.headers:
            col_type = column_types.get(header, ColumnType.UNKNOWN).value
            values = dataset.column_values(header)
            samples = [
                str(v) for v in values[:samples_per_column] if not is_missing(v)
            ]
            more = "..." if len(values) > samples_per_column else ""
            lines.append(f"- {header} ({col_type}): {', '.join(samples)}{more}")
        return "\n".join(lines)

    @classmethod
    def format_memory(
        cls,
        successful_elements: List[str],
        mistakes: List[str],
        best_practices: List[str],
    ) -> Optional[str]:
        """Learnings from similar past dashboards, or None when there are none."""
        blocks = []
        if successful_elements:
            blocks.append(cls.format_bullets(cls.MEMORY_SUCCESS_HEADER, successful_elements))
        if mistakes:
            blocks.append(cls.format_bullets(cls.MEMORY_MISTAKE_HEADER, mistakes))
        if best_practices:
            blocks.append(cls.format_bullets(cls.MEMORY_PRACTICE_HEADER, best_practices))
        if not blocks:
            return None
        return "\n\n".join([cls.MEMORY_INTRO] + blocks + [cls.MEMORY_CLOSING])

    @classmethod
    def format_contract(cls, headers: Sequence[str]) -> str:
        return cls.IMPLEMENTATION_CONTRACT.format(columns=", ".join(headers))
