"""
Outcome extraction

Turns generated dashboard code and runtime error messages into the short
strings kept in pattern records.
"""

from typing import Callable, Iterable, List, Tuple

# (predicate over the generated code, element label)
ELEMENT_RULES: List[Tuple[Callable[[str], bool], str]] = [
    (lambda c: "LineChart" in c, "Line charts for trends"),
    (lambda c: "BarChart" in c, "Bar charts for comparisons"),
    (lambda c: "PieChart" in c, "Pie charts for distributions"),
    (lambda c: "AreaChart" in c, "Area charts for cumulative data"),
    (lambda c: "ScatterChart" in c, "Scatter plots for correlations"),
    (lambda c: "Card" in c and "metric" in c, "Metric cards for KPIs"),
    (lambda c: "Select" in c and "filter" in c, "Dropdown filters"),
    (lambda c: "DatePicker" in c or "date" in c, "Date range selectors"),
    (lambda c: "Grid" in c or "grid" in c, "Grid layouts"),
    (lambda c: "responsive" in c, "Responsive design patterns"),
    (lambda c: "aggregate" in c or "group" in c, "Data aggregation"),
    (lambda c: "sort" in c or "filter" in c, "Data filtering and sorting"),
    (lambda c: "useState" in c and "filter" in c, "Interactive filtering"),
]

# (predicate over one error message, mistake label)
MISTAKE_RULES: List[Tuple[Callable[[str], bool], str]] = [
    (lambda e: "undefined" in e and "map" in e, "Check data arrays before mapping"),
    (lambda e: "Cannot read property" in e and "data" in e, "Validate data structure before use"),
    (lambda e: "ResponsiveContainer" in e, "Wrap charts in ResponsiveContainer"),
    (lambda e: "dataKey" in e, "Verify dataKey matches actual column names"),
    (lambda e: "height" in e or "width" in e, "Set explicit dimensions for charts"),
]


def extract_successful_elements(code: str) -> List[str]:
    """Components and patterns present in a working dashboard."""
    return [label for matches, label in ELEMENT_RULES if matches(code)]


def extract_common_mistakes(errors: Iterable[str]) -> List[str]:
    """Lessons learned from error messages, deduplicated in first-seen order."""
    mistakes: List[str] = []
    for error in errors:
        for matches, label in MISTAKE_RULES:
            if matches(error) and label not in mistakes:
                mistakes.append(label)
    return mistakes
