"""
Prompt Synthesizer

Merges a dataset's insights, its exact headers and the learnings of
similar past generations into one instruction block for the
code-generating model.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from dashgen.config import PromptConfig
from dashgen.core.domain_classifier import DomainClassifier
from dashgen.core.models import ColumnType, DataInsights, Dataset, PatternRecord
from dashgen.inference.prompts import PromptTemplates


@dataclass(frozen=True)
class SynthesizedPrompt:
    """Instruction text plus the headers the generated code must use verbatim."""
    text: str
    headers: Tuple[str, ...]


def _first_unique(items, limit: int) -> List[str]:
    return list(dict.fromkeys(items))[:limit]


class PromptSynthesizer:
    """Pure prompt construction; no I/O and no state between calls."""

    def __init__(self, config: Optional[PromptConfig] = None):
        self.config = config or PromptConfig()

    def collect_learnings(self, patterns: Sequence[PatternRecord]) -> Dict[str, List[str]]:
        """Deduplicated learnings across patterns, in first-seen order."""
        return {
            "successful_elements": _first_unique(
                (e for p in patterns for e in p.successful_elements),
                self.config.max_successful_elements,
            ),
            "common_mistakes": _first_unique(
                (m for p in patterns for m in p.common_mistakes),
                self.config.max_mistakes,
            ),
            "best_practices": _first_unique(
                (b for p in patterns for b in p.best_practices),
                self.config.max_best_practices,
            ),
        }

    def synthesize(
        self,
        user_prompt: str,
        insights: DataInsights,
        headers: Sequence[str],
        patterns: Sequence[PatternRecord] = (),
        column_types: Optional[Dict[str, ColumnType]] = None,
        dataset: Optional[Dataset] = None,
    ) -> SynthesizedPrompt:
        """
        Build the instruction payload.

        Args:
            user_prompt: The user's raw request
            insights: Analysis of the uploaded dataset
            headers: Exact column names of the dataset
            patterns: Records retrieved from pattern memory
            column_types: Inferred types, used for column details
            dataset: Dataset, used for column sample values

        Returns:
            Synthesized prompt text and the exact headers
        """
        templates = PromptTemplates
        structure = insights.dashboard_structure
        blocks = [
            user_prompt,
            templates.ANALYSIS_HEADER,
            templates.BUSINESS_CONTEXT.format(
                description=DomainClassifier.describe(insights.business_context)
            ),
            templates.format_kpis(insights.key_metrics[:self.config.max_kpis]),
            templates.format_charts(insights.chart_recommendations[:self.config.max_charts]),
            templates.format_sections(structure.layout.value, structure.sections),
        ]

        if structure.filters:
            blocks.append(templates.format_filters(structure.filters[:self.config.max_filters]))

        blocks.append(templates.format_bullets(templates.INSIGHT_HEADER, insights.analytical_insights))

        if insights.data_quality_issues:
            blocks.append(templates.format_bullets(templates.QUALITY_HEADER, insights.data_quality_issues))

        if self.config.include_column_details and dataset is not None and column_types:
            blocks.append(templates.format_column_details(
                dataset, column_types, self.config.sample_values_per_column
            ))

        learnings = self.collect_learnings(patterns)
        memory_block = templates.format_memory(
            learnings["successful_elements"],
            learnings["common_mistakes"],
            learnings["best_practices"],
        )
        if memory_block:
            blocks.append(memory_block)

        blocks.append(templates.format_contract(headers))
        blocks.append(templates.CLOSING)

        return SynthesizedPrompt(text="\n\n".join(blocks), headers=tuple(headers))
