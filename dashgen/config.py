"""
Configuration management for DashGen.

Handles all configuration options including ingestion, the reasoning
heuristics, pattern memory storage and prompt synthesis limits.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List
import os
import yaml


@dataclass
class IngestionConfig:
    """File ingestion configuration."""
    supported_extensions: List[str] = field(
        default_factory=lambda: ["csv", "json", "xlsx", "xls"]
    )
    csv_encodings: List[str] = field(
        default_factory=lambda: ["utf-8-sig", "latin-1"]
    )


@dataclass
class ReasoningConfig:
    """Thresholds used by the recommendation heuristics."""
    type_sample_size: int = 100  # Non-empty values sampled per column
    pie_max_categories: int = 8  # More categories switch pie -> bar
    dropdown_max_values: int = 20  # More values switch dropdown -> search
    max_category_filters: int = 3
    max_line_charts: int = 2
    max_average_kpis: int = 3
    detailed_table_min_columns: int = 8  # Strictly more columns adds a table
    grid_min_numeric_columns: int = 4  # Strictly more numeric columns uses a grid
    missing_value_threshold: float = 0.1  # 10% missing triggers warning
    missing_value_critical: float = 0.5  # 50% missing triggers critical
    high_cardinality_ratio: float = 0.8
    min_rows: int = 10  # Fewer rows triggers small-dataset warning


@dataclass
class MemoryConfig:
    """Pattern memory configuration."""
    enabled: bool = True
    database_url: Optional[str] = None
    window_days: int = 30
    fetch_limit: int = 20
    top_k: int = 5
    min_similarity: float = 0.3
    column_weight: float = 0.7
    type_weight: float = 0.3

    def __post_init__(self):
        if not self.database_url:
            self.database_url = os.environ.get(
                "DASHGEN_MEMORY_URL", "sqlite:///./.dashgen_memory.db"
            )


@dataclass
class PromptConfig:
    """Limits applied when synthesizing the instruction prompt."""
    max_kpis: int = 4
    max_charts: int = 4
    max_filters: int = 3
    max_successful_elements: int = 5
    max_mistakes: int = 3
    max_best_practices: int = 3
    include_column_details: bool = True
    sample_values_per_column: int = 3


@dataclass
class DashGenConfig:
    """Main configuration container."""
    ingestion: IngestionConfig = field(default_factory=IngestionConfig)
    reasoning: ReasoningConfig = field(default_factory=ReasoningConfig)
    memory: MemoryConfig = field(default_factory=MemoryConfig)
    prompt: PromptConfig = field(default_factory=PromptConfig)

    verbose: bool = False

    @classmethod
    def from_yaml(cls, path: str) -> "DashGenConfig":
        """Load configuration from YAML file."""
        with open(path, "r") as f:
            data = yaml.safe_load(f)
        return cls._from_dict(data or {})

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "DashGenConfig":
        """Create config from dictionary."""
        ingestion_data = data.get("ingestion") or {}
        defaults = IngestionConfig()
        ingestion_config = IngestionConfig(
            supported_extensions=ingestion_data.get(
                "supported_extensions", defaults.supported_extensions
            ),
            csv_encodings=ingestion_data.get("csv_encodings", defaults.csv_encodings),
        )

        reasoning_config = ReasoningConfig(**(data.get("reasoning") or {}))
        memory_config = MemoryConfig(**(data.get("memory") or {}))
        prompt_config = PromptConfig(**(data.get("prompt") or {}))

        return cls(
            ingestion=ingestion_config,
            reasoning=reasoning_config,
            memory=memory_config,
            prompt=prompt_config,
            verbose=data.get("verbose", False),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "ingestion": {
                "supported_extensions": self.ingestion.supported_extensions,
                "csv_encodings": self.ingestion.csv_encodings,
            },
            "reasoning": {
                "type_sample_size": self.reasoning.type_sample_size,
                "pie_max_categories": self.reasoning.pie_max_categories,
                "dropdown_max_values": self.reasoning.dropdown_max_values,
                "missing_value_threshold": self.reasoning.missing_value_threshold,
                "min_rows": self.reasoning.min_rows,
            },
            "memory": {
                "enabled": self.memory.enabled,
                "database_url": self.memory.database_url,
                "window_days": self.memory.window_days,
                "top_k": self.memory.top_k,
            },
            "prompt": {
                "max_kpis": self.prompt.max_kpis,
                "max_charts": self.prompt.max_charts,
                "max_filters": self.prompt.max_filters,
            },
            "verbose": self.verbose,
        }


def create_default_config(
    memory_url: Optional[str] = None,
    memory_enabled: bool = True,
    verbose: bool = False,
) -> DashGenConfig:
    """Factory function to create a default configuration."""

    memory_config = MemoryConfig(enabled=memory_enabled, database_url=memory_url)

    return DashGenConfig(
        ingestion=IngestionConfig(),
        reasoning=ReasoningConfig(),
        memory=memory_config,
        prompt=PromptConfig(),
        verbose=verbose,
    )
