"""
DashGen - Main Entry Point

Command-line interface and orchestration for the dashboard data reasoning
pipeline.
"""

import sys
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence
from pathlib import Path
import time

import click
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn
from rich.panel import Panel
from rich.table import Table

from dashgen import __version__
from dashgen.config import DashGenConfig, create_default_config
from dashgen.core.ingestion import FileIngestor
from dashgen.core.models import ColumnType, DataInsights, Dataset, PatternMatch, PatternRecord
from dashgen.core.reasoning import DataReasoningEngine, summarize
from dashgen.inference.prompt_synthesizer import PromptSynthesizer, SynthesizedPrompt
from dashgen.memory.outcomes import extract_common_mistakes, extract_successful_elements
from dashgen.memory.pattern_memory import PatternMemory, create_memory_context
from dashgen.memory.pattern_store import PatternStore, SqlPatternStore

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

console = Console()

DEFAULT_PROMPT = "Create an interactive dashboard for this data"


@dataclass
class AnalysisResult:
    """Everything produced for one uploaded dataset."""
    dataset: Dataset
    column_types: Dict[str, ColumnType]
    insights: DataInsights
    prompt: SynthesizedPrompt
    patterns: List[PatternMatch] = field(default_factory=list)


class DashGenAgent:
    """
    Main orchestrator for the dashboard reasoning pipeline.

    This class coordinates all modules to:
    1. Ingest the uploaded file
    2. Infer column types
    3. Analyze the dataset into a dashboard plan
    4. Retrieve similar past generations
    5. Synthesize the generation prompt
    """

    def __init__(self, config: DashGenConfig, pattern_store: Optional[PatternStore] = None):
        """
        Initialize the agent.

        Args:
            config: Complete configuration object
            pattern_store: Memory backend; built from ``config.memory`` when omitted
        """
        self.config = config
        self.ingestor = FileIngestor(config.ingestion)
        self.engine = DataReasoningEngine(config)
        self.synthesizer = PromptSynthesizer(config.prompt)

        self._owned_store: Optional[SqlPatternStore] = None
        if pattern_store is None and config.memory.enabled:
            self._owned_store = SqlPatternStore(config.memory.database_url)
            pattern_store = self._owned_store

        self.memory: Optional[PatternMemory] = None
        if pattern_store is not None:
            self.memory = PatternMemory(pattern_store, config.memory)

    def load(self, path: str) -> Dataset:
        """Ingest a file from disk."""
        return self.ingestor.ingest_file(path)

    def analyze(self, dataset: Dataset, user_prompt: str = DEFAULT_PROMPT) -> AnalysisResult:
        """
        Run analysis, memory retrieval and prompt synthesis for a dataset.

        Args:
            dataset: Ingested dataset
            user_prompt: The user's request

        Returns:
            Analysis result
        """
        column_types = self.engine.type_inferencer.infer(dataset)
        insights = self.engine.analyze(dataset, column_types)

        matches: List[PatternMatch] = []
        if self.memory is not None:
            context = create_memory_context(dataset.headers, column_types, user_prompt, insights)
            matches = self.memory.retrieve(context)

        prompt = self.synthesizer.synthesize(
            user_prompt,
            insights,
            dataset.headers,
            patterns=[m.record for m in matches],
            column_types=column_types,
            dataset=dataset,
        )

        return AnalysisResult(
            dataset=dataset,
            column_types=column_types,
            insights=insights,
            prompt=prompt,
            patterns=matches,
        )

    def run(self, path: str, user_prompt: str = DEFAULT_PROMPT) -> AnalysisResult:
        """Ingest and analyze a file."""
        return self.analyze(self.load(path), user_prompt)

    def remember(
        self,
        dataset: Dataset,
        user_prompt: str,
        code: Optional[str] = None,
        errors: Sequence[str] = (),
        best_practices: Sequence[str] = (),
    ) -> Optional[PatternRecord]:
        """
        Store the outcome of a generation for this dataset.

        Args:
            dataset: Dataset the dashboard was generated for
            user_prompt: The request that produced the dashboard
            code: Generated dashboard code, mined for successful elements
            errors: Runtime error messages, mined for common mistakes
            best_practices: Free-text practices to keep

        Returns:
            The stored record, or None when memory is unavailable
        """
        if self.memory is None:
            logger.warning("Pattern memory is disabled. Outcome not stored.")
            return None

        column_types = self.engine.type_inferencer.infer(dataset)
        context = create_memory_context(dataset.headers, column_types, user_prompt)
        return self.memory.store(
            context,
            extract_successful_elements(code or ""),
            extract_common_mistakes(errors),
            best_practices,
        )

    def close(self):
        """Cleanup resources."""
        if self._owned_store:
            self._owned_store.close()


def _load_config(
    config_path: Optional[str],
    memory_db: Optional[str],
    no_memory: bool,
    verbose: bool,
) -> DashGenConfig:
    if config_path:
        config = DashGenConfig.from_yaml(config_path)
        if memory_db:
            config.memory.database_url = memory_db
        if no_memory:
            config.memory.enabled = False
        config.verbose = config.verbose or verbose
        return config
    return create_default_config(
        memory_url=memory_db,
        memory_enabled=not no_memory,
        verbose=verbose,
    )


def _print_summary(result: AnalysisResult, elapsed: float):
    """Print execution summary."""
    console.print()

    table = Table(title="Analysis Summary", show_header=True)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")

    insights = result.insights
    table.add_row("Source", result.dataset.source_name or "-")
    table.add_row("Total Records", f"{result.dataset.row_count:,}")
    table.add_row("Columns", str(result.dataset.column_count))
    table.add_row("Business Context", insights.business_context.value)
    table.add_row("Layout", insights.dashboard_structure.layout.value)
    table.add_row("KPIs", str(len(insights.key_metrics)))
    table.add_row("Charts", str(len(insights.chart_recommendations)))
    table.add_row("Quality Issues", str(len(insights.data_quality_issues)))
    table.add_row("Similar Patterns", str(len(result.patterns)))
    table.add_row("Processing Time", f"{elapsed:.2f}s")
    console.print(table)

    console.print(Panel(
        summarize(result.dataset, result.column_types),
        title="Dataset Summary",
        border_style="cyan",
    ))

    types_table = Table(title="Column Types", show_header=True)
    types_table.add_column("Column", style="cyan")
    types_table.add_column("Type", style="magenta")
    for column, col_type in result.column_types.items():
        types_table.add_row(column, col_type.value)
    console.print(types_table)

    kpi_table = Table(title="Recommended KPIs", show_header=True)
    kpi_table.add_column("Metric", style="cyan")
    kpi_table.add_column("Importance")
    kpi_table.add_column("Card")
    kpi_table.add_column("Calculation", style="dim")
    for kpi in insights.key_metrics:
        kpi_table.add_row(kpi.metric, kpi.importance.value, kpi.card_type.value, kpi.calculation)
    console.print(kpi_table)

    chart_table = Table(title="Recommended Charts", show_header=True)
    chart_table.add_column("Priority", justify="right")
    chart_table.add_column("Type", style="magenta")
    chart_table.add_column("Title", style="cyan")
    chart_table.add_column("X")
    chart_table.add_column("Y")
    for chart in insights.chart_recommendations:
        chart_table.add_row(
            str(chart.priority), chart.type.value, chart.title, chart.x_axis, chart.y_axis_label
        )
    console.print(chart_table)

    if insights.data_quality_issues:
        console.print(Panel(
            "\n".join(f"- {issue}" for issue in insights.data_quality_issues),
            title="Data Quality",
            border_style="yellow",
        ))


# CLI Commands
@click.group()
@click.version_option(version=__version__, prog_name="DashGen")
def cli():
    """DashGen - Data Reasoning for Dashboard Generation"""
    pass


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
@click.option('--prompt', '-p', default=DEFAULT_PROMPT, help='Dashboard request')
@click.option('--memory-db', help='SQLAlchemy URL of the pattern store')
@click.option('--no-memory', is_flag=True, help='Skip pattern memory')
@click.option('--output', '-o', type=click.Path(), help='Write insights JSON to this path')
@click.option('--prompt-output', type=click.Path(), help='Write the synthesized prompt to this path')
@click.option('--config', '-c', 'config_path', type=click.Path(exists=True), help='YAML config file')
@click.option('--verbose', '-v', is_flag=True, help='Verbose output')
def analyze(file, prompt, memory_db, no_memory, output, prompt_output, config_path, verbose):
    """
    Analyze a dataset and recommend a dashboard.

    Examples:

        dashgen analyze ./sales.csv -p "Show me revenue by region"

        dashgen analyze ./orders.xlsx --no-memory -o insights.json
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    console.print(Panel(
        "[bold blue]DashGen[/bold blue]\n"
        "[dim]Data Reasoning for Dashboard Generation[/dim]",
        border_style="blue"
    ))

    agent = None
    try:
        config = _load_config(config_path, memory_db, no_memory, verbose)
        agent = DashGenAgent(config)
        start_time = time.time()

        with Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console,
        ) as progress:
            task1 = progress.add_task("Loading dataset...", total=1)
            dataset = agent.load(file)
            progress.update(task1, completed=1)

            task2 = progress.add_task("Reasoning about data...", total=1)
            result = agent.analyze(dataset, prompt)
            progress.update(task2, completed=1)

        _print_summary(result, time.time() - start_time)

        if output:
            Path(output).write_text(result.insights.to_json(), encoding="utf-8")
            console.print(f"Insights saved to [bold green]{output}[/bold green]")
        if prompt_output:
            Path(prompt_output).write_text(result.prompt.text, encoding="utf-8")
            console.print(f"Prompt saved to [bold green]{prompt_output}[/bold green]")

        console.print("\n[bold green]✓ Analysis complete![/bold green]")

    except Exception as e:
        console.print(f"\n[bold red]✗ Error: {e}[/bold red]")
        if verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)
    finally:
        if agent:
            agent.close()


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
@click.option('--prompt', '-p', required=True, help='Request that produced the dashboard')
@click.option('--code', type=click.Path(exists=True, dir_okay=False), help='Generated dashboard code')
@click.option('--error', '-e', 'errors', multiple=True, help='Runtime error message (repeatable)')
@click.option('--practice', 'practices', multiple=True, help='Best practice to keep (repeatable)')
@click.option('--memory-db', help='SQLAlchemy URL of the pattern store')
@click.option('--config', '-c', 'config_path', type=click.Path(exists=True), help='YAML config file')
def remember(file, prompt, code, errors, practices, memory_db, config_path):
    """Store the outcome of a dashboard generation."""
    agent = None
    try:
        config = _load_config(config_path, memory_db, False, False)
        agent = DashGenAgent(config)
        dataset = agent.load(file)
        code_text = Path(code).read_text(encoding="utf-8") if code else None

        record = agent.remember(dataset, prompt, code_text, errors, practices)
        if record:
            console.print(f"[bold green]✓ Pattern stored:[/bold green] {record.id}")
            console.print(f"  Successful elements: {len(record.successful_elements)}")
            console.print(f"  Common mistakes: {len(record.common_mistakes)}")
        else:
            console.print("[bold yellow]! Pattern memory unavailable, nothing stored[/bold yellow]")

    except Exception as e:
        console.print(f"[bold red]✗ Error: {e}[/bold red]")
        sys.exit(1)
    finally:
        if agent:
            agent.close()


@cli.command()
def version():
    """Show version information."""
    console.print(Panel(
        f"[bold]DashGen[/bold] v{__version__}\n\n"
        "Turns uploaded data into dashboard plans.\n\n"
        "Components:\n"
        "  • File Ingestor\n"
        "  • Type Inferencer\n"
        "  • Domain Classifier\n"
        "  • Metric & Chart Recommenders\n"
        "  • Structure Planner\n"
        "  • Quality Auditor\n"
        "  • Pattern Memory\n"
        "  • Prompt Synthesizer",
        title="About",
        border_style="blue"
    ))


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
