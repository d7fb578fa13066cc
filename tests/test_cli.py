"""Tests for the command-line interface and the agent."""

import json

import pytest
from click.testing import CliRunner

from dashgen.config import create_default_config
from dashgen.main import DashGenAgent, cli
from dashgen.memory.pattern_store import InMemoryPatternStore, SqlPatternStore

from tests.conftest import sales_csv

CODE = "<LineChart data={rows} /> <div className='grid'>{data.filter(Boolean)}</div>"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def sales_file(tmp_path):
    path = tmp_path / "sales.csv"
    path.write_bytes(sales_csv())
    return path


def test_analyze_writes_insights_and_prompt(runner, sales_file, tmp_path):
    output = tmp_path / "insights.json"
    prompt_output = tmp_path / "prompt.txt"

    result = runner.invoke(cli, [
        "analyze", str(sales_file), "--no-memory",
        "-p", "Revenue by region",
        "-o", str(output),
        "--prompt-output", str(prompt_output),
    ])

    assert result.exit_code == 0, result.output
    insights = json.loads(output.read_text())
    assert insights["businessContext"] == "sales-commerce"
    assert prompt_output.read_text().startswith("Revenue by region")


def test_analyze_unsupported_file(runner, tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("a,b\n1,2\n")

    result = runner.invoke(cli, ["analyze", str(path), "--no-memory"])

    assert result.exit_code == 1
    assert "Unsupported file type: txt" in result.output


def test_remember_then_analyze_uses_memory(runner, sales_file, tmp_path):
    db_url = f"sqlite:///{tmp_path / 'memory.db'}"
    code_file = tmp_path / "Dashboard.jsx"
    code_file.write_text(CODE)
    prompt_output = tmp_path / "prompt.txt"

    remembered = runner.invoke(cli, [
        "remember", str(sales_file),
        "--prompt", "Revenue by region",
        "--code", str(code_file),
        "-e", "Cannot read properties of undefined (reading 'map')",
        "--practice", "Sort months chronologically",
        "--memory-db", db_url,
    ])
    assert remembered.exit_code == 0, remembered.output
    assert "Pattern stored" in remembered.output

    analyzed = runner.invoke(cli, [
        "analyze", str(sales_file),
        "--memory-db", db_url,
        "--prompt-output", str(prompt_output),
    ])
    assert analyzed.exit_code == 0, analyzed.output

    text = prompt_output.read_text()
    assert "- Line charts for trends" in text
    assert "- Check data arrays before mapping" in text
    assert "- Sort months chronologically" in text


def test_version(runner):
    result = runner.invoke(cli, ["version"])

    assert result.exit_code == 0
    assert "DashGen" in result.output


def test_agent_with_injected_store(sales_file):
    store = InMemoryPatternStore()
    agent = DashGenAgent(create_default_config(memory_url="sqlite://"), pattern_store=store)

    dataset = agent.load(str(sales_file))
    record = agent.remember(dataset, "Revenue by region", code=CODE)
    result = agent.analyze(dataset, "Revenue by region")

    assert record.successful_elements == (
        "Line charts for trends",
        "Grid layouts",
        "Data filtering and sorting",
    )
    assert [m.record.id for m in result.patterns] == [record.id]
    assert result.prompt.headers == ("date", "region", "revenue")


def test_agent_without_memory(sales_file):
    agent = DashGenAgent(create_default_config(memory_enabled=False))

    result = agent.run(str(sales_file))

    assert agent.memory is None
    assert result.patterns == []
    assert agent.remember(result.dataset, "x") is None


def test_agent_owns_sql_store(tmp_path):
    agent = DashGenAgent(create_default_config(memory_url=f"sqlite:///{tmp_path / 'm.db'}"))

    assert isinstance(agent.memory.pattern_store, SqlPatternStore)
    agent.close()
