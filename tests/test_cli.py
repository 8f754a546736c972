import json

import pytest
from click.testing import CliRunner
from conftest import FakeLLM

from tripgraph.main import cli


@pytest.fixture
def run(tmp_path, snapshot_file):
    runner = CliRunner()

    def _run(*args):
        return runner.invoke(
            cli, ["--config", str(tmp_path / "config.json"), "--snapshot", str(snapshot_file), *args]
        )

    return _run


def test_graph_show_json(run):
    result = run("graph", "show", "--json")
    assert result.exit_code == 0, result.output
    payload = json.loads(result.output)
    assert len(payload["nodes"]) == 11
    assert payload["nodes"][0] == {
        "id": "c1", "type": "contact", "label": "Jane (Acme)",
        "name": "Jane", "company": "Acme",
    }


def test_graph_show_table(run):
    result = run("graph", "show")
    assert result.exit_code == 0, result.output
    assert "Nodes (11)" in result.output


def test_graph_stats(run):
    result = run("graph", "stats")
    assert result.exit_code == 0, result.output
    assert "Contacts (3)" in result.output


def test_graph_walk_reports_truncation(run):
    result = run("graph", "walk", "--max-contacts", "1", "--max-steps", "3")
    assert result.exit_code == 0, result.output
    assert "Walk (3 steps)" in result.output
    assert "Truncated" in result.output


def test_graph_input(run):
    result = run("graph", "input")
    assert result.exit_code == 0, result.output
    assert result.output.startswith("## Jane (Acme)")
    assert "## Other (events, todos, notes not linked to contacts above)" in result.output


def test_missing_snapshot_is_a_clean_error(tmp_path):
    result = CliRunner().invoke(
        cli, ["--config", str(tmp_path / "c.json"), "--snapshot", str(tmp_path / "missing.json"),
              "graph", "stats"],
    )
    assert result.exit_code == 1
    assert "Snapshot not found" in result.output


def test_summarize_without_key(run, monkeypatch):
    monkeypatch.delenv("TRIPGRAPH_PROVIDER", raising=False)
    monkeypatch.setattr("tripgraph.llm.client.get_api_key", lambda env_var, account: None)
    result = run("summarize")
    assert result.exit_code == 1
    assert "GEMINI_API_KEY not found" in result.output


def test_ask_sends_graph_context(run, monkeypatch):
    llm = FakeLLM("You meet Jane first.")
    monkeypatch.setattr("tripgraph.cli.summary_cmd.LLMClient", lambda **kwargs: llm)
    result = run("ask", "Who do I meet first?")
    assert result.exit_code == 0, result.output
    assert "You meet Jane first." in result.output
    _, user_message = llm.calls[0]
    assert "Contacts (3): Jane (Acme); Wei; Solo" in user_message
    assert "Who do I meet first?" in user_message


def test_summarize_saves_to_snapshot(run, monkeypatch, snapshot_file):
    monkeypatch.setattr("tripgraph.cli.summary_cmd.LLMClient", lambda **kwargs: FakeLLM("Good trip."))
    result = run("summarize")
    assert result.exit_code == 0, result.output
    assert json.loads(snapshot_file.read_text())["settings"]["tripSummary"] == "Good trip."


def test_ask_model_failure_is_a_clean_error(run, monkeypatch):
    llm = FakeLLM(RuntimeError("quota exceeded"))
    monkeypatch.setattr("tripgraph.cli.summary_cmd.LLMClient", lambda **kwargs: llm)
    result = run("ask", "Anything?")
    assert result.exit_code == 1
    assert "Question failed: quota exceeded" in result.output
    assert not isinstance(result.exception, RuntimeError)
