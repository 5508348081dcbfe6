"""Tests for the command-line interface."""

import json
import shutil
from pathlib import Path

import pytest
from click.testing import CliRunner

from agent_transcripts.cli import cli

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def data_dir(tmp_path):
    data = tmp_path / "data"
    (data / "transcripts").mkdir(parents=True)
    (data / "annotations").mkdir()
    (data / "plans").mkdir()
    shutil.copy(FIXTURES / "claude-transcript.jsonl", data / "transcripts" / "research-claude.jsonl")
    shutil.copy(FIXTURES / "codex-transcript.jsonl", data / "transcripts" / "research-codex.jsonl")
    (data / "annotations" / "research.json").write_text(json.dumps([
        {"messageIndex": 2, "tool": "claude", "phase": "research", "content": "Good first answer"},
    ]))
    (data / "plans" / "claude-plan.md").write_text("# Claude plan\n")
    return data


def _run(data_dir, *args):
    result = CliRunner().invoke(cli, ["--data-dir", str(data_dir), *args])
    assert result.exit_code == 0, result.output
    return result.output


class TestShow:
    def test_hides_thinking_by_default(self, data_dir):
        output = _run(data_dir, "show", "research", "claude")
        assert "Claude Code (claude-opus-4-5)" in output
        assert "[0] USER" in output
        assert "[2] ASSISTANT" in output
        assert "[1] THINKING" not in output
        assert "3 message(s) hidden" in output

    def test_inline_annotation(self, data_dir):
        output = _run(data_dir, "show", "research", "claude")
        assert "✦ Good first answer" in output

    def test_tools_with_raw(self, data_dir):
        output = _run(data_dir, "show", "research", "codex", "--thinking", "--tools", "--raw")
        assert "[3] TOOL" in output
        assert "--- Arguments ---" in output
        assert '{"a":1}' in output
        assert "hidden" not in output

    def test_missing_transcript(self, data_dir):
        output = _run(data_dir, "show", "review", "codex")
        assert "No Codex transcript for phase 'review'." in output

    def test_rejects_unknown_tool(self, data_dir):
        result = CliRunner().invoke(cli, ["--data-dir", str(data_dir), "show", "research", "gemini"])
        assert result.exit_code != 0


class TestExport:
    def test_exports_camel_case_json(self, data_dir):
        output = json.loads(_run(data_dir, "export", "--phase", "research"))
        assert set(output["transcripts"]) == {"research-claude", "research-codex"}
        claude = output["transcripts"]["research-claude"]
        assert claude["model"] == "claude-opus-4-5"
        assert claude["messages"][4]["rawLabel"] == "Input"
        assert claude["messages"][4]["originalIndex"] == 4
        assert output["annotations"]["research"][0]["messageIndex"] == 2
        assert output["plans"] == {"claude": "# Claude plan\n", "codex": ""}


class TestAnnotationsAndPlans:
    def test_annotations_text(self, data_dir):
        assert "[claude #2] Good first answer" in _run(data_dir, "annotations", "research")

    def test_annotations_json(self, data_dir):
        output = json.loads(_run(data_dir, "annotations", "research", "--json"))
        assert output == [{"messageIndex": 2, "tool": "claude", "phase": "research", "content": "Good first answer"}]

    def test_no_annotations(self, data_dir):
        assert "No annotations for phase 'review'." in _run(data_dir, "annotations", "review")

    def test_plans(self, data_dir):
        output = _run(data_dir, "plans")
        assert "=== Claude Code plan ===" in output
        assert "# Claude plan" in output
        assert "(no plan)" in output

    def test_single_plan(self, data_dir):
        output = _run(data_dir, "plans", "--tool", "codex")
        assert "Codex plan" in output
        assert "Claude" not in output


class TestStatus:
    def test_reports_counts(self, data_dir, monkeypatch):
        monkeypatch.delenv("AGENT_TRANSCRIPTS_PHASES", raising=False)
        output = _run(data_dir, "status")
        assert "claude: 5 message(s), model claude-opus-4-5" in output
        assert "codex: 4 message(s), model gpt-4.1" in output
        assert "annotations: 1" in output
        assert "claude plan: present" in output
        assert "codex plan: missing" in output
