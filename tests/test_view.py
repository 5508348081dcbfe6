"""Tests for display-side filtering and annotation lookup."""

from agent_transcripts.transcripts import Annotation, RenderedMessage, Tool, Transcript
from agent_transcripts.view import annotate, filter_messages, find_annotation, model_label


def _messages() -> list[RenderedMessage]:
    roles = ["user", "thinking", "assistant", "tool", "system", "assistant"]
    return [RenderedMessage(role=r, content=f"{r} {i}", original_index=i) for i, r in enumerate(roles)]


def _annotations() -> list[Annotation]:
    return [
        Annotation(message_index=2, tool="codex", phase="test", content="codex note"),
        Annotation(message_index=2, tool="claude", phase="test", content="first"),
        Annotation(message_index=2, tool="claude", phase="test", content="second"),
        Annotation(message_index=5, tool="claude", phase="test", content="last reply", highlight="key"),
    ]


class TestFilterMessages:
    def test_default_hides_thinking_tools_and_system(self):
        visible = filter_messages(_messages())
        assert [m.original_index for m in visible] == [0, 2, 5]

    def test_show_thinking(self):
        visible = filter_messages(_messages(), show_thinking=True)
        assert [m.role for m in visible] == ["user", "thinking", "assistant", "assistant"]

    def test_show_everything_still_hides_system(self):
        visible = filter_messages(_messages(), show_thinking=True, show_tools=True)
        assert "system" not in {m.role for m in visible}
        assert len(visible) == 5

    def test_indices_survive_filtering(self):
        messages = _messages()
        visible = filter_messages(messages)
        assert all(m is messages[m.original_index] for m in visible)


class TestFindAnnotation:
    def test_matches_tool_and_index(self):
        assert find_annotation(_annotations(), "codex", 2).content == "codex note"

    def test_first_match_wins(self):
        assert find_annotation(_annotations(), Tool.CLAUDE, 2).content == "first"

    def test_no_match(self):
        assert find_annotation(_annotations(), "codex", 5) is None


class TestAnnotate:
    def test_pairs_follow_original_index_after_filtering(self):
        pairs = annotate(filter_messages(_messages()), _annotations(), "claude")
        assert [(m.original_index, a.content if a else None) for m, a in pairs] == [
            (0, None),
            (2, "first"),
            (5, "last reply"),
        ]


class TestModelLabel:
    def test_uses_model(self):
        assert model_label(Transcript(tool="Codex", model="gpt-4.1")) == "gpt-4.1"

    def test_fallbacks(self):
        assert model_label(None) == "Plan"
        assert model_label(Transcript(tool="Codex"), default="Codex") == "Codex"
