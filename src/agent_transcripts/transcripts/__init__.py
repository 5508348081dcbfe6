"""Normalized transcript model shared by the Claude Code and Codex parsers."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator

_LOGGER = logging.getLogger(__name__)

ROLES = ("user", "assistant", "tool", "thinking", "system")


class Tool(Enum):
    CLAUDE = "claude"
    CODEX = "codex"

    @property
    def display_name(self) -> str:
        return "Claude Code" if self is Tool.CLAUDE else "Codex"


@dataclass(frozen=True)
class RenderedMessage:
    """One unit of conversation, in original chronological order."""

    role: str  # one of ROLES
    content: str
    original_index: int  # join key for annotations, assigned once at emission
    raw: str | None = None  # tool input / arguments, shown collapsed
    raw_label: str | None = None  # "Input" or "Arguments"
    tool_call_id: str | None = None
    model: str | None = None

    def to_dict(self) -> dict:
        data = {
            "role": self.role,
            "content": self.content,
            "raw": self.raw,
            "rawLabel": self.raw_label,
            "toolCallId": self.tool_call_id,
            "model": self.model,
            "originalIndex": self.original_index,
        }
        return {key: value for key, value in data.items() if value is not None}


@dataclass(frozen=True)
class Transcript:
    """One tool's parsed session for one phase."""

    tool: str  # display name: "Claude Code" or "Codex"
    model: str | None = None
    messages: tuple[RenderedMessage, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        data: dict[str, Any] = {"tool": self.tool}
        if self.model is not None:
            data["model"] = self.model
        data["messages"] = [message.to_dict() for message in self.messages]
        return data


@dataclass(frozen=True)
class Annotation:
    """An externally authored note pinned to one message of one tool's transcript."""

    message_index: int  # matches RenderedMessage.original_index
    tool: str  # "claude" or "codex"
    phase: str
    content: str
    highlight: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> Annotation:
        """Build an Annotation from its camelCase JSON form.

        Raises:
            ValueError: If a required field is missing or has the wrong type.
        """
        index = data.get("messageIndex")
        if not isinstance(index, int) or isinstance(index, bool):
            raise ValueError(f"messageIndex must be an integer, got {index!r}")
        tool = data.get("tool")
        if tool not in (Tool.CLAUDE.value, Tool.CODEX.value):
            raise ValueError(f"Unknown annotation tool: {tool!r}")
        content = data.get("content")
        if not isinstance(content, str):
            raise ValueError("Annotation content must be a string")
        highlight = data.get("highlight")
        return cls(
            message_index=index,
            tool=tool,
            phase=str(data.get("phase", "")),
            content=content,
            highlight=highlight if isinstance(highlight, str) else None,
        )

    def to_dict(self) -> dict:
        data = {
            "messageIndex": self.message_index,
            "tool": self.tool,
            "phase": self.phase,
            "content": self.content,
        }
        if self.highlight is not None:
            data["highlight"] = self.highlight
        return data


def iter_records(content: str) -> Iterator[dict]:
    """Yield one dict per JSON-object line, skipping blank and malformed lines."""
    for lineno, line in enumerate(content.split("\n"), start=1):
        if not line.strip():
            continue
        try:
            entry = json.loads(line)
        except (json.JSONDecodeError, RecursionError) as exc:
            _LOGGER.debug("Skipping malformed JSON on line %d: %s", lineno, exc)
            continue
        if not isinstance(entry, dict):
            _LOGGER.debug("Skipping non-object record on line %d", lineno)
            continue
        yield entry


def text_of(value: Any) -> str:
    """Return value stripped if it is a string, otherwise an empty string."""
    return value.strip() if isinstance(value, str) else ""
