"""Parse Claude Code transcript JSONL into rendered messages."""

from __future__ import annotations

import json
import re

from . import RenderedMessage, iter_records, text_of
from .classify import ClassifierSettings, is_meta_message

_SKIPPED_TYPES = ("summary", "file-history-snapshot")

# Markers of user records that are tool plumbing or skill expansions, not typed input.
_USER_NOISE = ("tool_result", "Use the `", "<skill>")

_COMMAND_ARGS = re.compile(r"<command-args>([\s\S]*?)</command-args>")
_COMMAND_WRAPPERS = re.compile(r"<command-(?:message|name)>[\s\S]*?</command-(?:message|name)>")
_SYSTEM_REMINDER = re.compile(r"<system-reminder>[\s\S]*?</system-reminder>")
_STRAY_COMMAND_TAG = re.compile(r"</?command-[^>]+>")
_EXTRA_NEWLINES = re.compile(r"\n{3,}")


def clean_user_text(text: str) -> str:
    """Reduce slash-command wrappers to their arguments and drop injected reminders."""
    cleaned = _COMMAND_ARGS.sub(lambda m: m.group(1).strip(), text)
    cleaned = _COMMAND_WRAPPERS.sub("", cleaned)
    cleaned = _SYSTEM_REMINDER.sub("", cleaned)
    cleaned = _STRAY_COMMAND_TAG.sub("", cleaned)
    return _EXTRA_NEWLINES.sub("\n\n", cleaned).strip()


def parse_claude_jsonl(
    content: str,
    classifier: ClassifierSettings | None = None,
) -> list[RenderedMessage]:
    """Parse the text of a Claude Code .jsonl session into RenderedMessages.

    Args:
        content: Full file content, one JSON object per line.
        classifier: Settings for the meta-message heuristic. Defaults apply if None.

    Returns:
        Messages in file order, numbered from 0 as they are emitted. Records that
        are skipped never consume an index.
    """
    messages: list[RenderedMessage] = []

    def emit(role: str, text: str, **extra) -> None:
        messages.append(RenderedMessage(role=role, content=text, original_index=len(messages), **extra))

    for entry in iter_records(content):
        entry_type = entry.get("type")
        if entry_type in _SKIPPED_TYPES:
            continue

        msg = entry.get("message")
        if not isinstance(msg, dict):
            continue

        if entry_type == "user" and msg.get("role") == "user":
            text = clean_user_text(_user_text(msg.get("content")))
            if entry.get("isMeta") or any(marker in text for marker in _USER_NOISE):
                continue
            if text:
                emit("user", text)

        elif entry_type == "assistant" and msg.get("role") == "assistant":
            parts = msg.get("content")
            if not isinstance(parts, list):
                continue
            model = msg.get("model") if isinstance(msg.get("model"), str) else None
            for part in parts:
                if not isinstance(part, dict):
                    continue
                part_type = part.get("type")
                if part_type == "text":
                    text = text_of(part.get("text"))
                    if text:
                        role = "thinking" if is_meta_message(text, classifier) else "assistant"
                        emit(role, text, model=model)
                elif part_type == "thinking":
                    text = text_of(part.get("thinking"))
                    if text:
                        emit("thinking", text, model=model)
                elif part_type == "tool_use":
                    emit(
                        "tool",
                        str(part.get("name") or "tool_use"),
                        raw=_pretty_input(part),
                        raw_label="Input",
                        tool_call_id=part.get("id"),
                    )

    return messages


def _user_text(content) -> str:
    """Flatten user message content: strings as-is, arrays by their text parts."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return "".join(
            block["text"] + "\n"
            for block in content
            if isinstance(block, dict) and block.get("type") == "text" and isinstance(block.get("text"), str)
        )
    return ""


def _pretty_input(part: dict) -> str | None:
    if "input" not in part:
        return None
    return json.dumps(part["input"], indent=2, ensure_ascii=False, default=str)
