"""Parse Codex CLI session JSONL into rendered messages."""

from __future__ import annotations

import json
from typing import Any

from . import RenderedMessage, iter_records, text_of

# Injected context blocks and skill expansions that Codex records as user input.
_USER_NOISE = ("<INSTRUCTIONS>", "<environment_context>", "<skill>")


def _parts(value: Any) -> list[dict]:
    if not isinstance(value, list):
        return []
    return [part for part in value if isinstance(part, dict)]


def _raw_arguments(value: Any) -> str | None:
    """Arguments arrive as a JSON string; re-encode the rare already-decoded object."""
    if value is None or isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, default=str)


def _turn_model(payload: dict) -> str | None:
    model = payload.get("model")
    if not model:
        return None
    effort = payload.get("effort")
    return f"{model} {effort}" if effort else str(model)


def parse_codex_jsonl(content: str) -> list[RenderedMessage]:
    """Parse the text of a Codex .jsonl session into RenderedMessages.

    ``turn_context`` records only update the model label attached to later
    assistant messages; the label starts unset for every call.
    """
    messages: list[RenderedMessage] = []
    current_model: str | None = None

    def emit(role: str, text: str, **extra) -> None:
        messages.append(RenderedMessage(role=role, content=text, original_index=len(messages), **extra))

    for entry in iter_records(content):
        payload = entry.get("payload")
        if not isinstance(payload, dict):
            continue

        if entry.get("type") == "turn_context":
            current_model = _turn_model(payload) or current_model
            continue

        if entry.get("type") != "response_item":
            continue

        payload_type = payload.get("type")
        role = payload.get("role")

        if role == "user":
            for part in _parts(payload.get("content")):
                if part.get("type") != "input_text":
                    continue
                raw_text = part.get("text")
                text = text_of(raw_text)
                if not text or any(marker in raw_text for marker in _USER_NOISE):
                    continue
                emit("user", text)

        if payload_type == "message" and role == "assistant":
            for part in _parts(payload.get("content")):
                text = text_of(part.get("text"))
                if part.get("type") == "output_text" and text:
                    emit("assistant", text, model=current_model)

        elif payload_type == "reasoning":
            for part in _parts(payload.get("summary")):
                text = text_of(part.get("text"))
                if part.get("type") == "summary_text" and text:
                    emit("thinking", text)

        elif payload_type == "function_call":
            emit(
                "tool",
                str(payload.get("name") or "function_call"),
                raw=_raw_arguments(payload.get("arguments")),
                raw_label="Arguments",
                tool_call_id=payload.get("call_id"),
            )

    return messages
