"""Display-side helpers: visibility toggles and annotation lookup.

Filtering never renumbers messages. Annotations keep matching by
``original_index`` whichever roles are hidden.
"""

from __future__ import annotations

from typing import Iterable

from .transcripts import Annotation, RenderedMessage, Tool, Transcript


def filter_messages(
    messages: Iterable[RenderedMessage],
    show_thinking: bool = False,
    show_tools: bool = False,
) -> list[RenderedMessage]:
    """Keep the messages a reader has asked to see. System messages are never shown."""
    hidden = {"system"}
    if not show_thinking:
        hidden.add("thinking")
    if not show_tools:
        hidden.add("tool")
    return [m for m in messages if m.role not in hidden]


def find_annotation(
    annotations: Iterable[Annotation],
    tool: Tool | str,
    original_index: int,
) -> Annotation | None:
    """Return the first annotation pinned to this tool's message, if any."""
    tool_name = Tool(tool).value
    for annotation in annotations:
        if annotation.tool == tool_name and annotation.message_index == original_index:
            return annotation
    return None


def annotate(
    messages: Iterable[RenderedMessage],
    annotations: list[Annotation],
    tool: Tool | str,
) -> list[tuple[RenderedMessage, Annotation | None]]:
    """Pair each message with its annotation (or None) for display."""
    return [(m, find_annotation(annotations, tool, m.original_index)) for m in messages]


def model_label(transcript: Transcript | None, default: str = "Plan") -> str:
    if transcript is None or not transcript.model:
        return default
    return transcript.model
