"""Load transcripts, annotations, and plans from the data directory.

Every loader degrades to "no data" instead of raising: a missing file, an
unreadable file, or malformed content all produce an empty result.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from .config import Config
from .transcripts import Annotation, RenderedMessage, Tool, Transcript
from .transcripts.claude import parse_claude_jsonl
from .transcripts.codex import parse_codex_jsonl

_LOGGER = logging.getLogger(__name__)


def _read_text(path: Path) -> str | None:
    """Return the file's text, or None if it is missing or unreadable."""
    if not path.exists():
        return None
    if not path.is_file():
        _LOGGER.warning("Failed to read %s: not a regular file", path)
        return None
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        _LOGGER.warning("Failed to read %s: %s", path, exc)
        return None


def _parse(tool: Tool, content: str, config: Config) -> list[RenderedMessage]:
    if tool is Tool.CLAUDE:
        return parse_claude_jsonl(content, config.classifier)
    return parse_codex_jsonl(content)


def load_transcript(phase: str, tool: Tool | str, config: Config | None = None) -> Transcript:
    """Load and parse one tool's transcript for a phase.

    A missing file is the normal "nothing recorded" state and yields an empty
    Transcript carrying the tool's display name.

    Raises:
        ValueError: If ``tool`` is not a known tool name.
    """
    if config is None:
        config = Config()
    tool = Tool(tool)

    path = config.transcript_path(phase, tool)
    content = _read_text(path)
    if content is None:
        return Transcript(tool=tool.display_name)

    messages = _parse(tool, content, config)
    _LOGGER.debug("Parsed %d message(s) from %s", len(messages), path)
    model = next((m.model for m in messages if m.model), None)
    return Transcript(tool=tool.display_name, model=model, messages=tuple(messages))


def load_all_transcripts(config: Config | None = None) -> dict[str, Transcript]:
    """Load every configured phase for both tools, keyed "<phase>-<tool>"."""
    if config is None:
        config = Config()

    result: dict[str, Transcript] = {}
    for phase in config.phases:
        for tool in Tool:
            result[f"{phase}-{tool.value}"] = load_transcript(phase, tool, config)
    return result


def load_annotations(phase: str, config: Config | None = None) -> list[Annotation]:
    """Load the annotations for a phase. Returns [] on any problem with the file."""
    if config is None:
        config = Config()

    path = config.annotations_path(phase)
    content = _read_text(path)
    if content is None:
        return []

    try:
        records = json.loads(content)
    except (json.JSONDecodeError, RecursionError) as exc:
        _LOGGER.warning("Ignoring malformed annotations file %s: %s", path, exc)
        return []
    if not isinstance(records, list):
        _LOGGER.warning("Ignoring annotations file %s: expected a JSON array", path)
        return []

    annotations = []
    for i, record in enumerate(records):
        if not isinstance(record, dict):
            _LOGGER.warning("Skipping annotation %d in %s: not an object", i, path)
            continue
        try:
            annotations.append(Annotation.from_dict(record))
        except ValueError as exc:
            _LOGGER.warning("Skipping annotation %d in %s: %s", i, path, exc)
    return annotations


def load_plans(config: Config | None = None) -> dict[str, str]:
    """Load both tools' plan markdown; a missing plan is an empty string."""
    if config is None:
        config = Config()

    return {tool.value: _read_text(config.plan_path(tool)) or "" for tool in Tool}
