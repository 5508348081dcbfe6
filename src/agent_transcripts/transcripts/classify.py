"""Heuristic that tells Claude's user-facing replies apart from process narration.

Claude Code sessions interleave short status lines ("Now spawning parallel
research agents...") with real answers, all as plain ``text`` parts. Short,
unstructured text that mentions orchestration vocabulary is reclassified as
thinking. The threshold and keyword list are tunable and best-effort.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import cached_property

DEFAULT_MAX_LENGTH = 320

# Regex alternatives, matched case-insensitively on word boundaries.
DEFAULT_META_KEYWORDS: tuple[str, ...] = (
    r"apex:\w+",
    r"skill",
    r"agents?",
    r"spawn(?:ing)?",
    r"todos?",
    r"task brief",
    r"update the task",
    r"update the todos",
    r"TaskOutput",
    r"TodoWrite",
)

_HEADING = re.compile(r"^#{1,6}\s", re.MULTILINE)
_FENCE = re.compile(r"```")
_BULLET = re.compile(r"^[-*]\s+", re.MULTILINE)
_TABLE = re.compile(r"^\|.+\|\n\|[-:|\s]+\|", re.MULTILINE)


@dataclass(frozen=True)
class ClassifierSettings:
    max_length: int = DEFAULT_MAX_LENGTH
    keywords: tuple[str, ...] = DEFAULT_META_KEYWORDS

    @cached_property
    def pattern(self) -> re.Pattern:
        return re.compile(r"\b(" + "|".join(self.keywords) + r")\b", re.IGNORECASE)


DEFAULT_SETTINGS = ClassifierSettings()


def has_markdown_structure(text: str) -> bool:
    return bool(
        _HEADING.search(text)
        or _FENCE.search(text)
        or _BULLET.search(text)
        or _TABLE.search(text)
    )


def is_meta_message(text: str, settings: ClassifierSettings | None = None) -> bool:
    """Return True if assistant text reads as internal narration rather than output.

    Rules are applied in order: empty text is meta, long text is output,
    markdown-structured text is output, and anything left is meta only if it
    mentions one of the configured keywords.
    """
    settings = settings or DEFAULT_SETTINGS
    normalized = text.strip()
    if not normalized:
        return True
    if len(normalized) > settings.max_length:
        return False
    if has_markdown_structure(normalized) or not settings.keywords:
        return False
    return settings.pattern.search(normalized) is not None
