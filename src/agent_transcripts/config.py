"""Data locations, phases, and classifier tuning."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from .transcripts import Tool
from .transcripts.classify import DEFAULT_MAX_LENGTH, DEFAULT_META_KEYWORDS, ClassifierSettings

DEFAULT_PHASES = ("research", "planning", "review", "supporting-1", "supporting-2")


def _default_data_dir() -> Path:
    return Path(os.environ.get("AGENT_TRANSCRIPTS_DATA_DIR", Path.cwd() / "data"))


def _default_phases() -> tuple[str, ...]:
    raw = os.environ.get("AGENT_TRANSCRIPTS_PHASES", "")
    phases = tuple(p.strip() for p in raw.split(",") if p.strip())
    return phases or DEFAULT_PHASES


@dataclass
class Config:
    """Runtime configuration, resolved from env vars and defaults."""

    # Root holding transcripts/, annotations/ and plans/
    data_dir: Path = field(default_factory=_default_data_dir)

    # Phases loaded by load_all_transcripts, in display order
    phases: tuple[str, ...] = field(default_factory=_default_phases)

    # Meta-message heuristic
    meta_max_length: int = DEFAULT_MAX_LENGTH
    meta_keywords: tuple[str, ...] = DEFAULT_META_KEYWORDS

    @property
    def transcripts_dir(self) -> Path:
        return self.data_dir / "transcripts"

    @property
    def annotations_dir(self) -> Path:
        return self.data_dir / "annotations"

    @property
    def plans_dir(self) -> Path:
        return self.data_dir / "plans"

    @property
    def classifier(self) -> ClassifierSettings:
        return ClassifierSettings(max_length=self.meta_max_length, keywords=tuple(self.meta_keywords))

    def transcript_path(self, phase: str, tool: Tool) -> Path:
        return self.transcripts_dir / f"{phase}-{tool.value}.jsonl"

    def annotations_path(self, phase: str) -> Path:
        return self.annotations_dir / f"{phase}.json"

    def plan_path(self, tool: Tool) -> Path:
        return self.plans_dir / f"{tool.value}-plan.md"

    def ensure_data_dirs(self) -> None:
        for directory in (self.transcripts_dir, self.annotations_dir, self.plans_dir):
            directory.mkdir(parents=True, exist_ok=True)
