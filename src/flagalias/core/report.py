from __future__ import annotations

"""
Runtime report for one alias resolution call.

Counters are best-effort diagnostics; they never influence the resolution
result.
"""

import json
import time
from dataclasses import dataclass, field
from typing import Dict


@dataclass
class ResolutionReport:
    started_at: float = field(default_factory=time.perf_counter)
    finished_at: float | None = None
    duration_s: float | None = None

    flags: int = 0
    rules: int = 0

    files_cached: int = 0
    bytes_cached: int = 0

    commands_run: int = 0
    aliases_total: int = 0
    aliases_by_type: Dict[str, int] = field(default_factory=dict)

    time_by_stage: Dict[str, float] = field(
        default_factory=lambda: {
            "cache_build": 0.0,
            "literal": 0.0,
            "case": 0.0,
            "file_pattern": 0.0,
            "command": 0.0,
        }
    )

    def add_cached(self, *, files: int, size: int) -> None:
        self.files_cached += files
        self.bytes_cached += size

    def add_aliases(self, kind: str, count: int) -> None:
        self.aliases_by_type[kind] = self.aliases_by_type.get(kind, 0) + count

    def add_command(self) -> None:
        self.commands_run += 1

    def add_time(self, stage: str, seconds: float) -> None:
        self.time_by_stage[stage] = self.time_by_stage.get(stage, 0.0) + seconds

    def finish(self, *, aliases_total: int) -> None:
        self.aliases_total = aliases_total
        self.finished_at = time.perf_counter()
        self.duration_s = self.finished_at - self.started_at

    def to_json(self, *, indent: int = 2) -> str:
        return json.dumps(
            {
                "started_at": self.started_at,
                "finished_at": self.finished_at,
                "duration_s": self.duration_s,
                "flags": self.flags,
                "rules": self.rules,
                "files_cached": self.files_cached,
                "bytes_cached": self.bytes_cached,
                "commands_run": self.commands_run,
                "aliases_total": self.aliases_total,
                "aliases_by_type": self.aliases_by_type,
                "time_by_stage": self.time_by_stage,
            },
            indent=indent,
        )


class StageTimer:
    def __init__(self, report: ResolutionReport, stage: str):
        self._report = report
        self._stage = stage
        self._t0: float | None = None

    def __enter__(self):
        self._t0 = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        if self._t0 is not None:
            self._report.add_time(self._stage, time.perf_counter() - self._t0)
        return False
