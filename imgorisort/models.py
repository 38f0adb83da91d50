from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class Orientation(Enum):
    TALL = "tall"
    WIDE = "wide"
    SQUARE = "square"


@dataclass(frozen=True, slots=True)
class RelocationPlan:
    source: Path
    destination: Path | None
    reason: str = ""

    @property
    def skipped(self) -> bool:
        return self.destination is None


@dataclass(slots=True)
class RelocationReport:
    relocated: int = 0
    failed: int = 0
    skipped: int = 0


@dataclass
class RunReport:
    dry_run: bool
    discovered: int
    relocation: RelocationReport
    skips_by_reason: Counter = field(default_factory=Counter)
    plans: list[RelocationPlan] = field(default_factory=list)

    @property
    def relocated(self) -> int:
        return self.relocation.relocated
