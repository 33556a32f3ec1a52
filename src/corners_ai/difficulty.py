"""Search budgets per difficulty level."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Optional


@dataclass(frozen=True)
class DifficultyConfig:
    max_depth: int = 4
    max_time_ms: int = 2000
    name: str = "custom"

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1; got {self.max_depth}")
        if self.max_time_ms < 0:
            raise ValueError(f"max_time_ms must not be negative; got {self.max_time_ms}")

    def with_overrides(self, max_depth: Optional[int] = None, max_time_ms: Optional[int] = None) -> "DifficultyConfig":
        """Return a copy with the given limits replaced; the name becomes ``custom`` if anything changed."""

        if max_depth is None and max_time_ms is None:
            return self
        return replace(
            self,
            max_depth=self.max_depth if max_depth is None else max_depth,
            max_time_ms=self.max_time_ms if max_time_ms is None else max_time_ms,
            name="custom",
        )


DIFFICULTY_PRESETS: Dict[str, DifficultyConfig] = {
    "easy": DifficultyConfig(max_depth=2, max_time_ms=500, name="easy"),
    "medium": DifficultyConfig(max_depth=4, max_time_ms=2000, name="medium"),
    "hard": DifficultyConfig(max_depth=6, max_time_ms=5000, name="hard"),
}


def preset_difficulty(name: str) -> DifficultyConfig:
    preset = DIFFICULTY_PRESETS.get(name.lower())
    if preset is None:
        raise ValueError(f"Unknown difficulty '{name}'; expected one of {', '.join(DIFFICULTY_PRESETS)}")
    return preset
