"""Configuration for building a verified catalog.

``EngineConfig`` picks the native range an engine works in and controls
how thoroughly the factory verifies the catalog before releasing it.
"""
from __future__ import annotations

from dataclasses import dataclass

from bounds import INT64, Bounds


@dataclass(frozen=True)
class EngineConfig:
    native: Bounds = INT64
    verify: bool = True
    sample_count: int = 64          # random samples per property
    seed: int = 0
    exhaustive_threshold: int = 16  # max native width checked exhaustively
    extended_digits: int = 24       # digit count of extended edge samples

    def __post_init__(self) -> None:
        if not self.native.within(INT64):
            raise ValueError("native bounds must lie inside INT64")
        if self.sample_count < 0:
            raise ValueError(f"sample_count must be >= 0, got {self.sample_count}")
        if self.exhaustive_threshold < 0:
            raise ValueError(
                f"exhaustive_threshold must be >= 0, got {self.exhaustive_threshold}"
            )
        if self.extended_digits < 1:
            raise ValueError(
                f"extended_digits must be >= 1, got {self.extended_digits}"
            )

    @property
    def exhaustive(self) -> bool:
        return self.native.width <= self.exhaustive_threshold
