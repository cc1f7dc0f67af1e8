"""Shared dataclasses for the flat cube."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ChangeEvent:
    kind: str  # rotate_row | rotate_column | look_at | reset
    orientation: str
    index: int | None = None
    direction: str | None = None
