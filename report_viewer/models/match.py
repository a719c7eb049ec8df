"""Matched region between two submission files."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True, slots=True, eq=False)
class Match:
    """One contiguous matched region, expressed in token offsets.

    Equality is identity: two matches with the same offsets are still
    different matches.
    """

    first_file: str
    second_file: str
    start_in_first: int
    end_in_first: int
    start_in_second: int
    end_in_second: int
    tokens: int
    color_index: Optional[int] = None

    @property
    def is_colored(self) -> bool:
        return self.color_index is not None

    def with_color(self, color_index: int) -> Match:
        """Return a copy carrying ``color_index``. A match is colored only once."""
        if self.color_index is not None:
            raise ValueError(f"match already has color {self.color_index}")
        return replace(self, color_index=color_index)
