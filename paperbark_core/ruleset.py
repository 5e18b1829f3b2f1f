from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet


@dataclass(frozen=True)
class Ruleset:
    """Static puzzle constraints: inclusive region size bounds and the valid words."""
    min_length: int
    max_length: int
    dictionary: FrozenSet[str]  # uppercase, normalized by the loader
