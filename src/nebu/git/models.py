"""Serializable data models for git operations."""

from __future__ import annotations

from dataclasses import dataclass

from nebu.git._internal.constants import (
    MERGE_FASTFORWARD,
    MERGE_NORMAL,
    MERGE_UNBORN,
    MERGE_UP_TO_DATE,
)


@dataclass(frozen=True, slots=True)
class VersionPointer:
    """Local branch tip and its upstream tip, as hex commit ids."""

    local: str
    upstream: str


@dataclass(frozen=True, slots=True)
class Divergence:
    """Commits reachable from one tip but not the other.

    ``ahead`` counts commits only on the local side, ``behind`` those only on
    the upstream side.
    """

    ahead: int
    behind: int

    @property
    def is_synced(self) -> bool:
        return self.ahead == 0 and self.behind == 0


@dataclass(frozen=True, slots=True)
class MergeAnalysis:
    """Result of merge analysis."""

    up_to_date: bool
    fastforward_possible: bool
    conflicts_likely: bool
    unborn: bool = False

    @classmethod
    def from_flags(cls, analysis: int) -> MergeAnalysis:
        return cls(
            up_to_date=bool(analysis & MERGE_UP_TO_DATE),
            fastforward_possible=bool(analysis & MERGE_FASTFORWARD),
            conflicts_likely=bool(analysis & MERGE_NORMAL),
            unborn=bool(analysis & MERGE_UNBORN),
        )
