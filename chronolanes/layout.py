from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Set

from .models import TimelineConfig
from .timeline_builder import TimelineItem, build_timeline_items
from .values import Record

logger = logging.getLogger("chronolanes.layout")

Track = List[TimelineItem]


def _chronological_key(item: TimelineItem) -> tuple:
    return (item.range.start_day, item.range.end_day)


def sort_by_index_or_date(items: Sequence[TimelineItem]) -> List[TimelineItem]:
    """Return the display order.

    If any item carries an index the whole batch is ordered by index (missing
    index counts as 0), otherwise by start day then end day. Both sorts are
    stable, so ties keep the build order.
    """

    if any(item.index_value is not None for item in items):
        return sorted(items, key=lambda item: item.index_value or 0.0)
    return sorted(items, key=_chronological_key)


def assign_tracks(items: Sequence[TimelineItem]) -> List[Track]:
    """Pack items into lanes, first fit, in the order given.

    An item goes on the first track whose last end day is strictly before its
    start day. The result follows display order, so it is not guaranteed to be
    the minimum number of lanes when the order is index based.
    """

    tracks: List[Track] = []
    last_end: List[int] = []
    for item in items:
        for position, end_day in enumerate(last_end):
            if item.range.start_day > end_day:
                tracks[position].append(item)
                last_end[position] = item.range.end_day
                break
        else:
            tracks.append([item])
            last_end.append(item.range.end_day)
    return tracks


def detect_index_conflicts(items: Sequence[TimelineItem]) -> Set[str]:
    """Flag display-adjacent pairs that run against chronological order."""

    conflicts: Set[str] = set()
    if len(items) <= 1:
        return conflicts

    date_sorted = sorted(items, key=_chronological_key)
    position_by_identity: Dict[str, int] = {
        item.identity: position for position, item in enumerate(date_sorted)
    }
    for previous, current in zip(items, items[1:]):
        previous_rank = position_by_identity.get(previous.identity, 0)
        current_rank = position_by_identity.get(current.identity, 0)
        if current_rank < previous_rank:
            conflicts.add(previous.identity)
            conflicts.add(current.identity)
    return conflicts


@dataclass(frozen=True)
class TimelineLayout:
    items: List[TimelineItem] = field(default_factory=list)
    tracks: List[Track] = field(default_factory=list)
    conflicts: Set[str] = field(default_factory=set)
    min_day: Optional[int] = None
    max_day: Optional[int] = None

    @property
    def total_days(self) -> int:
        if self.min_day is None or self.max_day is None:
            return 0
        return max(1, self.max_day - self.min_day + 1)


def compute_layout(records: Iterable[Record], config: TimelineConfig) -> TimelineLayout:
    """Run the full pipeline: build, order, pack into tracks and flag conflicts."""

    if not config.start_prop:
        return TimelineLayout()

    items = build_timeline_items(
        records,
        config.start_prop,
        config.end_prop,
        config.index_prop,
        config.calendar_prop,
    )
    if not items:
        return TimelineLayout()

    ordered = sort_by_index_or_date(items)
    tracks = assign_tracks(ordered)
    conflicts = detect_index_conflicts(ordered)
    if conflicts:
        logger.info("Display order disagrees with chronology for %d item(s).", len(conflicts))

    return TimelineLayout(
        items=ordered,
        tracks=tracks,
        conflicts=conflicts,
        min_day=min(item.range.start_day for item in ordered),
        max_day=max(item.range.end_day for item in ordered),
    )


__all__ = [
    "TimelineLayout",
    "Track",
    "assign_tracks",
    "compute_layout",
    "detect_index_conflicts",
    "sort_by_index_or_date",
]
