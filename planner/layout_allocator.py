"""Convert levels into 2D canvas coordinates."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Mapping

from planner.types import Position

HORIZONTAL_SPACING = 300.0
VERTICAL_SPACING = 100.0


def allocate_positions(
    node_ids: Iterable[str],
    levels: Mapping[str, int],
    horizontal_spacing: float = HORIZONTAL_SPACING,
    vertical_spacing: float = VERTICAL_SPACING,
) -> dict[str, Position]:
    """Stack same-level nodes vertically and space levels horizontally.

    Buckets are filled in level-map order. A node without a level is placed at
    level 0 in the next free slot.
    """
    ordered = list(dict.fromkeys(node_ids))
    wanted = set(ordered)
    buckets: dict[int, list[str]] = defaultdict(list)
    for task_id, level in levels.items():
        if task_id in wanted:
            buckets[level].append(task_id)
    for task_id in ordered:
        if task_id not in levels:
            buckets[0].append(task_id)

    positions: dict[str, Position] = {}
    for level, members in buckets.items():
        for index, task_id in enumerate(members):
            positions[task_id] = Position(
                x=level * horizontal_spacing,
                y=index * vertical_spacing,
            )
    return positions
