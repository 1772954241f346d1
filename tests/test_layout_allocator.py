"""Layout allocator tests."""

from __future__ import annotations

from planner.layout_allocator import allocate_positions


def test_positions_follow_level_and_arrival_order() -> None:
    levels = {"A": 0, "B": 1, "X": 0, "Y": 1}
    positions = allocate_positions(["A", "B", "X", "Y"], levels)

    assert (positions["A"].x, positions["A"].y) == (0, 0)
    assert (positions["X"].x, positions["X"].y) == (0, 100)
    assert (positions["B"].x, positions["B"].y) == (300, 0)
    assert (positions["Y"].x, positions["Y"].y) == (300, 100)


def test_same_level_nodes_never_share_a_slot() -> None:
    levels = {f"T{i}": i % 3 for i in range(20)}
    positions = allocate_positions(list(levels), levels)

    slots = [(p.x, p.y) for p in positions.values()]
    assert len(slots) == len(set(slots))


def test_missing_level_falls_back_to_next_free_slot_in_level_zero() -> None:
    positions = allocate_positions(["A", "Z", "B"], {"A": 0, "B": 1})

    assert (positions["Z"].x, positions["Z"].y) == (0, 100)
    assert (positions["B"].x, positions["B"].y) == (300, 0)


def test_custom_spacing_and_ids_outside_node_set_are_ignored() -> None:
    positions = allocate_positions(["A", "B"], {"ghost": 0, "A": 0, "B": 2}, 50, 20)

    assert set(positions) == {"A", "B"}
    assert (positions["A"].x, positions["A"].y) == (0, 0)
    assert (positions["B"].x, positions["B"].y) == (100, 0)
