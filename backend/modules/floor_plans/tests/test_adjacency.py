# backend/modules/floor_plans/tests/test_adjacency.py

"""
Tests for neighbor scanning, chair capacity and group renaming
"""

import pytest

from modules.floor_plans.exceptions import EmptyNameError, FloorPlanValidationError
from modules.floor_plans.models.floor_plan_models import ItemKind


class TestNeighbors:
    """Test Moore neighborhood scanning"""

    def test_neighbors_exclude_center(self, adjacency, place):
        place(3, 3, ItemKind.TABLE)
        place(2, 2, ItemKind.CHAIR)
        place(4, 4, ItemKind.WALL)
        place(5, 5, ItemKind.CHAIR)  # two cells away

        positions = {item.position for item in adjacency.neighbors_of(3, 3, 1)}

        assert positions == {(2, 2), (4, 4)}

    def test_neighbors_limited_to_same_floor(self, adjacency, place):
        place(3, 3, ItemKind.TABLE)
        place(3, 4, ItemKind.CHAIR, floor=2)

        assert adjacency.neighbors_of(3, 3, 1) == []

    def test_neighbors_skip_cells_outside_grid(self, adjacency, place, plan):
        place(0, 0, ItemKind.TABLE)
        place(1, 1, ItemKind.CHAIR)
        stale = place(9, 9, ItemKind.CHAIR)
        plan.width = plan.height = 9  # (9, 9) now outside the grid

        assert [i.position for i in adjacency.neighbors_of(0, 0, 1)] == [(1, 1)]
        assert stale not in adjacency.neighbors_of(8, 8, 1)

    def test_chair_count_around_table(self, adjacency, place):
        place(3, 3, ItemKind.TABLE)
        place(3, 2, ItemKind.CHAIR)
        place(3, 4, ItemKind.CHAIR)
        place(2, 3, ItemKind.WALL)

        assert adjacency.chair_count_around(3, 3, 1) == 2

    def test_chair_count_includes_diagonals(self, adjacency, place):
        place(5, 5, ItemKind.TABLE)
        for x, y in [(4, 4), (6, 4), (4, 6), (6, 6)]:
            place(x, y, ItemKind.CHAIR)

        assert adjacency.chair_count_around(5, 5, 1) == 4


class TestGrouping:
    """Test one-hop table groups"""

    def test_group_contains_table_and_all_neighbors(self, adjacency, place):
        place(3, 3, ItemKind.TABLE)
        place(3, 2, ItemKind.CHAIR)
        place(4, 3, ItemKind.WALL)

        assert adjacency.group_of(3, 3, 1) == {(3, 3), (3, 2), (4, 3)}

    def test_rename_updates_table_and_neighbors(self, adjacency, place, store):
        table = place(3, 3, ItemKind.TABLE)
        north = place(3, 2, ItemKind.CHAIR)
        south = place(3, 4, ItemKind.CHAIR)
        far = place(7, 7, ItemKind.CHAIR)
        store.mark_clean()

        renamed = adjacency.rename_group(3, 3, 1, "Window Table")

        assert {i.id for i in renamed} == {table.id, north.id, south.id}
        assert table.table_name == "Window Table"
        assert north.table_name == "Window Table"
        assert south.table_name == "Window Table"
        assert far.table_name is None
        assert store.is_dirty

    def test_rename_does_not_cascade_through_adjacent_tables(self, adjacency, place):
        left_chair = place(1, 2, ItemKind.CHAIR)
        table_a = place(2, 2, ItemKind.TABLE)
        table_b = place(3, 2, ItemKind.TABLE)
        right_chair = place(4, 2, ItemKind.CHAIR)

        adjacency.rename_group(2, 2, 1, "Banquet")

        assert left_chair.table_name == "Banquet"
        assert table_a.table_name == "Banquet"
        assert table_b.table_name == "Banquet"
        assert right_chair.table_name is None

    def test_rename_ignores_other_floors(self, adjacency, place):
        place(3, 3, ItemKind.TABLE)
        upstairs = place(3, 4, ItemKind.CHAIR, floor=2)

        adjacency.rename_group(3, 3, 1, "Booth")

        assert upstairs.table_name is None

    def test_rename_is_not_rederived_later(self, adjacency, place):
        place(3, 3, ItemKind.TABLE)
        adjacency.rename_group(3, 3, 1, "Booth")

        late_chair = place(3, 4, ItemKind.CHAIR)

        assert late_chair.table_name is None

    def test_rename_blank_name_rejected(self, adjacency, place, store):
        table = place(3, 3, ItemKind.TABLE)
        store.mark_clean()

        with pytest.raises(EmptyNameError):
            adjacency.rename_group(3, 3, 1, "  ")

        assert table.table_name is None
        assert not store.is_dirty

    def test_rename_rejects_table_outside_grid(self, adjacency, place, plan, store):
        hidden = place(8, 8, ItemKind.TABLE)
        place(8, 7, ItemKind.CHAIR)
        plan.width = plan.height = 6
        store.mark_clean()

        with pytest.raises(FloorPlanValidationError):
            adjacency.rename_group(8, 8, 1, "Ghost")

        assert hidden.table_name is None
        assert not store.is_dirty

    def test_rename_requires_table(self, adjacency, place):
        place(3, 3, ItemKind.CHAIR)

        with pytest.raises(FloorPlanValidationError):
            adjacency.rename_group(3, 3, 1, "Nope")


class TestRenameTarget:
    """Test context-click target resolution"""

    def test_table_targets_itself(self, adjacency, place):
        table = place(3, 3, ItemKind.TABLE)

        assert adjacency.resolve_rename_target(3, 3, 1) is table

    def test_chair_targets_neighbor_table(self, adjacency, place):
        table = place(3, 3, ItemKind.TABLE)
        place(4, 4, ItemKind.CHAIR)

        assert adjacency.resolve_rename_target(4, 4, 1) is table

    def test_lonely_chair_and_wall_have_no_target(self, adjacency, place):
        place(0, 0, ItemKind.CHAIR)
        place(5, 5, ItemKind.WALL)
        place(5, 6, ItemKind.TABLE)

        assert adjacency.resolve_rename_target(0, 0, 1) is None
        assert adjacency.resolve_rename_target(5, 5, 1) is None
        assert adjacency.resolve_rename_target(8, 8, 1) is None
