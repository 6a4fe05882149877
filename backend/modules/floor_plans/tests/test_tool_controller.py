# backend/modules/floor_plans/tests/test_tool_controller.py

"""
Tests for tool selection, clicks and drag painting
"""

import pytest

from modules.floor_plans.exceptions import FloorPlanValidationError
from modules.floor_plans.models.floor_plan_models import ItemKind, Tool
from modules.floor_plans.services.tool_controller import SHORTCUTS


class TestToolSelection:
    """Test tool, rotation and shortcut state"""

    def test_defaults(self, tools):
        assert tools.selected_tool == Tool.TABLE
        assert tools.rotation == 0
        assert tools.current_floor == 1
        assert not tools.is_painting

    def test_shortcut_map(self):
        assert SHORTCUTS == {
            "1": Tool.TABLE,
            "2": Tool.CHAIR,
            "3": Tool.WALL,
            "4": Tool.EMPTY,
            "E": Tool.ERASER,
        }

    def test_handle_key_selects_tool(self, tools):
        assert tools.handle_key("e") is True
        assert tools.selected_tool == Tool.ERASER

        assert tools.handle_key("2") is True
        assert tools.selected_tool == Tool.CHAIR

    def test_handle_key_rotate_cycles(self, tools):
        for expected in (90, 180, 270, 0):
            assert tools.handle_key("r") is True
            assert tools.rotation == expected

    def test_unknown_key_ignored(self, tools):
        assert tools.handle_key("x") is False
        assert tools.selected_tool == Tool.TABLE

    def test_invalid_rotation_rejected(self, tools):
        with pytest.raises(FloorPlanValidationError):
            tools.set_rotation(45)

        assert tools.rotation == 0

    def test_select_floor_ends_stroke(self, tools):
        tools.begin_paint()

        tools.select_floor(3)

        assert tools.current_floor == 3
        assert not tools.is_painting

    def test_select_floor_rejects_zero(self, tools):
        with pytest.raises(FloorPlanValidationError):
            tools.select_floor(0)


class TestClick:
    """Test single-cell application"""

    def test_click_places_selected_kind_with_rotation(self, tools, store):
        tools.select_tool(Tool.WALL)
        tools.set_rotation(180)

        item = tools.click(2, 4)

        assert item.kind == ItemKind.WALL
        assert item.rotation == 180
        assert store.get(2, 4, 1) is item

    def test_click_on_current_floor(self, tools, store):
        tools.select_floor(2)

        tools.click(1, 1)

        assert store.get(1, 1, 1) is None
        assert store.get(1, 1, 2).kind == ItemKind.TABLE

    def test_eraser_removes_item(self, tools, store, place):
        place(5, 5, ItemKind.CHAIR)
        tools.select_tool(Tool.ERASER)

        assert tools.click(5, 5) is None
        assert store.get(5, 5, 1) is None

    def test_empty_tool_acts_as_eraser(self, tools, store, place):
        place(5, 5, ItemKind.WALL)
        tools.select_tool(Tool.EMPTY)

        tools.click(5, 5)

        assert len(store) == 0

    def test_click_outside_grid_rejected(self, tools, store):
        with pytest.raises(FloorPlanValidationError):
            tools.click(10, 0)

        assert len(store) == 0
        assert not store.is_dirty


class TestDragPaint:
    """Test press-and-drag strokes"""

    def test_drag_paints_every_entered_cell(self, tools, store):
        tools.select_tool(Tool.WALL)

        painted = tools.drag([(0, 0), (1, 0), (2, 0)])

        assert [cell for cell, _ in painted] == [(0, 0), (1, 0), (2, 0)]
        assert store.count_by_kind()["wall"] == 3
        assert not tools.is_painting

    def test_drag_revisiting_cell_keeps_single_item(self, tools, store):
        painted = tools.drag([(0, 0), (1, 0), (0, 0)])

        assert len(painted) == 3
        assert len(store) == 2
        assert painted[0][1].id == painted[2][1].id

    def test_leaving_grid_ends_stroke(self, tools, store):
        tools.select_tool(Tool.CHAIR)

        painted = tools.drag([(8, 0), (9, 0), (10, 0), (9, 1)])

        assert [cell for cell, _ in painted] == [(8, 0), (9, 0)]
        assert store.get(9, 1, 1) is None
        assert not tools.is_painting

    def test_enter_cell_without_press_does_nothing(self, tools, store):
        assert tools.enter_cell(1, 1) is None
        assert len(store) == 0

    def test_eraser_drag(self, tools, store, place):
        for x in range(4):
            place(x, 0, ItemKind.WALL)
        tools.select_tool(Tool.ERASER)

        tools.drag([(0, 0), (1, 0)])

        assert sorted(item.x for item in store.all_items()) == [2, 3]


class TestContextClick:
    """Test rename target resolution through the controller"""

    def test_context_click_resolves_without_mutation(self, tools, store, place):
        table = place(4, 4, ItemKind.TABLE)
        place(4, 5, ItemKind.CHAIR)
        store.mark_clean()

        assert tools.context_click(4, 5) is table
        assert not store.is_dirty

    def test_context_click_outside_grid(self, tools):
        assert tools.context_click(-1, 3) is None

    def test_context_click_uses_current_floor(self, tools, place):
        place(4, 4, ItemKind.TABLE, floor=2)

        assert tools.context_click(4, 4) is None

        tools.select_floor(2)
        assert tools.context_click(4, 4).floor_level == 2
