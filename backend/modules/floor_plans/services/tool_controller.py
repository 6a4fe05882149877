# backend/modules/floor_plans/services/tool_controller.py

"""
Tool and paint controller: turns pointer gestures into grid mutations.
"""

from typing import Iterable, Iterator, List, Optional, Tuple
import logging

from ..exceptions import FloorPlanValidationError
from ..models.floor_plan_models import (
    DEFAULT_FLOOR_LEVEL,
    ERASER_SHORTCUT,
    KIND_POLICIES,
    ROTATE_SHORTCUT,
    VALID_ROTATIONS,
    FloorPlan,
    Item,
    Tool,
)
from .adjacency_service import AdjacencyService
from .floor_registry import FloorRegistry
from .grid_store import GridCellStore

logger = logging.getLogger(__name__)

SHORTCUTS = {policy.shortcut: Tool(kind.value) for kind, policy in KIND_POLICIES.items()}
SHORTCUTS[ERASER_SHORTCUT] = Tool.ERASER


class ToolController:
    """Active tool, rotation and viewed floor of one editor"""

    def __init__(
        self,
        store: GridCellStore,
        registry: FloorRegistry,
        adjacency: AdjacencyService,
        plan: FloorPlan
    ):
        self.store = store
        self.registry = registry
        self.adjacency = adjacency
        self.plan = plan
        self.selected_tool = Tool.TABLE
        self.rotation = 0
        self.current_floor = DEFAULT_FLOOR_LEVEL
        self.is_painting = False

    def select_tool(self, tool: Tool) -> None:
        self.selected_tool = Tool(tool)

    def set_rotation(self, rotation: int) -> None:
        if rotation not in VALID_ROTATIONS:
            raise FloorPlanValidationError(
                f"Rotation must be one of {VALID_ROTATIONS}", field="rotation", value=rotation
            )
        self.rotation = rotation

    def cycle_rotation(self) -> int:
        self.rotation = (self.rotation + 90) % 360
        return self.rotation

    def select_floor(self, level: int) -> None:
        if level < DEFAULT_FLOOR_LEVEL:
            raise FloorPlanValidationError(
                f"Floor level must be >= {DEFAULT_FLOOR_LEVEL}", field="floor_level", value=level
            )
        self.end_paint()
        self.current_floor = level

    def handle_key(self, key: str) -> bool:
        """Apply a keyboard shortcut, returning whether it was recognized"""

        key = key.upper()
        if key == ROTATE_SHORTCUT:
            self.cycle_rotation()
            return True
        tool = SHORTCUTS.get(key)
        if tool is None:
            return False
        self.select_tool(tool)
        return True

    def click(self, x: int, y: int) -> Optional[Item]:
        """Primary click: apply the selected tool to one cell"""

        if not self.plan.contains(x, y):
            raise FloorPlanValidationError(
                f"Cell ({x}, {y}) is outside the {self.plan.width}x{self.plan.height} grid",
                field="position",
                value={"x": x, "y": y},
            )
        return self._apply(x, y)

    def begin_paint(self) -> None:
        self.is_painting = True

    def enter_cell(self, x: int, y: int) -> Optional[Item]:
        """Pointer entered a cell; paints it while the button is held"""

        if not self.is_painting:
            return None
        if not self.plan.contains(x, y):
            # Leaving the grid area ends the stroke
            self.end_paint()
            return None
        return self._apply(x, y)

    def end_paint(self) -> None:
        self.is_painting = False

    def paint_stroke(
        self, cells: Iterable[Tuple[int, int]]
    ) -> Iterator[Tuple[Tuple[int, int], Optional[Item]]]:
        """Paint every cell entered during one press-and-drag gesture"""

        self.begin_paint()
        try:
            for x, y in cells:
                if not self.is_painting:
                    break
                item = self.enter_cell(x, y)
                if self.is_painting:
                    yield (x, y), item
        finally:
            self.end_paint()

    def drag(self, cells: Iterable[Tuple[int, int]]) -> List[Tuple[Tuple[int, int], Optional[Item]]]:
        return list(self.paint_stroke(cells))

    def context_click(self, x: int, y: int) -> Optional[Item]:
        """Secondary click: resolve the table to rename, never mutates"""

        if not self.plan.contains(x, y):
            return None
        return self.adjacency.resolve_rename_target(x, y, self.current_floor)

    def _apply(self, x: int, y: int) -> Optional[Item]:
        kind = self.selected_tool.kind
        if kind is None:
            self.store.erase(x, y, self.current_floor)
            return None
        return self.store.place(
            x, y, self.current_floor, kind, self.rotation, self.registry
        )
