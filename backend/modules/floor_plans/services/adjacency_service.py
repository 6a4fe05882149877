# backend/modules/floor_plans/services/adjacency_service.py

"""
Adjacency and grouping: chair capacity and table naming groups derived
from the 8 cells surrounding a table.

Grouping is a single hop. A rename covers the table and its immediate
neighbors only and never spreads through chains of touching tables.
"""

from typing import List, Optional, Set, Tuple
import logging

from ..exceptions import EmptyNameError, FloorPlanValidationError
from ..models.floor_plan_models import NEIGHBOR_OFFSETS, FloorPlan, Item, ItemKind
from .grid_store import GridCellStore

logger = logging.getLogger(__name__)


class AdjacencyService:
    """Neighbor scanning over one plan's grid store"""

    def __init__(self, store: GridCellStore, plan: FloorPlan):
        self.store = store
        self.plan = plan

    def neighbors_of(self, x: int, y: int, floor: int) -> List[Item]:
        """Items in the Moore neighborhood of a cell, within grid bounds"""

        neighbors = []
        for dx, dy in NEIGHBOR_OFFSETS:
            nx, ny = x + dx, y + dy
            if not self.plan.contains(nx, ny):
                continue
            item = self.store.get(nx, ny, floor)
            if item:
                neighbors.append(item)
        return neighbors

    def chair_count_around(self, table_x: int, table_y: int, floor: int) -> int:
        return sum(
            1 for item in self.neighbors_of(table_x, table_y, floor)
            if item.policy.is_seat
        )

    def group_of(self, table_x: int, table_y: int, floor: int) -> Set[Tuple[int, int]]:
        group = {(table_x, table_y)}
        group.update(item.position for item in self.neighbors_of(table_x, table_y, floor))
        return group

    def resolve_rename_target(self, x: int, y: int, floor: int) -> Optional[Item]:
        """Table a context click on (x, y) refers to, if any"""

        item = self.store.get(x, y, floor)
        if not item:
            return None
        if item.policy.anchors_group:
            return item
        if item.kind == ItemKind.CHAIR:
            for neighbor in self.neighbors_of(x, y, floor):
                if neighbor.policy.anchors_group:
                    return neighbor
        return None

    def rename_group(self, table_x: int, table_y: int, floor: int, name: str) -> List[Item]:
        """Set table_name on a table and every item around it"""

        cleaned = (name or "").strip()
        if not cleaned:
            raise EmptyNameError("Table name")

        if not self.plan.contains(table_x, table_y):
            raise FloorPlanValidationError(
                f"Cell ({table_x}, {table_y}) is outside the {self.plan.width}x{self.plan.height} grid",
                field="position",
                value={"x": table_x, "y": table_y},
            )

        table = self.store.get(table_x, table_y, floor)
        if not table or not table.policy.anchors_group:
            raise FloorPlanValidationError(
                f"No table at ({table_x}, {table_y}) on floor {floor}",
                field="position",
                value={"x": table_x, "y": table_y, "floor_level": floor},
            )

        cells = [(floor, x, y) for x, y in self.group_of(table_x, table_y, floor)]
        renamed = self.store.set_table_name(cells, cleaned)
        logger.info(
            f"Renamed table at ({table_x}, {table_y}) floor {floor} to '{cleaned}' "
            f"({len(renamed)} items)"
        )
        return renamed
