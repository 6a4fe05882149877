# backend/modules/floor_plans/services/resize_service.py

"""
Grid resizing. Shrinking never discards items: cells outside the new
bounds are kept and become addressable again once the grid grows back.
"""

from typing import List, Optional, Tuple
import logging

from ..config.floor_plan_config import floor_plan_config
from ..exceptions import InvalidGridSizeError
from ..models.floor_plan_models import FloorPlan, Item
from .grid_store import GridCellStore

logger = logging.getLogger(__name__)


class ResizeService:
    """Validates and applies grid bounds changes"""

    def __init__(
        self,
        store: GridCellStore,
        plan: FloorPlan,
        min_size: Optional[int] = None,
        max_size: Optional[int] = None
    ):
        self.store = store
        self.plan = plan
        self.min_size = min_size if min_size is not None else floor_plan_config.GRID_MIN_SIZE
        self.max_size = max_size if max_size is not None else floor_plan_config.GRID_MAX_SIZE

    def validate(self, width: int, height: int) -> Tuple[int, int]:
        for value in (width, height):
            if not isinstance(value, int) or not self.min_size <= value <= self.max_size:
                logger.warning(f"Rejected resize to {width}x{height}")
                raise InvalidGridSizeError(width, height, self.min_size, self.max_size)
        return width, height

    def resize(self, width: int, height: int) -> FloorPlan:
        width, height = self.validate(width, height)
        self.plan.width = width
        self.plan.height = height
        hidden = len(self.hidden_items())
        logger.info(
            f"Resized floor plan {self.plan.id} to {width}x{height}"
            + (f", {hidden} items outside bounds retained" if hidden else "")
        )
        return self.plan

    def is_in_bounds(self, item: Item) -> bool:
        return self.plan.contains(item.x, item.y)

    def visible_items(self, floor: int) -> List[Item]:
        return [item for item in self.store.items_on_floor(floor) if self.is_in_bounds(item)]

    def hidden_items(self, floor: Optional[int] = None) -> List[Item]:
        items = self.store.all_items() if floor is None else self.store.items_on_floor(floor)
        return [item for item in items if not self.is_in_bounds(item)]
