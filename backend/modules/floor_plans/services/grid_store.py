# backend/modules/floor_plans/services/grid_store.py

"""
Grid cell store: the working set of placed items, one per (floor, x, y).
"""

from typing import Dict, Iterable, List, Optional, Set, TYPE_CHECKING
import logging

from ..models.floor_plan_models import CellKey, Item, ItemKind, policy_for

if TYPE_CHECKING:
    from .floor_registry import FloorRegistry

logger = logging.getLogger(__name__)


class GridCellStore:
    """Keyed item store enforcing at most one item per cell"""

    def __init__(self, floor_plan_id: Optional[int] = None):
        self.floor_plan_id = floor_plan_id
        self._cells: Dict[CellKey, Item] = {}
        self._dirty = False
        # Bumped on every mutation; lets a save tell whether it is still current
        self.revision = 0

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    def mark_dirty(self) -> None:
        self._dirty = True
        self.revision += 1

    def mark_clean(self) -> None:
        self._dirty = False

    def __len__(self) -> int:
        return len(self._cells)

    def get(self, x: int, y: int, floor: int) -> Optional[Item]:
        return self._cells.get((floor, x, y))

    def place(
        self,
        x: int,
        y: int,
        floor: int,
        kind: ItemKind,
        rotation: int,
        registry: "FloorRegistry"
    ) -> Optional[Item]:
        """Paint a kind onto a cell, returning the item now occupying it"""

        if not policy_for(kind).is_stored:
            self.erase(x, y, floor)
            return None

        existing = self.get(x, y, floor)
        if existing:
            # Identity is kept whether the kind changes or not
            existing.kind = kind
            existing.rotation = rotation
            existing.touch()
            self.mark_dirty()
            return existing

        item = Item(
            kind=kind,
            x=x,
            y=y,
            rotation=rotation,
            floor_level=floor,
            floor_name=registry.name_of(floor),
            floor_plan_id=self.floor_plan_id,
        )
        self._cells[item.key] = item
        self.mark_dirty()
        return item

    def erase(self, x: int, y: int, floor: int) -> Optional[Item]:
        removed = self._cells.pop((floor, x, y), None)
        self.mark_dirty()
        return removed

    def items_on_floor(self, floor: int) -> List[Item]:
        return [item for item in self._cells.values() if item.floor_level == floor]

    def all_items(self) -> List[Item]:
        return list(self._cells.values())

    def levels(self) -> Set[int]:
        """Floor levels that currently hold at least one item"""
        return {item.floor_level for item in self._cells.values()}

    def count_by_kind(self, floor: Optional[int] = None) -> Dict[str, int]:
        counts = {kind.value: 0 for kind in ItemKind if policy_for(kind).is_stored}
        for item in self._cells.values():
            if floor is None or item.floor_level == floor:
                counts[item.kind.value] += 1
        return counts

    def set_floor_name(self, floor: int, name: str) -> int:
        """Rewrite the floor name snapshot on every item of a floor"""

        updated = 0
        for item in self.items_on_floor(floor):
            item.floor_name = name
            item.touch()
            updated += 1
        self.mark_dirty()
        return updated

    def set_table_name(self, cells: Iterable[CellKey], name: str) -> List[Item]:
        renamed = []
        for key in cells:
            item = self._cells.get(key)
            if item:
                item.table_name = name
                item.touch()
                renamed.append(item)
        self.mark_dirty()
        return renamed

    def clear(self, floor: Optional[int] = None) -> int:
        if floor is None:
            removed = len(self._cells)
            self._cells.clear()
        else:
            keys = [key for key in self._cells if key[0] == floor]
            for key in keys:
                del self._cells[key]
            removed = len(keys)
        self.mark_dirty()
        return removed

    def load(self, items: Iterable[Item]) -> None:
        """Replace the whole working set without marking it dirty"""

        self._cells = {}
        for item in items:
            if not item.policy.is_stored:
                continue
            if item.key in self._cells:
                logger.warning(
                    f"Duplicate item at floor {item.floor_level} ({item.x}, {item.y}), "
                    f"keeping item {item.id}"
                )
            self._cells[item.key] = item
        self._dirty = False
