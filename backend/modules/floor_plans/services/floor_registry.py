# backend/modules/floor_plans/services/floor_registry.py

"""
Floor registry: floor level naming, independent of item placement.
"""

from typing import Dict, Iterable, List, Optional, TYPE_CHECKING
import logging

from ..config.floor_plan_config import floor_plan_config
from ..exceptions import EmptyNameError, FloorPlanValidationError
from ..models.floor_plan_models import DEFAULT_FLOOR_LEVEL, FloorEntry

if TYPE_CHECKING:
    from .grid_store import GridCellStore

logger = logging.getLogger(__name__)


class FloorRegistry:
    """Mapping of floor level to display name"""

    def __init__(
        self,
        entries: Optional[Iterable[FloorEntry]] = None,
        name_template: Optional[str] = None
    ):
        self.name_template = name_template or floor_plan_config.DEFAULT_FLOOR_NAME_TEMPLATE
        self._names: Dict[int, str] = {}
        self._dirty = False
        self.revision = 0
        if entries:
            self.load(entries)

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    def mark_clean(self) -> None:
        self._dirty = False

    def levels(self, item_levels: Iterable[int] = ()) -> List[int]:
        """Known levels: registered ones, those holding items, and level 1"""
        known = set(self._names) | set(item_levels)
        known.add(DEFAULT_FLOOR_LEVEL)
        return sorted(known)

    def name_of(self, level: int) -> str:
        name = self._names.get(level)
        if name is None:
            return self.name_template.format(level=level)
        return name

    def is_registered(self, level: int) -> bool:
        return level in self._names

    def register(self, level: int, name: str) -> FloorEntry:
        level = self._validate_level(level)
        name = self._validate_name(name)
        if self._names.get(level) != name:
            self._names[level] = name
            self._dirty = True
            self.revision += 1
        return FloorEntry(level=level, name=name)

    def rename(self, level: int, name: str, store: "GridCellStore") -> int:
        """Rename a level and propagate the name onto its items"""

        entry = self.register(level, name)
        updated = store.set_floor_name(entry.level, entry.name)
        logger.info(f"Renamed floor {entry.level} to '{entry.name}' ({updated} items)")
        return updated

    def next_level(self, item_levels: Iterable[int] = ()) -> int:
        return max(self.levels(item_levels)) + 1

    def entries(self) -> List[FloorEntry]:
        return [FloorEntry(level=level, name=self._names[level]) for level in sorted(self._names)]

    def load(self, entries: Iterable[FloorEntry]) -> None:
        self._names = {}
        for entry in entries:
            level = self._validate_level(entry.level)
            name = (entry.name or "").strip()
            if not name:
                logger.warning(f"Ignoring blank name stored for floor {level}")
                continue
            self._names[level] = name
        self._dirty = False

    def _validate_level(self, level: int) -> int:
        if level < DEFAULT_FLOOR_LEVEL:
            raise FloorPlanValidationError(
                f"Floor level must be >= {DEFAULT_FLOOR_LEVEL}", field="floor_level", value=level
            )
        return level

    def _validate_name(self, name: Optional[str]) -> str:
        cleaned = (name or "").strip()
        if not cleaned:
            raise EmptyNameError("Floor name")
        return cleaned
