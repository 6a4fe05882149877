# backend/modules/floor_plans/models/floor_plan_models.py

"""
In-memory domain model for the floor plan editor.

The authoritative copy of a plan lives in the persistence backend; these
types hold one editing session's working copy.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union
import uuid


VALID_ROTATIONS = (0, 90, 180, 270)
DEFAULT_FLOOR_LEVEL = 1

# (dx, dy) offsets of the Moore neighborhood, center excluded
NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = tuple(
    (dx, dy)
    for dy in (-1, 0, 1)
    for dx in (-1, 0, 1)
    if (dx, dy) != (0, 0)
)

ItemId = Union[int, str]
CellKey = Tuple[int, int, int]  # (floor_level, x, y)


class ItemKind(str, Enum):
    """Kind of object placed on a grid cell"""

    TABLE = "table"
    CHAIR = "chair"
    WALL = "wall"
    EMPTY = "empty"


class Tool(str, Enum):
    """Paint tools available in the editor"""

    TABLE = "table"
    CHAIR = "chair"
    WALL = "wall"
    EMPTY = "empty"
    ERASER = "eraser"

    @property
    def kind(self) -> Optional[ItemKind]:
        """Kind painted by this tool, None for the eraser"""
        if self is Tool.ERASER:
            return None
        return ItemKind(self.value)


@dataclass(frozen=True)
class KindPolicy:
    """Display and grouping behavior of one item kind"""

    label: str
    color: str
    shortcut: str
    is_seat: bool = False  # counted as capacity around a table
    anchors_group: bool = False  # can be the target of a group rename
    is_stored: bool = True  # placing it creates a record


KIND_POLICIES: Dict[ItemKind, KindPolicy] = {
    ItemKind.TABLE: KindPolicy("Table", "#D97706", "1", anchors_group=True),
    ItemKind.CHAIR: KindPolicy("Chair", "#3B82F6", "2", is_seat=True),
    ItemKind.WALL: KindPolicy("Wall", "#374151", "3"),
    ItemKind.EMPTY: KindPolicy("Empty", "#FFFFFF", "4", is_stored=False),
}

ERASER_SHORTCUT = "E"
ROTATE_SHORTCUT = "R"


def policy_for(kind: ItemKind) -> KindPolicy:
    return KIND_POLICIES[kind]


def new_item_id() -> str:
    return uuid.uuid4().hex


@dataclass
class Item:
    """A placed object occupying one cell of one floor"""

    kind: ItemKind
    x: int
    y: int
    rotation: int = 0
    floor_level: int = DEFAULT_FLOOR_LEVEL
    floor_name: Optional[str] = None
    table_name: Optional[str] = None
    meta: Dict[str, Any] = field(default_factory=dict)
    id: ItemId = field(default_factory=new_item_id)
    floor_plan_id: Optional[int] = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def key(self) -> CellKey:
        return (self.floor_level, self.x, self.y)

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)

    @property
    def policy(self) -> KindPolicy:
        return policy_for(self.kind)

    def touch(self) -> None:
        self.updated_at = datetime.utcnow()


@dataclass
class FloorEntry:
    """A named floor level"""

    level: int
    name: str


@dataclass
class FloorPlan:
    """Root aggregate of one venue layout"""

    id: int
    name: str
    width: int
    height: int
    items: List[Item] = field(default_factory=list)
    floors: List[FloorEntry] = field(default_factory=list)

    def contains(self, x: int, y: int) -> bool:
        """Whether a cell lies inside the current grid bounds"""
        return 0 <= x < self.width and 0 <= y < self.height
