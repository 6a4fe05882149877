# backend/modules/floor_plans/schemas/floor_plan_schemas.py

from typing import List, Optional, Dict, Any, Union, Literal
from datetime import datetime
from pydantic import BaseModel, Field, field_validator, AliasChoices, ConfigDict

from ..models.floor_plan_models import ItemKind, Tool, VALID_ROTATIONS


def _check_rotation(v: Optional[int]) -> Optional[int]:
    if v is not None and v not in VALID_ROTATIONS:
        raise ValueError(f"Rotation must be one of {VALID_ROTATIONS}")
    return v


# Backend payloads
class FloorEntrySchema(BaseModel):
    """Named floor level stored with the plan"""

    level: int = Field(..., ge=1)
    name: str = Field(..., min_length=1, max_length=255)


class FloorPlanItemSchema(BaseModel):
    """Item as returned by the backend"""

    id: Optional[Union[int, str]] = None
    floor_plan_id: Optional[int] = None
    kind: ItemKind = Field(..., validation_alias=AliasChoices("kind", "type"))
    x: int = Field(..., ge=0)
    y: int = Field(..., ge=0)
    rotation: Optional[int] = None
    floor_level: Optional[int] = Field(None, ge=1)
    floor_name: Optional[str] = None
    table_name: Optional[str] = None
    meta: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("rotation")
    @classmethod
    def validate_rotation(cls, v):
        return _check_rotation(v)


class FloorPlanSchema(BaseModel):
    """Floor plan as returned by the backend"""

    id: int
    name: str
    width: int = Field(..., ge=1)
    height: int = Field(..., ge=1)
    items: List[FloorPlanItemSchema] = []
    floors: Optional[List[FloorEntrySchema]] = None


class NormalizedItem(BaseModel):
    """Minimal persisted shape of an item"""

    kind: ItemKind
    x: int = Field(..., ge=0)
    y: int = Field(..., ge=0)
    rotation: int = 0
    floor_level: int = Field(1, ge=1)
    meta: Optional[Dict[str, Any]] = None
    floor_name: Optional[str] = None
    table_name: Optional[str] = None

    @field_validator("rotation")
    @classmethod
    def validate_rotation(cls, v):
        return _check_rotation(v)


class ItemsCommitRequest(BaseModel):
    """Full replacement of a plan's item set"""

    items: List[NormalizedItem]


class FloorPlanUpdateRequest(BaseModel):
    """Partial update of plan attributes"""

    name: Optional[str] = Field(None, max_length=255)
    # Grid bounds are checked against GRID_MIN_SIZE/GRID_MAX_SIZE by ResizeService
    width: Optional[int] = Field(None, ge=1)
    height: Optional[int] = Field(None, ge=1)
    floors: Optional[List[FloorEntrySchema]] = None


# Availability feed
class PublicTableReservation(BaseModel):
    """Reservation touching a feed table"""

    id: int
    arrival_time: str
    status: str
    party_size: int


class PublicTable(BaseModel):
    """Read-only table occupancy entry from the availability feed"""

    id: Union[int, str]
    name: Optional[str] = None
    floor: Optional[str] = None
    x: int
    y: int
    total_seats: int = Field(0, ge=0)
    available_seats: int = Field(0, ge=0)
    occupied_seats: int = Field(0, ge=0)
    is_available: bool = False
    chair_ids: List[Union[int, str]] = []
    reservations: List[PublicTableReservation] = []


class TablePresentation(BaseModel):
    """Availability overlay state for one table cell"""

    x: int
    y: int
    floor_level: int
    table_name: Optional[str] = None
    feed_table_id: Optional[Union[int, str]] = None
    total_seats: int
    available_seats: int
    occupied_seats: int
    is_available: bool
    source: Literal["feed", "adjacency"]
    reservations: List[PublicTableReservation] = []


# Editor API
class ToolSelectionUpdate(BaseModel):
    """Change tool, rotation or viewed floor"""

    tool: Optional[Tool] = None
    rotation: Optional[int] = None
    floor_level: Optional[int] = Field(None, ge=1)

    @field_validator("rotation")
    @classmethod
    def validate_rotation(cls, v):
        return _check_rotation(v)


class ShortcutRequest(BaseModel):
    key: str = Field(..., min_length=1, max_length=1)


class CellRequest(BaseModel):
    x: int = Field(..., ge=0)
    y: int = Field(..., ge=0)


class DragRequest(BaseModel):
    """Cells entered in order while the pointer button is held"""

    cells: List[CellRequest] = Field(..., min_length=1)


class TableRenameRequest(BaseModel):
    x: int = Field(..., ge=0)
    y: int = Field(..., ge=0)
    name: str


class FloorCreateRequest(BaseModel):
    name: str


class FloorRenameRequest(BaseModel):
    name: str


class GridResizeRequest(BaseModel):
    width: int
    height: int


class ClearRequest(BaseModel):
    all_floors: bool = False


class EditorItemResponse(BaseModel):
    """Item as exposed to the editor front-end"""

    id: Union[int, str]
    kind: ItemKind
    x: int
    y: int
    rotation: int
    floor_level: int
    floor_name: Optional[str] = None
    table_name: Optional[str] = None
    meta: Dict[str, Any] = {}
    in_bounds: bool = True
    model_config = ConfigDict(from_attributes=True)


class FloorResponse(BaseModel):
    level: int
    name: str
    item_count: int = 0


class RenameTargetResponse(BaseModel):
    """Table a context click resolves to, if any"""

    x: Optional[int] = None
    y: Optional[int] = None
    table_name: Optional[str] = None
    found: bool = False


class EditorStateResponse(BaseModel):
    """Snapshot of an editing session"""

    session_id: str
    floor_plan_id: int
    name: str
    width: int
    height: int
    tool: Tool
    rotation: int
    current_floor: int
    is_painting: bool
    floors: List[FloorResponse]
    items: List[EditorItemResponse]
    counts: Dict[str, int]
    is_dirty: bool
    last_saved_at: Optional[datetime] = None


class CommitResponse(BaseModel):
    success: bool
    saved_items: int
    last_saved_at: datetime
