from .floor_plan_schemas import (
    FloorEntrySchema,
    FloorPlanItemSchema,
    FloorPlanSchema,
    NormalizedItem,
    ItemsCommitRequest,
    FloorPlanUpdateRequest,
    PublicTableReservation,
    PublicTable,
    TablePresentation,
    ToolSelectionUpdate,
    ShortcutRequest,
    CellRequest,
    DragRequest,
    TableRenameRequest,
    FloorCreateRequest,
    FloorRenameRequest,
    GridResizeRequest,
    ClearRequest,
    EditorItemResponse,
    FloorResponse,
    RenameTargetResponse,
    EditorStateResponse,
    CommitResponse,
)

__all__ = [
    "FloorEntrySchema",
    "FloorPlanItemSchema",
    "FloorPlanSchema",
    "NormalizedItem",
    "ItemsCommitRequest",
    "FloorPlanUpdateRequest",
    "PublicTableReservation",
    "PublicTable",
    "TablePresentation",
    "ToolSelectionUpdate",
    "ShortcutRequest",
    "CellRequest",
    "DragRequest",
    "TableRenameRequest",
    "FloorCreateRequest",
    "FloorRenameRequest",
    "GridResizeRequest",
    "ClearRequest",
    "EditorItemResponse",
    "FloorResponse",
    "RenameTargetResponse",
    "EditorStateResponse",
    "CommitResponse",
]
