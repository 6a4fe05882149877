# backend/modules/floor_plans/__init__.py

from .models.floor_plan_models import (
    ItemKind, Tool, KindPolicy, KIND_POLICIES, Item, FloorEntry, FloorPlan
)

from .schemas.floor_plan_schemas import (
    FloorPlanSchema, FloorPlanItemSchema, NormalizedItem,
    ItemsCommitRequest, FloorPlanUpdateRequest,
    PublicTable, TablePresentation, EditorStateResponse
)

from .services.grid_store import GridCellStore
from .services.floor_registry import FloorRegistry
from .services.adjacency_service import AdjacencyService
from .services.tool_controller import ToolController
from .services.resize_service import ResizeService
from .services.persistence_service import persistence_service
from .services.floor_plan_client import FloorPlanClient
from .services.availability_overlay import AvailabilityOverlay, best_available_table
from .services.editor_session import EditorSession, editor_session_manager

from .routers.floor_plan_editor_router import router as editor_router

__all__ = [
    # Models
    "ItemKind", "Tool", "KindPolicy", "KIND_POLICIES",
    "Item", "FloorEntry", "FloorPlan",

    # Schemas
    "FloorPlanSchema", "FloorPlanItemSchema", "NormalizedItem",
    "ItemsCommitRequest", "FloorPlanUpdateRequest",
    "PublicTable", "TablePresentation", "EditorStateResponse",

    # Services
    "GridCellStore", "FloorRegistry", "AdjacencyService", "ToolController",
    "ResizeService", "persistence_service", "FloorPlanClient",
    "AvailabilityOverlay", "best_available_table",
    "EditorSession", "editor_session_manager",

    # Routers
    "editor_router",
]
