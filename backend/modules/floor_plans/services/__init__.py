from .grid_store import GridCellStore
from .floor_registry import FloorRegistry
from .adjacency_service import AdjacencyService
from .tool_controller import ToolController
from .resize_service import ResizeService
from .floor_plan_client import FloorPlanClient
from .persistence_service import PersistenceService, SaveInProgressError, persistence_service
from .availability_overlay import AvailabilityOverlay, best_available_table, max_party_size
from .editor_session import EditorSession, EditorSessionManager, editor_session_manager

__all__ = [
    "GridCellStore",
    "FloorRegistry",
    "AdjacencyService",
    "ToolController",
    "ResizeService",
    "FloorPlanClient",
    "PersistenceService",
    "SaveInProgressError",
    "persistence_service",
    "AvailabilityOverlay",
    "best_available_table",
    "max_party_size",
    "EditorSession",
    "EditorSessionManager",
    "editor_session_manager",
]
