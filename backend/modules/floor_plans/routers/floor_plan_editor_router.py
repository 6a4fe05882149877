# backend/modules/floor_plans/routers/floor_plan_editor_router.py

from contextlib import contextmanager
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status

from core.exceptions import (
    APIError,
    ConflictError,
    NotFoundError,
    UpstreamServiceError,
    ValidationError,
)
from ..exceptions import (
    FloorPlanBaseException,
    FloorPlanNotLoadedError,
    FloorPlanTransportError,
    FloorPlanValidationError,
)
from ..models.floor_plan_models import Item
from ..schemas.floor_plan_schemas import (
    CellRequest,
    ClearRequest,
    CommitResponse,
    DragRequest,
    EditorItemResponse,
    EditorStateResponse,
    FloorCreateRequest,
    FloorRenameRequest,
    FloorResponse,
    GridResizeRequest,
    PublicTable,
    RenameTargetResponse,
    ShortcutRequest,
    TablePresentation,
    TableRenameRequest,
    ToolSelectionUpdate,
)
from ..services.editor_session import (
    EditorSession,
    EditorSessionManager,
    editor_session_manager,
)
from ..services.floor_plan_client import FloorPlanClient
from ..services.persistence_service import SaveInProgressError

router = APIRouter(prefix="/floor-plan-editor", tags=["Floor Plan Editor"])


def get_floor_plan_client() -> FloorPlanClient:
    return FloorPlanClient()


def get_session_manager() -> EditorSessionManager:
    return editor_session_manager


def get_editor_session(
    session_id: str,
    manager: EditorSessionManager = Depends(get_session_manager)
) -> EditorSession:
    session = manager.get(session_id)
    if not session:
        raise NotFoundError(f"Editor session {session_id} not found")
    return session


def _to_api_error(exc: FloorPlanBaseException) -> APIError:
    if isinstance(exc, FloorPlanValidationError):
        return ValidationError(exc.message, exc.error_code, exc.details)
    if isinstance(exc, FloorPlanTransportError):
        return UpstreamServiceError(exc.message, exc.error_code, exc.details)
    if isinstance(exc, (SaveInProgressError, FloorPlanNotLoadedError)):
        return ConflictError(exc.message, exc.error_code, exc.details)
    return APIError(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message, exc.error_code)


@contextmanager
def floor_plan_errors():
    try:
        yield
    except FloorPlanBaseException as e:
        raise _to_api_error(e) from e


def _item_response(session: EditorSession, item: Item) -> EditorItemResponse:
    response = EditorItemResponse.model_validate(item)
    response.in_bounds = session.resizer.is_in_bounds(item)
    return response


def _floor_response(session: EditorSession, level: int) -> FloorResponse:
    return FloorResponse(
        level=level,
        name=session.registry.name_of(level),
        item_count=len(session.store.items_on_floor(level)),
    )


def _state(session: EditorSession) -> EditorStateResponse:
    tools = session.tools
    floor = tools.current_floor
    return EditorStateResponse(
        session_id=session.session_id,
        floor_plan_id=session.plan.id,
        name=session.plan.name,
        width=session.plan.width,
        height=session.plan.height,
        tool=tools.selected_tool,
        rotation=tools.rotation,
        current_floor=floor,
        is_painting=tools.is_painting,
        floors=[_floor_response(session, level) for level in session.floor_levels()],
        items=[_item_response(session, item) for item in session.store.items_on_floor(floor)],
        counts=session.store.count_by_kind(floor),
        is_dirty=session.is_dirty,
        last_saved_at=session.last_saved_at,
    )


# Sessions
@router.post("/sessions", response_model=EditorStateResponse, status_code=status.HTTP_201_CREATED)
async def open_session(
    client: FloorPlanClient = Depends(get_floor_plan_client),
    manager: EditorSessionManager = Depends(get_session_manager)
):
    """Load the current floor plan into a new editing session"""
    with floor_plan_errors():
        session = await manager.open(client)
    return _state(session)


@router.get("/sessions/{session_id}", response_model=EditorStateResponse)
async def get_session(session: EditorSession = Depends(get_editor_session)):
    return _state(session)


@router.delete("/sessions/{session_id}")
async def close_session(
    session_id: str,
    manager: EditorSessionManager = Depends(get_session_manager)
):
    """Discard a session; unsaved edits are lost"""
    if not await manager.close(session_id):
        raise NotFoundError(f"Editor session {session_id} not found")
    return {"success": True, "message": "Session closed"}


# Tools
@router.put("/sessions/{session_id}/tool", response_model=EditorStateResponse)
async def update_tool(
    selection: ToolSelectionUpdate,
    session: EditorSession = Depends(get_editor_session)
):
    with floor_plan_errors():
        if selection.tool is not None:
            session.tools.select_tool(selection.tool)
        if selection.rotation is not None:
            session.tools.set_rotation(selection.rotation)
        if selection.floor_level is not None:
            session.select_floor(selection.floor_level)
    return _state(session)


@router.post("/sessions/{session_id}/shortcut", response_model=EditorStateResponse)
async def press_shortcut(
    request: ShortcutRequest,
    session: EditorSession = Depends(get_editor_session)
):
    """Keyboard shortcut: 1-4 select a kind, E the eraser, R rotates"""
    if not session.tools.handle_key(request.key):
        raise ValidationError(f"Unknown shortcut '{request.key}'", "UNKNOWN_SHORTCUT")
    return _state(session)


# Painting
@router.post("/sessions/{session_id}/click", response_model=Optional[EditorItemResponse])
async def click_cell(
    cell: CellRequest,
    session: EditorSession = Depends(get_editor_session)
):
    """Apply the selected tool to one cell; erasing returns null"""
    with floor_plan_errors():
        item = session.click(cell.x, cell.y)
    return _item_response(session, item) if item else None


@router.post("/sessions/{session_id}/drag", response_model=List[EditorItemResponse])
async def drag_paint(
    request: DragRequest,
    session: EditorSession = Depends(get_editor_session)
):
    """
    Paint every cell entered while the pointer is held down

    The stroke stops at the first cell outside the grid.
    """
    with floor_plan_errors():
        painted = session.drag((cell.x, cell.y) for cell in request.cells)
    return [_item_response(session, item) for _, item in painted if item]


@router.post("/sessions/{session_id}/context-click", response_model=RenameTargetResponse)
async def context_click(
    cell: CellRequest,
    session: EditorSession = Depends(get_editor_session)
):
    """Resolve the table a secondary click would rename"""
    table = session.context_click(cell.x, cell.y)
    if not table:
        return RenameTargetResponse()
    return RenameTargetResponse(x=table.x, y=table.y, table_name=table.table_name, found=True)


@router.post("/sessions/{session_id}/clear")
async def clear_plan(
    request: ClearRequest,
    session: EditorSession = Depends(get_editor_session)
):
    removed = session.clear(all_floors=request.all_floors)
    return {"success": True, "removed": removed}


# Naming
@router.post("/sessions/{session_id}/tables/rename", response_model=List[EditorItemResponse])
async def rename_table(
    request: TableRenameRequest,
    session: EditorSession = Depends(get_editor_session)
):
    """Rename a table and the items immediately around it"""
    with floor_plan_errors():
        renamed = session.rename_table(request.x, request.y, request.name)
    return [_item_response(session, item) for item in renamed]


@router.post("/sessions/{session_id}/floors", response_model=FloorResponse, status_code=status.HTTP_201_CREATED)
async def create_floor(
    request: FloorCreateRequest,
    session: EditorSession = Depends(get_editor_session)
):
    with floor_plan_errors():
        entry = session.create_floor(request.name)
    return _floor_response(session, entry.level)


@router.put("/sessions/{session_id}/floors/{level}", response_model=FloorResponse)
async def rename_floor(
    level: int,
    request: FloorRenameRequest,
    session: EditorSession = Depends(get_editor_session)
):
    with floor_plan_errors():
        session.rename_floor(level, request.name)
    return _floor_response(session, level)


# Bounds and persistence
@router.post("/sessions/{session_id}/resize", response_model=EditorStateResponse)
async def resize_grid(
    request: GridResizeRequest,
    session: EditorSession = Depends(get_editor_session)
):
    """
    Change grid bounds

    Items outside the new bounds are kept and reported with in_bounds=false.
    """
    with floor_plan_errors():
        await session.resize(request.width, request.height)
    return _state(session)


@router.post("/sessions/{session_id}/commit", response_model=CommitResponse)
async def commit_session(session: EditorSession = Depends(get_editor_session)):
    """Replace the backend item set with the session's items"""
    with floor_plan_errors():
        saved_at = await session.commit()
    return CommitResponse(
        success=True,
        saved_items=len(session.store),
        last_saved_at=saved_at,
    )


# Availability
@router.get("/sessions/{session_id}/availability", response_model=List[TablePresentation])
async def get_availability(
    floor_level: Optional[int] = Query(None, ge=1),
    refresh: bool = Query(True),
    session: EditorSession = Depends(get_editor_session)
):
    if refresh:
        await session.refresh_availability()
    return session.availability_overlay(floor_level)


@router.get("/sessions/{session_id}/availability/best-table", response_model=Optional[PublicTable])
async def get_best_table(
    party_size: int = Query(..., ge=1),
    session: EditorSession = Depends(get_editor_session)
):
    """Smallest feed table that seats the whole party"""
    if session.availability is None:
        await session.refresh_availability()
    with floor_plan_errors():
        return session.best_table(party_size)
