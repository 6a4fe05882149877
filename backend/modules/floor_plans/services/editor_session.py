# backend/modules/floor_plans/services/editor_session.py

"""
Editing session: one loaded floor plan with its grid store, floor registry
and tool state. Edits stay in memory until commit() succeeds.
"""

from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional, Tuple
import logging
import uuid

from ..config.floor_plan_config import floor_plan_config
from ..exceptions import FloorPlanNotLoadedError, FloorPlanTransportError
from ..models.floor_plan_models import FloorEntry, FloorPlan, Item
from ..schemas.floor_plan_schemas import FloorPlanUpdateRequest, PublicTable, TablePresentation
from .adjacency_service import AdjacencyService
from .availability_overlay import AvailabilityOverlay, best_available_table, max_party_size
from .floor_plan_client import FloorPlanClient
from .floor_registry import FloorRegistry
from .grid_store import GridCellStore
from .persistence_service import PersistenceService, SaveInProgressError, persistence_service
from .resize_service import ResizeService
from .tool_controller import ToolController

logger = logging.getLogger(__name__)


class EditorSession:
    """Working copy of a floor plan being edited"""

    def __init__(
        self,
        client: FloorPlanClient,
        session_id: Optional[str] = None,
        persistence: Optional[PersistenceService] = None
    ):
        self.session_id = session_id or uuid.uuid4().hex
        self.client = client
        self.persistence = persistence or persistence_service
        self.plan: Optional[FloorPlan] = None
        self.store = GridCellStore()
        self.registry = FloorRegistry()
        self.availability: Optional[List[PublicTable]] = None
        self.last_saved_at: Optional[datetime] = None
        self.is_saving = False
        self.last_used_at = datetime.utcnow()
        self._adjacency: Optional[AdjacencyService] = None
        self._tools: Optional[ToolController] = None
        self._resizer: Optional[ResizeService] = None
        self._overlay: Optional[AvailabilityOverlay] = None

    # Loading
    async def load(self) -> FloorPlan:
        data = await self.client.get_current_plan()
        plan = self.persistence.hydrate(data)
        self.attach(plan)
        return plan

    def attach(self, plan: FloorPlan) -> None:
        """Populate the session from an already fetched plan"""

        self.plan = plan
        self.persistence.load(plan, self.store, self.registry)
        self._adjacency = AdjacencyService(self.store, plan)
        self._tools = ToolController(self.store, self.registry, self._adjacency, plan)
        self._resizer = ResizeService(self.store, plan)
        self._overlay = AvailabilityOverlay(self._adjacency)
        self.last_saved_at = None

    @property
    def is_loaded(self) -> bool:
        return self.plan is not None

    @property
    def adjacency(self) -> AdjacencyService:
        self._require_plan()
        return self._adjacency

    @property
    def tools(self) -> ToolController:
        self._require_plan()
        return self._tools

    @property
    def resizer(self) -> ResizeService:
        self._require_plan()
        return self._resizer

    @property
    def overlay(self) -> AvailabilityOverlay:
        self._require_plan()
        return self._overlay

    @property
    def is_dirty(self) -> bool:
        return self.store.is_dirty or self.registry.is_dirty

    # Painting
    def click(self, x: int, y: int) -> Optional[Item]:
        return self.tools.click(x, y)

    def drag(self, cells: Iterable[Tuple[int, int]]) -> List[Tuple[Tuple[int, int], Optional[Item]]]:
        return self.tools.drag(cells)

    def context_click(self, x: int, y: int) -> Optional[Item]:
        return self.tools.context_click(x, y)

    def clear(self, all_floors: bool = False) -> int:
        floor = None if all_floors else self.tools.current_floor
        removed = self.store.clear(floor)
        logger.info(
            f"Cleared {removed} items from "
            + ("all floors" if floor is None else f"floor {floor}")
        )
        return removed

    # Naming
    def rename_table(self, x: int, y: int, name: str) -> List[Item]:
        return self.adjacency.rename_group(x, y, self.tools.current_floor, name)

    def floor_levels(self) -> List[int]:
        return self.registry.levels(self.store.levels())

    def create_floor(self, name: str) -> FloorEntry:
        """Register the next free level and switch the editor to it"""

        level = self.registry.next_level(self.store.levels())
        entry = self.registry.register(level, name)
        self.tools.select_floor(entry.level)
        logger.info(f"Created floor {entry.level} '{entry.name}'")
        return entry

    def rename_floor(self, level: int, name: str) -> int:
        self._require_plan()
        return self.registry.rename(level, name, self.store)

    def select_floor(self, level: int) -> None:
        self.tools.select_floor(level)

    # Bounds
    async def resize(self, width: int, height: int) -> FloorPlan:
        """Validate locally, persist the new bounds, then apply them"""

        width, height = self.resizer.validate(width, height)
        await self.client.update_plan(FloorPlanUpdateRequest(width=width, height=height))
        return self.resizer.resize(width, height)

    # Saving
    async def commit(self) -> datetime:
        self._require_plan()
        if self.is_saving:
            raise SaveInProgressError()

        self.is_saving = True
        try:
            self.last_saved_at = await self.persistence.commit(
                self.client, self.store, self.registry
            )
        finally:
            self.is_saving = False
        return self.last_saved_at

    # Availability
    async def refresh_availability(self) -> Optional[List[PublicTable]]:
        """Fetch the occupancy feed, degrading to no feed on failure"""

        try:
            self.availability = await self.client.get_public_tables()
        except FloorPlanTransportError as e:
            logger.warning(f"Availability feed unavailable, using chair counts: {e.message}")
            self.availability = None
        return self.availability

    def availability_overlay(self, floor: Optional[int] = None) -> List[TablePresentation]:
        level = floor if floor is not None else self.tools.current_floor
        return self.overlay.enrich_floor(
            self.resizer.visible_items(level), self.availability
        )

    def best_table(self, party_size: int) -> Optional[PublicTable]:
        return best_available_table(self.availability or [], party_size)

    def max_party_size(self) -> int:
        return max_party_size(self.availability or [])

    def _require_plan(self) -> None:
        if self.plan is None:
            raise FloorPlanNotLoadedError()


class EditorSessionManager:
    """
    In-memory registry of open editing sessions

    Sessions untouched for longer than the idle timeout are closed the next
    time a session is opened.
    """

    def __init__(self, idle_timeout_seconds: Optional[float] = None):
        self._sessions: Dict[str, EditorSession] = {}
        if idle_timeout_seconds is None:
            idle_timeout_seconds = floor_plan_config.EDITOR_SESSION_IDLE_TIMEOUT_SECONDS
        self.idle_timeout = timedelta(seconds=idle_timeout_seconds)

    async def open(self, client: FloorPlanClient) -> EditorSession:
        await self.expire_idle()
        session = EditorSession(client)
        try:
            await session.load()
        except Exception:
            await client.aclose()
            raise
        self._sessions[session.session_id] = session
        logger.info(f"Opened editor session {session.session_id} for plan {session.plan.id}")
        return session

    def get(self, session_id: str) -> Optional[EditorSession]:
        session = self._sessions.get(session_id)
        if session:
            session.last_used_at = datetime.utcnow()
        return session

    async def close(self, session_id: str) -> bool:
        session = self._sessions.pop(session_id, None)
        if not session:
            return False
        await session.client.aclose()
        if session.is_dirty:
            logger.warning(f"Closed editor session {session_id} with unsaved changes")
        return True

    async def expire_idle(self, now: Optional[datetime] = None) -> int:
        now = now or datetime.utcnow()
        expired = [
            session_id for session_id, session in self._sessions.items()
            if not session.is_saving and now - session.last_used_at > self.idle_timeout
        ]
        for session_id in expired:
            logger.info(f"Expiring idle editor session {session_id}")
            await self.close(session_id)
        return len(expired)

    async def close_all(self) -> None:
        for session_id in list(self._sessions):
            await self.close(session_id)


editor_session_manager = EditorSessionManager()
