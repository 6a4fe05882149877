# backend/modules/floor_plans/services/persistence_service.py

"""
Save/load protocol between the editor's working set and the backend.

Saving always sends the complete item set as a replacement, never a diff.
A failed save leaves local state exactly as it was so it can be retried.
"""

from datetime import datetime
from typing import Iterable, List
import logging

from ..exceptions import FloorPlanBaseException
from ..models.floor_plan_models import (
    DEFAULT_FLOOR_LEVEL,
    FloorEntry,
    FloorPlan,
    Item,
    policy_for,
    new_item_id,
)
from ..schemas.floor_plan_schemas import (
    FloorEntrySchema,
    FloorPlanSchema,
    FloorPlanUpdateRequest,
    ItemsCommitRequest,
    NormalizedItem,
)
from .floor_plan_client import FloorPlanClient
from .floor_registry import FloorRegistry
from .grid_store import GridCellStore

logger = logging.getLogger(__name__)


class SaveInProgressError(FloorPlanBaseException):
    """Raised when a commit is requested while another one is pending"""

    def __init__(self):
        super().__init__("A save is already in progress", "SAVE_IN_PROGRESS")


class PersistenceService:
    """Normalizes, commits and hydrates floor plan state"""

    def serialize_item(self, item: Item) -> NormalizedItem:
        data = {
            "kind": item.kind,
            "x": item.x,
            "y": item.y,
            "rotation": item.rotation,
            "floor_level": item.floor_level,
        }
        if item.meta:
            data["meta"] = dict(item.meta)
        if item.floor_name:
            data["floor_name"] = item.floor_name
        if item.table_name:
            data["table_name"] = item.table_name
        return NormalizedItem(**data)

    def serialize(self, items: Iterable[Item]) -> List[NormalizedItem]:
        return [
            self.serialize_item(item) for item in items
            if policy_for(item.kind).is_stored
        ]

    def hydrate(self, data: FloorPlanSchema) -> FloorPlan:
        """Build the in-memory plan from a backend payload"""

        items = []
        for raw in data.items:
            if not policy_for(raw.kind).is_stored:
                continue
            item = Item(
                kind=raw.kind,
                x=raw.x,
                y=raw.y,
                rotation=raw.rotation if raw.rotation is not None else 0,
                floor_level=raw.floor_level if raw.floor_level is not None else DEFAULT_FLOOR_LEVEL,
                floor_name=raw.floor_name,
                table_name=raw.table_name,
                meta=dict(raw.meta) if raw.meta else {},
                id=raw.id if raw.id is not None else new_item_id(),
                floor_plan_id=raw.floor_plan_id if raw.floor_plan_id is not None else data.id,
            )
            if raw.created_at:
                item.created_at = raw.created_at
            if raw.updated_at:
                item.updated_at = raw.updated_at
            items.append(item)

        return FloorPlan(
            id=data.id,
            name=data.name,
            width=data.width,
            height=data.height,
            items=items,
            floors=self._floor_entries(data, items),
        )

    def load(self, plan: FloorPlan, store: GridCellStore, registry: FloorRegistry) -> None:
        store.floor_plan_id = plan.id
        store.load(plan.items)
        registry.load(plan.floors)
        logger.info(
            f"Loaded floor plan {plan.id} '{plan.name}' ({plan.width}x{plan.height}, "
            f"{len(store)} items, {len(plan.floors)} named floors)"
        )

    async def commit(
        self,
        client: FloorPlanClient,
        store: GridCellStore,
        registry: FloorRegistry
    ) -> datetime:
        """
        Push registry and items to the backend, clearing dirty state on success

        Edits made while the request is in flight are not part of the payload,
        so dirty state is only cleared if nothing changed since the snapshot.
        """

        store_revision = store.revision
        registry_revision = registry.revision
        items = self.serialize(store.all_items())
        if registry.is_dirty:
            await client.update_plan(
                FloorPlanUpdateRequest(
                    floors=[
                        FloorEntrySchema(level=entry.level, name=entry.name)
                        for entry in registry.entries()
                    ]
                )
            )
        await client.replace_items(ItemsCommitRequest(items=items))

        saved_at = datetime.utcnow()
        logger.info(f"Committed {len(items)} items for floor plan {store.floor_plan_id}")
        if store.revision == store_revision:
            store.mark_clean()
        else:
            logger.info(f"Floor plan {store.floor_plan_id} changed during save, keeping it dirty")
        if registry.revision == registry_revision:
            registry.mark_clean()
        return saved_at

    def _floor_entries(self, data: FloorPlanSchema, items: List[Item]) -> List[FloorEntry]:
        if data.floors:
            return [FloorEntry(level=f.level, name=f.name) for f in data.floors]

        # Older plans only carry the snapshot stored on each item
        names = {}
        for item in items:
            if item.floor_name and item.floor_level not in names:
                names[item.floor_level] = item.floor_name.strip() or None
        return [
            FloorEntry(level=level, name=name)
            for level, name in sorted(names.items())
            if name
        ]


persistence_service = PersistenceService()
