# backend/modules/floor_plans/tests/conftest.py

"""
Shared fixtures for floor plan editor tests
"""

import pytest
from unittest.mock import AsyncMock

from modules.floor_plans.models.floor_plan_models import FloorPlan, ItemKind
from modules.floor_plans.schemas.floor_plan_schemas import FloorPlanSchema
from modules.floor_plans.services.adjacency_service import AdjacencyService
from modules.floor_plans.services.floor_plan_client import FloorPlanClient
from modules.floor_plans.services.floor_registry import FloorRegistry
from modules.floor_plans.services.grid_store import GridCellStore
from modules.floor_plans.services.resize_service import ResizeService
from modules.floor_plans.services.tool_controller import ToolController


@pytest.fixture
def plan():
    return FloorPlan(id=1, name="Main Dining", width=10, height=10)


@pytest.fixture
def registry():
    return FloorRegistry()


@pytest.fixture
def store(plan):
    return GridCellStore(floor_plan_id=plan.id)


@pytest.fixture
def adjacency(store, plan):
    return AdjacencyService(store, plan)


@pytest.fixture
def tools(store, registry, adjacency, plan):
    return ToolController(store, registry, adjacency, plan)


@pytest.fixture
def resizer(store, plan):
    return ResizeService(store, plan, min_size=5, max_size=100)


@pytest.fixture
def place(store, registry):
    """Place an item on floor 1 unless another floor is given"""

    def _place(x, y, kind=ItemKind.TABLE, floor=1, rotation=0):
        return store.place(x, y, floor, kind, rotation, registry)

    return _place


@pytest.fixture
def plan_payload():
    return {
        "id": 1,
        "name": "Main Dining",
        "width": 10,
        "height": 10,
        "items": [
            {"id": 11, "floor_plan_id": 1, "kind": "table", "x": 3, "y": 3,
             "rotation": 90, "floor_level": 1, "table_name": "Window Table"},
            {"id": 12, "floor_plan_id": 1, "kind": "chair", "x": 3, "y": 2},
            {"id": 13, "floor_plan_id": 1, "kind": "wall", "x": 0, "y": 0,
             "floor_level": 2, "floor_name": "Terrace"},
        ],
    }


@pytest.fixture
def mock_client(plan_payload):
    client = AsyncMock(spec=FloorPlanClient)
    client.get_current_plan.return_value = FloorPlanSchema.model_validate(plan_payload)
    client.replace_items.return_value = {"message": "Items saved successfully"}
    client.update_plan.return_value = {}
    client.get_public_tables.return_value = []
    return client
