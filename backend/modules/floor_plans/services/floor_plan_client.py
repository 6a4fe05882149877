# backend/modules/floor_plans/services/floor_plan_client.py

"""
HTTP client for the floor plan persistence backend and availability feed.
"""

from typing import Any, Dict, List, Optional
import logging

import httpx
from pydantic import TypeAdapter, ValidationError

from ..config.floor_plan_config import floor_plan_config
from ..exceptions import FloorPlanTransportError
from ..schemas.floor_plan_schemas import (
    FloorPlanSchema,
    FloorPlanUpdateRequest,
    ItemsCommitRequest,
    PublicTable,
)

logger = logging.getLogger(__name__)

_public_tables_adapter = TypeAdapter(List[PublicTable])


class FloorPlanClient:
    """Async client for the current user's floor plan"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_token: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        headers = {"Accept": "application/json"}
        token = api_token if api_token is not None else floor_plan_config.FLOOR_PLAN_API_TOKEN
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self.http_client = httpx.AsyncClient(
            base_url=(base_url or floor_plan_config.FLOOR_PLAN_API_URL).rstrip("/"),
            headers=headers,
            timeout=timeout or floor_plan_config.FLOOR_PLAN_HTTP_TIMEOUT_SECONDS,
            transport=transport,
        )

    async def __aenter__(self) -> "FloorPlanClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.http_client.aclose()

    async def get_current_plan(self) -> FloorPlanSchema:
        data = await self._request("load", "GET", "/floor-plans/current")
        try:
            return FloorPlanSchema.model_validate(data)
        except ValidationError as e:
            raise FloorPlanTransportError("load", f"invalid floor plan payload: {e}")

    async def replace_items(self, body: ItemsCommitRequest) -> Dict[str, Any]:
        """Replace the whole item set of the plan"""
        return await self._request(
            "commit",
            "PUT",
            "/floor-plans/current/items",
            json=body.model_dump(mode="json", exclude_none=True),
        )

    async def update_plan(self, body: FloorPlanUpdateRequest) -> Dict[str, Any]:
        return await self._request(
            "update",
            "PUT",
            "/floor-plans/current",
            json=body.model_dump(mode="json", exclude_none=True),
        )

    async def get_public_tables(self) -> List[PublicTable]:
        data = await self._request("availability", "GET", "/public/tables")
        try:
            tables = _public_tables_adapter.validate_python(data)
        except ValidationError as e:
            raise FloorPlanTransportError("availability", f"invalid feed payload: {e}")

        for index, table in enumerate(tables, start=1):
            if not table.name:
                table.name = floor_plan_config.default_table_name(index)
        return tables

    async def _request(self, operation: str, method: str, url: str, **kwargs) -> Any:
        try:
            response = await self.http_client.request(method, url, **kwargs)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.error(f"Floor plan {operation} rejected with HTTP {status_code}")
            raise FloorPlanTransportError(operation, f"HTTP {status_code}", status_code)
        except httpx.HTTPError as e:
            logger.error(f"Floor plan {operation} request failed: {e}")
            raise FloorPlanTransportError(operation, str(e) or e.__class__.__name__)
        except ValueError as e:
            logger.error(f"Floor plan {operation} returned invalid JSON: {e}")
            raise FloorPlanTransportError(operation, "invalid JSON response")
