# backend/modules/floor_plans/config/floor_plan_config.py

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, model_validator


class FloorPlanConfig(BaseSettings):
    """Floor plan editor configuration"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Persistence backend
    FLOOR_PLAN_API_URL: str = Field(
        default="http://localhost:8000/api",
        description="Base URL of the floor plan persistence backend",
    )
    FLOOR_PLAN_API_TOKEN: Optional[str] = Field(
        default=None, description="Bearer token sent to the persistence backend"
    )
    FLOOR_PLAN_HTTP_TIMEOUT_SECONDS: float = Field(
        default=30.0, gt=0, description="HTTP timeout for backend requests"
    )

    # Grid bounds
    GRID_MIN_SIZE: int = Field(default=5, ge=1, description="Smallest grid side in cells")
    GRID_MAX_SIZE: int = Field(default=100, ge=1, description="Largest grid side in cells")

    # Naming
    DEFAULT_FLOOR_NAME_TEMPLATE: str = Field(
        default="Floor {level}", description="Name used for unregistered floor levels"
    )
    DEFAULT_TABLE_NAME_TEMPLATE: str = Field(
        default="Table {index}", description="Name used for unnamed feed tables"
    )

    # Sessions
    EDITOR_SESSION_IDLE_TIMEOUT_SECONDS: float = Field(
        default=3600.0, gt=0, description="Idle time after which an editor session is closed"
    )

    LOG_LEVEL: str = Field(default="INFO", description="Root log level")

    @model_validator(mode="after")
    def validate_grid_bounds(self):
        if self.GRID_MIN_SIZE > self.GRID_MAX_SIZE:
            raise ValueError("GRID_MIN_SIZE cannot exceed GRID_MAX_SIZE")
        return self

    def default_floor_name(self, level: int) -> str:
        return self.DEFAULT_FLOOR_NAME_TEMPLATE.format(level=level)

    def default_table_name(self, index: int) -> str:
        return self.DEFAULT_TABLE_NAME_TEMPLATE.format(index=index)


floor_plan_config = FloorPlanConfig()
