from .floor_plan_config import FloorPlanConfig, floor_plan_config

__all__ = ["FloorPlanConfig", "floor_plan_config"]
