from .floor_plan_editor_router import router

__all__ = ["router"]
