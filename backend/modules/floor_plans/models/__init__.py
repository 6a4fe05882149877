from .floor_plan_models import (
    VALID_ROTATIONS,
    DEFAULT_FLOOR_LEVEL,
    NEIGHBOR_OFFSETS,
    KIND_POLICIES,
    ERASER_SHORTCUT,
    ROTATE_SHORTCUT,
    ItemKind,
    Tool,
    KindPolicy,
    Item,
    FloorEntry,
    FloorPlan,
    policy_for,
    new_item_id,
)

__all__ = [
    "VALID_ROTATIONS",
    "DEFAULT_FLOOR_LEVEL",
    "NEIGHBOR_OFFSETS",
    "KIND_POLICIES",
    "ERASER_SHORTCUT",
    "ROTATE_SHORTCUT",
    "ItemKind",
    "Tool",
    "KindPolicy",
    "Item",
    "FloorEntry",
    "FloorPlan",
    "policy_for",
    "new_item_id",
]
