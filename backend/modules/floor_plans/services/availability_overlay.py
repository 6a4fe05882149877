# backend/modules/floor_plans/services/availability_overlay.py

"""
Availability overlay: joins the external occupancy feed onto grid tables.

The feed shares no identifier with the grid. A feed entry matches a table
by exact (x, y); when both sides carry a floor label those must agree too.
Tables without a match fall back to the chairs counted around them.

The label compared is the item's floor_name snapshot, so after a floor is
renamed locally its tables stop matching a feed that still reports the old
label until the feed reports the new name. Feeds that always send a label (a
ground-floor default name, for instance) never reach the unlabelled branch.
"""

from typing import Iterable, List, Optional
import logging

from ..exceptions import FloorPlanValidationError
from ..models.floor_plan_models import DEFAULT_FLOOR_LEVEL, Item, ItemKind
from ..schemas.floor_plan_schemas import PublicTable, TablePresentation
from .adjacency_service import AdjacencyService

logger = logging.getLogger(__name__)


class AvailabilityOverlay:
    """Read-only enrichment of table items with seat availability"""

    def __init__(self, adjacency: AdjacencyService):
        self.adjacency = adjacency

    def find_feed_table(
        self, item: Item, feed: Optional[Iterable[PublicTable]]
    ) -> Optional[PublicTable]:
        if not feed:
            return None
        for table in feed:
            if (table.x, table.y) != item.position:
                continue
            if self._floor_matches(table, item):
                return table
        return None

    def enrich(
        self, item: Item, feed: Optional[Iterable[PublicTable]] = None
    ) -> Optional[TablePresentation]:
        if item.kind != ItemKind.TABLE:
            return None

        table = self.find_feed_table(item, feed)
        if table:
            return TablePresentation(
                x=item.x,
                y=item.y,
                floor_level=item.floor_level,
                table_name=item.table_name or table.name,
                feed_table_id=table.id,
                total_seats=table.total_seats,
                available_seats=table.available_seats,
                occupied_seats=table.occupied_seats,
                is_available=table.is_available,
                source="feed",
                reservations=table.reservations,
            )

        seats = self.adjacency.chair_count_around(item.x, item.y, item.floor_level)
        return TablePresentation(
            x=item.x,
            y=item.y,
            floor_level=item.floor_level,
            table_name=item.table_name,
            total_seats=seats,
            available_seats=seats,
            occupied_seats=0,
            is_available=True,
            source="adjacency",
        )

    def enrich_floor(
        self, items: Iterable[Item], feed: Optional[Iterable[PublicTable]] = None
    ) -> List[TablePresentation]:
        feed = list(feed) if feed else None
        presentations = []
        for item in items:
            presentation = self.enrich(item, feed)
            if presentation:
                presentations.append(presentation)
        return presentations

    def _floor_matches(self, table: PublicTable, item: Item) -> bool:
        if table.floor is None:
            return item.floor_level == DEFAULT_FLOOR_LEVEL
        if item.floor_name is None:
            return True
        return table.floor == item.floor_name


def best_available_table(
    tables: Iterable[PublicTable], party_size: int
) -> Optional[PublicTable]:
    """Smallest table that still seats the whole party"""

    if party_size < 1:
        raise FloorPlanValidationError(
            "Party size must be at least 1", field="party_size", value=party_size
        )
    suitable = [t for t in tables if t.available_seats >= party_size]
    if not suitable:
        return None
    # min() keeps the first of equal candidates, preserving feed order
    return min(suitable, key=lambda t: t.available_seats)


def max_party_size(tables: Iterable[PublicTable]) -> int:
    return max((t.available_seats for t in tables), default=0)
