# backend/modules/floor_plans/tests/test_availability_overlay.py

"""
Tests for the availability overlay and party seating helpers
"""

import pytest

from modules.floor_plans.exceptions import FloorPlanValidationError
from modules.floor_plans.models.floor_plan_models import ItemKind
from modules.floor_plans.schemas.floor_plan_schemas import PublicTable
from modules.floor_plans.services.availability_overlay import (
    AvailabilityOverlay,
    best_available_table,
    max_party_size,
)


def feed_table(id, x, y, available, floor=None, name=None, total=None):
    total = total if total is not None else max(available, 4)
    return PublicTable(
        id=id,
        name=name,
        floor=floor,
        x=x,
        y=y,
        total_seats=total,
        available_seats=available,
        occupied_seats=total - available,
        is_available=available > 0,
    )


@pytest.fixture
def overlay(adjacency):
    return AvailabilityOverlay(adjacency)


class TestEnrich:
    """Test joining feed entries onto grid tables"""

    def test_feed_match_by_position(self, overlay, place):
        table = place(3, 3, ItemKind.TABLE)
        feed = [feed_table(7, 3, 3, available=2, total=6, name="Table 1")]

        presentation = overlay.enrich(table, feed)

        assert presentation.source == "feed"
        assert presentation.feed_table_id == 7
        assert presentation.available_seats == 2
        assert presentation.occupied_seats == 4
        assert presentation.table_name == "Table 1"

    def test_grid_name_wins_over_feed_name(self, overlay, place):
        table = place(3, 3, ItemKind.TABLE)
        table.table_name = "Window Table"

        presentation = overlay.enrich(table, [feed_table(7, 3, 3, 2, name="Table 1")])

        assert presentation.table_name == "Window Table"

    def test_fallback_to_chair_count(self, overlay, place):
        table = place(3, 3, ItemKind.TABLE)
        place(3, 2, ItemKind.CHAIR)
        place(3, 4, ItemKind.CHAIR)

        presentation = overlay.enrich(table, [feed_table(7, 8, 8, 2)])

        assert presentation.source == "adjacency"
        assert presentation.total_seats == 2
        assert presentation.available_seats == 2
        assert presentation.occupied_seats == 0
        assert presentation.is_available is True

    def test_no_feed_falls_back(self, overlay, place):
        table = place(3, 3, ItemKind.TABLE)

        assert overlay.enrich(table, None).source == "adjacency"

    def test_non_table_not_enriched(self, overlay, place):
        chair = place(3, 3, ItemKind.CHAIR)

        assert overlay.enrich(chair, [feed_table(7, 3, 3, 2)]) is None

    def test_unlabelled_feed_entry_matches_first_floor_only(self, overlay, place):
        ground = place(3, 3, ItemKind.TABLE, floor=1)
        upstairs = place(3, 3, ItemKind.TABLE, floor=2)
        feed = [feed_table(7, 3, 3, 2)]

        assert overlay.enrich(ground, feed).source == "feed"
        assert overlay.enrich(upstairs, feed).source == "adjacency"

    def test_floor_label_must_agree(self, overlay, place, registry):
        registry.register(2, "Terrace")
        upstairs = place(3, 3, ItemKind.TABLE, floor=2)

        assert overlay.enrich(upstairs, [feed_table(7, 3, 3, 2, floor="Bar")]).source == "adjacency"
        assert overlay.enrich(upstairs, [feed_table(8, 3, 3, 2, floor="Terrace")]).feed_table_id == 8

    def test_local_floor_rename_stops_feed_match(self, overlay, place, registry, store):
        registry.register(2, "Terrace")
        upstairs = place(3, 3, ItemKind.TABLE, floor=2)
        feed = [feed_table(8, 3, 3, 2, floor="Terrace")]

        registry.rename(2, "Garden", store)

        assert overlay.enrich(upstairs, feed).source == "adjacency"
        assert overlay.enrich(upstairs, [feed_table(8, 3, 3, 2, floor="Garden")]).source == "feed"

    def test_enrich_floor_skips_non_tables(self, overlay, place, store):
        place(1, 1, ItemKind.TABLE)
        place(1, 2, ItemKind.CHAIR)
        place(5, 5, ItemKind.TABLE)

        presentations = overlay.enrich_floor(store.items_on_floor(1), iter([feed_table(7, 5, 5, 3)]))

        assert sorted(p.source for p in presentations) == ["adjacency", "feed"]


class TestPartySeating:
    """Test best fit and maximum party size"""

    def test_best_fit_picks_smallest_sufficient_table(self):
        tables = [feed_table(1, 0, 0, 6), feed_table(2, 1, 0, 2), feed_table(3, 2, 0, 4)]

        assert best_available_table(tables, 3).id == 3

    def test_best_fit_keeps_feed_order_on_ties(self):
        tables = [feed_table(1, 0, 0, 4), feed_table(2, 1, 0, 4)]

        assert best_available_table(tables, 4).id == 1

    def test_best_fit_none_when_party_too_large(self):
        assert best_available_table([feed_table(1, 0, 0, 4)], 5) is None

    def test_best_fit_rejects_invalid_party(self):
        with pytest.raises(FloorPlanValidationError):
            best_available_table([feed_table(1, 0, 0, 4)], 0)

    def test_max_party_size(self):
        tables = [feed_table(1, 0, 0, 2), feed_table(2, 1, 0, 8), feed_table(3, 2, 0, 0)]

        assert max_party_size(tables) == 8
        assert max_party_size([]) == 0
