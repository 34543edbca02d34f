"""Tests for the supply chain map columns."""

import pytest
from datetime import date

from inventory_risk.models import ItemType, NodeCategory
from inventory_risk.network import ColumnSort, MapFocus, SupplyChainMap


DAY1 = date(2025, 11, 19)


@pytest.fixture
def map_records(sample_records, make_record):
    """Fixture for the sample plus two DC finished goods and an unlinked raw material."""
    return sample_records + [
        make_record(item_code="AAG620-MR2", location_code="VNHCDM", record_date=DAY1, value=1200),
        make_record(item_code="FG-OTHER", location_code="THBNDM", record_date=DAY1, value=5000),
        make_record(item_code="ZZZ-RM", location_code="MYBGPM", record_date=DAY1, value=50,
                    item_type=ItemType.RAW_MATERIAL),
    ]


@pytest.fixture
def scm(map_records, sample_bom):
    """Fixture for a map over the records and default BOM."""
    return SupplyChainMap(map_records, sample_bom)


def keys(cards):
    return [card.key for card in cards]


class TestColumns:
    """Tests for unfocused columns."""

    def test_columns_limited_to_bom(self, scm):
        """Test RM limited to BOM children and FG to BOM parents."""
        columns = scm.columns()

        assert keys(columns.raw_materials) == ["BAB250-MR1|MYBGPM"]
        assert keys(columns.finished_goods) == ["AAG620-MR2|MYBGPM"]
        assert keys(columns.distribution_centers) == ["AAG620-MR2|VNHCDM", "FG-OTHER|THBNDM"]

    def test_card_categories(self, scm):
        """Test that cards carry their column's category."""
        columns = scm.columns()

        assert columns.raw_materials[0].category == NodeCategory.RAW_MATERIAL
        assert columns.finished_goods[0].category == NodeCategory.FINISHED_GOOD
        assert columns.distribution_centers[0].category == NodeCategory.DISTRIBUTION_CENTER

    def test_sort_by_inventory(self, scm):
        """Test descending current-inventory ordering."""
        columns = scm.columns(sort=ColumnSort.INVENTORY_DESC)

        assert keys(columns.distribution_centers) == ["FG-OTHER|THBNDM", "AAG620-MR2|VNHCDM"]

    def test_sort_by_name_string(self, scm):
        """Test that the sort accepts its string value."""
        columns = scm.columns(sort="alpha")

        assert keys(columns.distribution_centers) == ["AAG620-MR2|VNHCDM", "FG-OTHER|THBNDM"]

    def test_unknown_sort_rejected(self, scm):
        """Test that an unknown sort name is an error."""
        with pytest.raises(ValueError):
            scm.columns(sort="random")

    def test_date_range_applies_to_cards(self, scm):
        """Test that health figures honour the date range."""
        columns = scm.columns(end_date=DAY1)

        assert columns.finished_goods[0].current_inventory == 5000.0


class TestFocus:
    """Tests for focused columns."""

    def test_focus_category_from_location(self):
        """Test that the focus column follows the location by default."""
        assert MapFocus("X", "MYBGPM").column == NodeCategory.FINISHED_GOOD
        assert MapFocus("X", "VNHCDM").column == NodeCategory.DISTRIBUTION_CENTER
        assert MapFocus("X", "ELSEWHERE").column == NodeCategory.RAW_MATERIAL
        assert MapFocus("X", "MYBGPM", NodeCategory.RAW_MATERIAL).column == NodeCategory.RAW_MATERIAL

    def test_finished_good_focus(self, scm):
        """Test FG focus: its children and the same item at DCs."""
        columns = scm.columns(focus=MapFocus("AAG620-MR2", "MYBGPM"))

        assert keys(columns.raw_materials) == ["BAB250-MR1|MYBGPM"]
        assert keys(columns.distribution_centers) == ["AAG620-MR2|VNHCDM"]

    def test_raw_material_focus(self, scm):
        """Test RM focus: its parents and those parents at DCs."""
        focus = MapFocus("BAB250-MR1", "MYBGPM", NodeCategory.RAW_MATERIAL)

        columns = scm.columns(focus=focus)

        assert keys(columns.finished_goods) == ["AAG620-MR2|MYBGPM"]
        assert keys(columns.distribution_centers) == ["AAG620-MR2|VNHCDM"]

    def test_dc_focus(self, scm):
        """Test DC focus: the item at plants and its children."""
        columns = scm.columns(focus=MapFocus("FG-OTHER", "THBNDM"))

        assert keys(columns.finished_goods) == []
        assert keys(columns.raw_materials) == []
        assert keys(columns.distribution_centers) == ["AAG620-MR2|VNHCDM", "FG-OTHER|THBNDM"]

    def test_empty_map(self):
        """Test that no records give empty columns."""
        columns = SupplyChainMap([], []).columns()

        assert columns.raw_materials == []
        assert columns.finished_goods == []
        assert columns.distribution_centers == []
