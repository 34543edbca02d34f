"""Pytest configuration and shared fixtures."""

import pytest
from datetime import date

from inventory_risk.constants import (
    METRIC_INDEPENDENT_REQUIREMENT,
    METRIC_TOTAL_INVENTORY_FORECAST,
    METRIC_TOTAL_REQUIREMENT,
    METRIC_TOTAL_TARGET_INVENTORY,
)
from inventory_risk.models import BomEdge, InventoryRecord, ItemType
from inventory_risk.parsers import InventoryRecordParser


SAMPLE_HEADER = "Factory,Type,Item Code,Inv Org,Item Class,UOM,Strategy,Metric,Date,Value"

SAMPLE_LINES = [
    "SF,FG,AAG620-MR2,MYBGPM,MR,LM,MTS,Tot.Req.,11/19/2025,9910.16",
    "SF,FG,AAG620-MR2,MYBGPM,MR,LM,MTS,Tot.Inventory (Forecast),11/19/2025,5000.00",
    "SF,FG,AAG620-MR2,MYBGPM,MR,LM,MTS,Tot.Target Inv.,11/19/2025,4000.00",
    "SF,FG,AAG620-MR2,MYBGPM,MR,LM,MTS,Tot.Req.,11/20/2025,500.00",
    "SF,FG,AAG620-MR2,MYBGPM,MR,LM,MTS,Tot.Inventory (Forecast),11/20/2025,400.00",
    "SF,FG,AAG620-MR2,MYBGPM,MR,LM,MTS,Tot.Target Inv.,11/20/2025,4000.00",
    "SF,FG,AAG620-MR2,MYBGPM,MR,LM,MTS,Tot.Req.,11/21/2025,0",
    "SF,FG,AAG620-MR2,MYBGPM,MR,LM,MTS,Tot.Inventory (Forecast),11/21/2025,-400.00",
    "SF,FG,AAG620-MR2,MYBGPM,MR,LM,MTS,Tot.Target Inv.,11/21/2025,4000.00",
    "SF,RM,BAB250-MR1,MYBGPM,FA,KG,MTS,Tot.Inventory (Forecast),11/19/2025,2500.00",
    "SF,RM,BAB250-MR1,MYBGPM,FA,KG,MTS,Tot.Target Inv.,11/19/2025,3000.00",
    "SF,RM,BAB250-MR1,MYBGPM,FA,KG,MTS,Tot.Inventory (Forecast),11/20/2025,2400.00",
    "SF,RM,BAB250-MR1,MYBGPM,FA,KG,MTS,Tot.Target Inv.,11/20/2025,3000.00",
]


@pytest.fixture
def reference_date():
    """Fixture for the fixed day lead-time horizons start from."""
    return date(2025, 11, 19)


@pytest.fixture
def sample_rows():
    """Fixture for the sample export as header-keyed string rows."""
    headers = SAMPLE_HEADER.split(',')
    return [dict(zip(headers, line.split(','))) for line in SAMPLE_LINES]


@pytest.fixture
def sample_records(sample_rows):
    """Fixture for the sample export parsed into records."""
    return InventoryRecordParser().parse_rows(sample_rows)


@pytest.fixture
def sample_bom():
    """Fixture for the default BOM: AAG620-MR2 consumes 0.5 BAB250-MR1."""
    return [
        BomEdge(parent_item="AAG620-MR2", child_item="BAB250-MR1", ratio=0.5, plant="MYBGPM"),
    ]


@pytest.fixture
def make_record():
    """Fixture returning a factory for single InventoryRecords."""
    def _make(
        item_code="ITEM-A",
        location_code="MYBGPM",
        metric_name=METRIC_TOTAL_INVENTORY_FORECAST,
        record_date=date(2025, 11, 19),
        value=0.0,
        item_type=ItemType.FINISHED_GOOD,
        item_class="MR",
        strategy="MTS",
        unit_of_measure="LM",
    ):
        return InventoryRecord(
            item_code=item_code,
            location_code=location_code,
            item_class=item_class,
            unit_of_measure=unit_of_measure,
            strategy=strategy,
            item_type=item_type,
            metric_name=metric_name,
            record_date=record_date,
            value=value,
        )
    return _make


@pytest.fixture
def make_day(make_record):
    """Fixture returning a factory for the four classifier metrics of one day."""
    def _make(
        item_code,
        location_code,
        day,
        requirement=0.0,
        independent=0.0,
        inventory=0.0,
        target=0.0,
        **kwargs,
    ):
        figures = [
            (METRIC_TOTAL_REQUIREMENT, requirement),
            (METRIC_INDEPENDENT_REQUIREMENT, independent),
            (METRIC_TOTAL_INVENTORY_FORECAST, inventory),
            (METRIC_TOTAL_TARGET_INVENTORY, target),
        ]
        return [
            make_record(
                item_code=item_code,
                location_code=location_code,
                metric_name=metric,
                record_date=day,
                value=value,
                **kwargs,
            )
            for metric, value in figures
        ]
    return _make
