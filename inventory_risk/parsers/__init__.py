"""Parsers turning already-loaded rows into engine records."""

from .record_parser import (
    InventoryRecordParser,
    parse_record_date,
    parse_record_value,
    parse_item_type,
)
from .bom_parser import parse_bom_row, parse_bom_rows, parse_bom_dataframe

__all__ = [
    'InventoryRecordParser',
    'parse_record_date',
    'parse_record_value',
    'parse_item_type',
    'parse_bom_row',
    'parse_bom_rows',
    'parse_bom_dataframe',
]
