"""Parser for the per-day inventory/requirement export.

Rows arrive already materialised (a list of mappings from a CSV reader, or
a pandas DataFrame). This module is the parse-and-validate boundary: it
turns loosely-typed cells into immutable InventoryRecord objects and
absorbs data defects instead of raising.
"""

from datetime import date as Date, datetime
from typing import Any, Iterable, List, Mapping, Optional, Tuple
import logging
import math
import numbers

import pandas as pd

from ..models.inventory_record import InventoryRecord, ItemType

logger = logging.getLogger(__name__)


def parse_record_date(value: Any) -> Optional[Date]:
    """Parse a date cell into a calendar day.

    Accepts ``date``/``datetime``/``Timestamp`` objects and text such as
    ``11/19/2025`` (month first) or ``2025-11-19``. Any time component is
    dropped.

    Args:
        value: Raw cell value

    Returns:
        Calendar day, or None if the value is missing or unparseable
    """
    if value is None:
        return None
    if not isinstance(value, str) and pd.isna(value):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, Date):
        return value

    text = str(value).strip()
    if not text:
        return None

    parsed = pd.to_datetime(text, errors="coerce")
    if pd.isna(parsed):
        return None
    return parsed.date()


def parse_record_value(value: Any) -> Tuple[float, Optional[str]]:
    """Parse a numeric cell.

    Args:
        value: Raw cell value

    Returns:
        (numeric value, raw text). Raw text is None when the value was
        numeric or missing; otherwise the value is 0.0 and the original
        text is returned unmodified.
    """
    if value is None:
        return 0.0, None
    if isinstance(value, bool):
        return 0.0, str(value)
    if isinstance(value, numbers.Real):
        if math.isnan(value):
            return 0.0, None
        if math.isinf(value):
            return 0.0, str(value)
        return float(value), None

    text = str(value)
    try:
        number = float(text.strip())
    except ValueError:
        return 0.0, text
    if not math.isfinite(number):
        return 0.0, text
    return number, None


def parse_item_type(value: Any) -> ItemType:
    """Map a Type cell to an ItemType (unknown values -> OTHER)."""
    if value is None:
        return ItemType.OTHER
    text = str(value).strip().upper()
    if text == ItemType.RAW_MATERIAL.value:
        return ItemType.RAW_MATERIAL
    if text == ItemType.FINISHED_GOOD.value:
        return ItemType.FINISHED_GOOD
    return ItemType.OTHER


class InventoryRecordParser:
    """Parser for inventory export rows.

    Expected columns (header names as exported; surrounding whitespace in
    headers is ignored, extra columns are ignored):
        - Factory: Factory code (optional)
        - Type: RM or FG
        - Item Code: Item code
        - Inv Org: Inventory organisation (plant or DC)
        - Item Class, UOM, Strategy: Categorical attributes
        - Metric: Metric label (whitespace-trimmed)
        - Date: Calendar day (M/D/YYYY or ISO)
        - Value: Numeric value

    The parser:
    1. Trims headers and text cells
    2. Parses dates (unparseable -> record_date=None)
    3. Parses values (non-numeric -> 0.0, original text kept in raw_value)
    4. Logs a summary of absorbed defects
    """

    REQUIRED_COLUMNS = {'Item Code', 'Inv Org', 'Metric', 'Date', 'Value'}

    def parse_rows(self, rows: Iterable[Mapping[str, Any]]) -> List[InventoryRecord]:
        """Parse an iterable of row mappings.

        Args:
            rows: Mappings keyed by source header name

        Returns:
            InventoryRecords in input order
        """
        records = []
        invalid_dates = 0
        non_numeric = 0

        for row in rows:
            record = self.parse_row(row)
            if not record.has_valid_date:
                invalid_dates += 1
            if not record.has_numeric_value:
                non_numeric += 1
            records.append(record)

        if invalid_dates:
            logger.warning(
                f"{invalid_dates} row(s) have unparseable dates; "
                f"they are excluded from date-range views"
            )
        if non_numeric:
            logger.warning(f"{non_numeric} row(s) have non-numeric values; treated as 0")

        logger.info(f"Parsed {len(records)} inventory records")
        return records

    def parse_dataframe(self, df: pd.DataFrame) -> List[InventoryRecord]:
        """Parse a DataFrame holding the export.

        Args:
            df: DataFrame with the export's columns

        Returns:
            InventoryRecords in row order

        Raises:
            ValueError: If required columns are missing
        """
        df = df.rename(columns=lambda c: str(c).strip())
        missing = self.REQUIRED_COLUMNS - set(df.columns)
        if missing:
            raise ValueError(f"Missing required columns: {sorted(missing)}")

        return self.parse_rows(df.to_dict(orient='records'))

    def parse_row(self, row: Mapping[str, Any]) -> InventoryRecord:
        """Parse one row mapping into an InventoryRecord."""
        cells = {str(header).strip(): cell for header, cell in row.items()}

        value, raw_value = parse_record_value(cells.get('Value'))

        return InventoryRecord(
            item_code=self._text(cells.get('Item Code')),
            location_code=self._text(cells.get('Inv Org')),
            item_class=self._text(cells.get('Item Class')),
            unit_of_measure=self._text(cells.get('UOM')),
            strategy=self._text(cells.get('Strategy')),
            item_type=parse_item_type(cells.get('Type')),
            metric_name=self._text(cells.get('Metric')),
            record_date=parse_record_date(cells.get('Date')),
            value=value,
            raw_value=raw_value,
            factory=self._text(cells.get('Factory')),
        )

    @staticmethod
    def _text(value: Any) -> str:
        if value is None:
            return ""
        if not isinstance(value, str) and pd.isna(value):
            return ""
        return str(value).strip()
