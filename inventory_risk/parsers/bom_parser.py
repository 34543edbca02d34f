"""Parser for bill-of-materials rows with tolerant header names."""

from typing import Any, Iterable, List, Mapping, Optional, Sequence
import logging

import pandas as pd

from ..models.bom import BomEdge
from .record_parser import parse_record_value

logger = logging.getLogger(__name__)


#: Accepted header spellings, checked in order; first non-empty cell wins
PLANT_HEADERS = ('Plant', 'Plant ')
PARENT_HEADERS = ('Parent', 'Parent Item', 'Parent Item ')
CHILD_HEADERS = ('Child', 'Child Item', 'Child Item ')
RATIO_HEADERS = ('Ratio', 'Quantity Per', 'Quantity Per ', 'qty')


def _first_present(row: Mapping[str, Any], headers: Sequence[str]) -> Optional[Any]:
    for header in headers:
        value = row.get(header)
        if value is None:
            continue
        if isinstance(value, str):
            if value.strip():
                return value
            continue
        if pd.isna(value):
            continue
        return value
    return None


def parse_bom_row(row: Mapping[str, Any]) -> Optional[BomEdge]:
    """Parse one BOM row.

    Args:
        row: Mapping keyed by source header name

    Returns:
        BomEdge, or None if the row has no parent or no child
    """
    parent = _first_present(row, PARENT_HEADERS)
    child = _first_present(row, CHILD_HEADERS)
    if parent is None or child is None:
        return None

    ratio_cell = _first_present(row, RATIO_HEADERS)
    ratio, raw_ratio = parse_record_value(ratio_cell)
    if raw_ratio is not None:
        logger.warning(f"Non-numeric BOM ratio {raw_ratio!r} for {parent} -> {child}; using 0")

    plant = _first_present(row, PLANT_HEADERS)

    return BomEdge(
        parent_item=str(parent),
        child_item=str(child),
        ratio=ratio,
        plant=str(plant) if plant is not None else None,
    )


def parse_bom_rows(rows: Iterable[Mapping[str, Any]]) -> List[BomEdge]:
    """Parse BOM rows, skipping malformed ones.

    Args:
        rows: Mappings keyed by source header name

    Returns:
        BomEdges in input order
    """
    edges = []
    skipped = 0

    for row in rows:
        edge = parse_bom_row(row)
        if edge is None:
            skipped += 1
            continue
        edges.append(edge)

    if skipped:
        logger.warning(f"Skipped {skipped} BOM row(s) without parent or child item")

    logger.info(f"Parsed {len(edges)} BOM edges")
    return edges


def parse_bom_dataframe(df: pd.DataFrame) -> List[BomEdge]:
    """Parse a DataFrame holding the BOM table."""
    return parse_bom_rows(df.to_dict(orient='records'))
