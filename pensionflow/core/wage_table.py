"""Regional reference-wage tables.

A table is a sheet whose first row holds calendar years and whose first
column holds region names::

    region,   2022,   2023,   2024
    Beijing, 11297,  12049,  12813
    Chengdu,  8329,       ,   9201

Each region becomes a ``customWages`` mapping for ``Settings``.
"""

from __future__ import annotations

import logging
import math
import re
from pathlib import Path
from typing import IO, Any, Dict, List, Optional, Sequence, Union

import pandas as pd
from pydantic import BaseModel, ConfigDict

from pensionflow.models import Settings

logger = logging.getLogger(__name__)

MIN_TABLE_YEAR = 1900
MAX_TABLE_YEAR = 2100

EXCEL_SUFFIXES = {".xlsx", ".xls"}
CSV_SUFFIXES = {".csv"}

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


class WageTableError(ValueError):
    pass


class RegionWages(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    wages: Dict[int, float]


def _leading_int(cell: Any) -> Optional[int]:
    if isinstance(cell, float) and cell.is_integer():
        return int(cell)
    match = _LEADING_INT.match(str(cell))
    return int(match.group(1)) if match else None


def _leading_float(cell: Any) -> Optional[float]:
    if isinstance(cell, (int, float)) and not isinstance(cell, bool):
        return float(cell)
    match = _LEADING_FLOAT.match(str(cell).replace(",", ""))
    return float(match.group(1)) if match else None


def _is_blank(cell: Any) -> bool:
    if isinstance(cell, float):
        return math.isnan(cell)
    return cell is None or cell == ""


def parse_wage_rows(rows: Sequence[Sequence[Any]]) -> List[RegionWages]:
    """Turn raw sheet rows into per-region wage mappings.

    Header cells are year columns when their leading integer lies strictly
    between 1900 and 2100. Rows with a blank first cell and regions without
    a single numeric wage are skipped.
    """
    if len(rows) < 2:
        return []

    year_columns: Dict[int, int] = {}
    for index, header in enumerate(rows[0]):
        if _is_blank(header):
            continue
        year = _leading_int(header)
        if year is not None and MIN_TABLE_YEAR < year < MAX_TABLE_YEAR:
            year_columns[index] = year

    if not year_columns:
        return []

    regions: List[RegionWages] = []
    for row in rows[1:]:
        if not row:
            continue

        name = "" if _is_blank(row[0]) else str(row[0]).strip()
        if not name:
            continue

        wages: Dict[int, float] = {}
        for index, year in year_columns.items():
            cell = row[index] if index < len(row) else None
            if _is_blank(cell):
                continue
            value = _leading_float(cell)
            if value is not None:
                wages[year] = value

        if wages:
            regions.append(RegionWages(name=name, wages=wages))

    return regions


def load_wage_table(
    source: Union[str, Path, IO[bytes]],
    filename: Optional[str] = None,
) -> List[RegionWages]:
    """Read the first sheet of an Excel workbook or a CSV file and parse it."""
    suffix = Path(filename if filename is not None else str(source)).suffix.lower()

    if suffix not in EXCEL_SUFFIXES | CSV_SUFFIXES:
        raise WageTableError(f"unsupported wage table format: {suffix or 'no extension'}")

    try:
        if suffix in EXCEL_SUFFIXES:
            frame = pd.read_excel(source, sheet_name=0, header=None)
        else:
            frame = pd.read_csv(source, header=None, dtype=str, keep_default_na=False)
    except (ImportError, OSError, ValueError) as exc:
        raise WageTableError(f"failed to read wage table: {exc}") from exc

    frame = frame.astype(object).where(pd.notna(frame), None)
    rows = frame.values.tolist()
    regions = parse_wage_rows(rows)
    logger.info("loaded %d regions from wage table %s", len(regions), filename or source)
    return regions


def search_regions(regions: Sequence[RegionWages], term: str) -> List[RegionWages]:
    needle = term.strip().lower()
    return [region for region in regions if needle in region.name.lower()]


def apply_region(settings: Settings, region: RegionWages) -> Settings:
    """Use a region's wages as overrides, re-seeding the start wage when known."""
    update: Dict[str, Any] = {"customWages": dict(region.wages)}
    start_wage = region.wages.get(settings.startYear)
    if start_wage:
        update["initialSocialWage"] = start_wage
    return settings.model_copy(update=update)
