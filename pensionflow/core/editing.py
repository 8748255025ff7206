"""Per-year edits and regeneration merges for a contribution series."""

from __future__ import annotations

import logging
from typing import Dict, List, Literal, Sequence

from pensionflow.core.rounding import finite_or_zero, round_half_up
from pensionflow.core.series import generate_series
from pensionflow.models import Settings, YearRecord

logger = logging.getLogger(__name__)

EditableField = Literal["ratio", "userWage", "socialAverageWage"]


class SeriesEditError(ValueError):
    pass


def update_record(
    series: Sequence[YearRecord],
    index: int,
    field: str,
    value: float,
) -> List[YearRecord]:
    """
    Return a copy of ``series`` with one field of one record changed.

    The counterpart of the edited field is recomputed so that
    ratio == userWage / socialAverageWage keeps holding:
      - ratio             -> userWage = round(socialAverageWage * ratio)
      - userWage          -> ratio = userWage / socialAverageWage
      - socialAverageWage -> ratio = userWage / socialAverageWage
    A non-positive reference wage gives ratio 0.
    """
    if not 0 <= index < len(series):
        raise SeriesEditError(f"year index {index} out of range (0-{len(series) - 1})")

    record = series[index].model_copy()

    if field == "ratio":
        record.ratio = value
        record.userWage = round_half_up(record.socialAverageWage * value)
    elif field == "userWage":
        record.userWage = value
        record.ratio = finite_or_zero(value / record.socialAverageWage) if record.socialAverageWage > 0 else 0.0
    elif field == "socialAverageWage":
        record.socialAverageWage = value
        record.ratio = finite_or_zero(record.userWage / value) if value > 0 else 0.0
    else:
        raise SeriesEditError(f"field {field!r} is not editable")

    updated = list(series)
    updated[index] = record
    return updated


def merge_series(
    previous: Sequence[YearRecord],
    baseline: Sequence[YearRecord],
) -> List[YearRecord]:
    """Carry ratios from ``previous`` onto ``baseline`` for years present in both.

    Years that fell out of the new span are dropped; new years keep the
    100% baseline.
    """
    if not previous:
        return list(baseline)

    ratios: Dict[int, float] = {record.year: record.ratio for record in previous}

    merged: List[YearRecord] = []
    for point in baseline:
        ratio = ratios.get(point.year)
        if ratio is None:
            merged.append(point)
            continue
        merged.append(
            point.model_copy(
                update={
                    "ratio": ratio,
                    "userWage": float(round_half_up(point.socialAverageWage * ratio)),
                }
            )
        )

    logger.debug("merged %d of %d years from previous series", len(ratios), len(merged))
    return merged


def regenerate_series(settings: Settings, previous: Sequence[YearRecord]) -> List[YearRecord]:
    return merge_series(previous, generate_series(settings))
