from __future__ import annotations

from math import isclose

import pytest

from pensionflow.core.editing import (
    SeriesEditError,
    merge_series,
    regenerate_series,
    update_record,
)
from pensionflow.core.series import generate_series
from pensionflow.models import DEFAULT_SETTINGS, YearRecord


@pytest.fixture()
def baseline() -> list:
    return generate_series(DEFAULT_SETTINGS)


def test_ratio_edit_recomputes_user_wage(baseline):
    rows = update_record(baseline, 1, "ratio", 1.5)

    assert rows[1].ratio == 1.5
    assert rows[1].userWage == 12480  # 8320 * 1.5
    assert rows[1].socialAverageWage == 8320


def test_user_wage_edit_recomputes_ratio(baseline):
    rows = update_record(baseline, 0, "userWage", 4800)

    assert rows[0].userWage == 4800
    assert isclose(rows[0].ratio, 0.6)


def test_user_wage_zero_marks_gap(baseline):
    rows = update_record(baseline, 0, "userWage", 0)

    assert rows[0].userWage == 0
    assert rows[0].ratio == 0


def test_social_wage_edit_recomputes_ratio(baseline):
    rows = update_record(baseline, 0, "socialAverageWage", 10000)

    assert rows[0].socialAverageWage == 10000
    assert rows[0].userWage == 8000
    assert isclose(rows[0].ratio, 0.8)


def test_zero_reference_wage_gives_zero_ratio(baseline):
    rows = update_record(baseline, 0, "socialAverageWage", 0)
    assert rows[0].ratio == 0

    rows = update_record(rows, 0, "userWage", 5000)
    assert rows[0].ratio == 0


def test_edit_leaves_input_untouched(baseline):
    before = [row.model_copy() for row in baseline]
    update_record(baseline, 3, "ratio", 2.0)
    assert baseline == before


def test_bad_edits_raise(baseline):
    with pytest.raises(SeriesEditError):
        update_record(baseline, len(baseline), "ratio", 1.0)
    with pytest.raises(SeriesEditError):
        update_record(baseline, -1, "ratio", 1.0)
    with pytest.raises(SeriesEditError):
        update_record(baseline, 0, "year", 2030)


def test_merge_with_empty_previous_returns_baseline(baseline):
    assert merge_series([], baseline) == baseline


def test_merge_keeps_ratios_for_shared_years():
    previous = [
        YearRecord(year=2023, socialAverageWage=7000, userWage=14000, ratio=2.0),
        YearRecord(year=2024, socialAverageWage=8000, userWage=12000, ratio=1.5),
        YearRecord(year=2025, socialAverageWage=8320, userWage=0, ratio=0.0),
    ]
    settings = DEFAULT_SETTINGS.model_copy(update={"initialSocialWage": 10000, "startAge": 57})

    rows = regenerate_series(settings, previous)

    assert [row.year for row in rows] == [2024, 2025, 2026]
    assert rows[0].socialAverageWage == 10000
    assert rows[0].ratio == 1.5
    assert rows[0].userWage == 15000
    # gap year stays a gap
    assert rows[1].ratio == 0.0
    assert rows[1].userWage == 0
    # new year keeps the baseline
    assert rows[2].ratio == 1.0
    assert rows[2].userWage == rows[2].socialAverageWage


def test_overflowing_ratio_degrades_to_zero(baseline):
    rows = update_record(baseline, 0, "socialAverageWage", 1e-310)
    assert rows[0].ratio == 0

    rows = update_record(rows, 0, "userWage", 9000)
    assert rows[0].ratio == 0

    rows = update_record(baseline, 0, "ratio", 1e308)
    assert rows[0].userWage == 0
