from __future__ import annotations

import pytest
from pydantic import ValidationError

from pensionflow.core.rounding import round_half_up
from pensionflow.core.series import generate_series
from pensionflow.models import Settings


def make_settings(**overrides) -> Settings:
    values = dict(
        startYear=2024,
        startAge=25,
        retirementAge=60,
        initialSocialWage=8000,
        socialWageGrowthRate=4.0,
        accountBalance=0,
        customWages={},
    )
    values.update(overrides)
    return Settings(**values)


def test_one_record_per_working_year():
    rows = generate_series(make_settings())

    assert len(rows) == 35
    assert [row.year for row in rows] == list(range(2024, 2059))


def test_invalid_span_returns_empty_series():
    assert generate_series(make_settings(startAge=60, retirementAge=60)) == []
    assert generate_series(make_settings(startAge=61, retirementAge=60)) == []


def test_short_span_is_not_rejected():
    rows = generate_series(make_settings(startAge=55, retirementAge=60))
    assert [row.year for row in rows] == [2024, 2025, 2026, 2027, 2028]


def test_baseline_is_full_contribution():
    for row in generate_series(make_settings()):
        assert row.userWage == row.socialAverageWage
        assert row.ratio == 1.0


def test_growth_compounds_on_unrounded_wage():
    rows = generate_series(make_settings())

    assert rows[0].socialAverageWage == 8000
    assert rows[1].socialAverageWage == round_half_up(8000 * 1.04) == 8320
    # 8652.8, not 8320 * 1.04 rounded twice
    assert rows[2].socialAverageWage == 8653


def test_override_shifts_following_projection():
    rows = generate_series(make_settings(customWages={2025: 9000}))

    assert rows[0].socialAverageWage == 8000
    assert rows[1].socialAverageWage == 9000
    assert rows[1].userWage == 9000
    assert rows[2].socialAverageWage == round_half_up(9000 * 1.04) == 9360


def test_override_values_are_rounded():
    rows = generate_series(make_settings(customWages={2024: 8100.5, 2026: 7000.4}))

    assert rows[0].socialAverageWage == 8101
    assert rows[2].socialAverageWage == 7000


def test_override_outside_span_is_ignored():
    with_extra = generate_series(make_settings(customWages={1999: 1, 2100: 1}))
    assert with_extra == generate_series(make_settings())


def test_zero_growth_keeps_wage_flat():
    rows = generate_series(make_settings(socialWageGrowthRate=0.0, startAge=50))
    assert {row.socialAverageWage for row in rows} == {8000}


def test_generation_is_idempotent():
    settings = make_settings(customWages={2030: 12000})
    assert generate_series(settings) == generate_series(settings)


def test_json_year_keys_are_coerced():
    settings = Settings.model_validate(
        {
            "startYear": 2024,
            "startAge": 58,
            "retirementAge": 60,
            "initialSocialWage": 8000,
            "socialWageGrowthRate": 4.0,
            "accountBalance": 0,
            "customWages": {"2025": 9500},
        }
    )

    rows = generate_series(settings)
    assert rows[1].socialAverageWage == 9500


def test_overflowing_growth_degrades_to_zero_wages():
    rows = generate_series(make_settings(socialWageGrowthRate=1e300, startAge=55))

    assert len(rows) == 5
    assert rows[0].socialAverageWage == 8000
    assert rows[1].socialAverageWage > 0
    for row in rows[2:]:
        assert row.socialAverageWage == 0
        assert row.userWage == 0


def test_settings_reject_non_finite_numbers():
    for bad in (float("nan"), float("inf"), float("-inf")):
        with pytest.raises(ValidationError):
            make_settings(initialSocialWage=bad)
        with pytest.raises(ValidationError):
            make_settings(customWages={2025: bad})


def test_account_balance_is_required():
    values = make_settings().model_dump()
    del values["accountBalance"]

    with pytest.raises(ValidationError):
        Settings.model_validate(values)
