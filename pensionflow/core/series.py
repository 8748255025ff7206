"""Yearly contribution series generation."""

from __future__ import annotations

import logging
from typing import List

from pensionflow.core.rounding import round_half_up
from pensionflow.models import Settings, YearRecord

logger = logging.getLogger(__name__)


def generate_series(settings: Settings) -> List[YearRecord]:
    """
    Build one record per contribution year, startYear..retirementYear (exclusive).

    Per year:
      1) Reference wage = customWages[year] if present, else the running projection.
      2) Record it rounded, with the user contributing exactly 100% of it.
      3) Grow the wage actually used by socialWageGrowthRate for the next year,
         so an override also shifts every projected year after it.

    An empty list is returned when startAge >= retirementAge.
    """
    if settings.startAge >= settings.retirementAge:
        logger.debug(
            "empty series: startAge=%s retirementAge=%s",
            settings.startAge,
            settings.retirementAge,
        )
        return []

    growth = 1 + settings.socialWageGrowthRate / 100
    current_wage = float(settings.initialSocialWage)

    rows: List[YearRecord] = []
    for year in range(settings.startYear, settings.retirement_year):
        wage = settings.customWages.get(year, current_wage)

        rounded = round_half_up(wage)
        rows.append(
            YearRecord(
                year=year,
                socialAverageWage=rounded,
                userWage=rounded,
                ratio=1.0,
            )
        )

        current_wage = wage * growth

    return rows
