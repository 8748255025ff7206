"""Pension formula evaluation over a yearly contribution series."""

from __future__ import annotations

import logging
from typing import Sequence

from pensionflow.core.rounding import finite_or_zero, round_half_up
from pensionflow.models import DEFAULT_POLICY, PensionPolicy, PensionResult, Settings, YearRecord

logger = logging.getLogger(__name__)


def calculate_pension(
    series: Sequence[YearRecord],
    settings: Settings,
    policy: PensionPolicy = DEFAULT_POLICY,
) -> PensionResult:
    """
    Reduce a contribution series into monthly pension amounts.

      basic    = (W + W * avgIndex) / 2 * years * basicPensionRate
      personal = (accountBalance + sum(userWage * accountRate * 12)) / divisor

    W is the reference wage of the last record. Gap years (userWage == 0)
    are left out of avgIndex and of the year count. The account balance
    and deposits accrue no interest. Amounts that overflow degrade to 0.
    """
    if not series:
        return PensionResult.zero(policy.defaultDivisor)

    effective = [record for record in series if record.userWage > 0]
    years_worked = len(effective)

    final_social_wage = series[-1].socialAverageWage

    total_ratio = sum(record.ratio for record in effective)
    average_index = total_ratio / years_worked if years_worked > 0 else 0.0

    basic = (
        (final_social_wage + final_social_wage * average_index) / 2
        * years_worked
        * policy.basicPensionRate
    )

    # gap years add 0 here on their own
    period_contribution = sum(
        record.userWage * policy.accountContributionRate * policy.monthsPerYear
        for record in series
    )
    total_accumulated = settings.accountBalance + period_contribution

    divisor = policy.divisor_for(settings.retirementAge)
    personal = total_accumulated / divisor

    replacement_rate = basic / final_social_wage if final_social_wage > 0 else 0.0

    logger.debug(
        "pension: years=%d avgIndex=%.4f divisor=%d basic=%.2f personal=%.2f",
        years_worked,
        average_index,
        divisor,
        basic,
        personal,
    )

    return PensionResult(
        monthlyBasicPension=round_half_up(basic),
        monthlyPersonalPension=round_half_up(personal),
        totalMonthly=round_half_up(basic + personal),
        totalAccumulated=round_half_up(total_accumulated),
        averageIndex=round(finite_or_zero(average_index), 4),
        basicPensionReplacementRate=finite_or_zero(replacement_rate),
        periodContribution=round_half_up(period_contribution),
        monthsDivisor=divisor,
        contributionYears=years_worked,
    )
