"""Policy checks reported as warnings, never as failures."""

from __future__ import annotations

from typing import List, Sequence

from pensionflow.models import DEFAULT_POLICY, PensionPolicy, Settings, YearRecord


def check_settings(settings: Settings, policy: PensionPolicy = DEFAULT_POLICY) -> List[str]:
    warnings: List[str] = []

    span = settings.retirementAge - settings.startAge
    if span <= 0:
        warnings.append(
            f"retirementAge {settings.retirementAge} must be greater than startAge {settings.startAge}"
        )
    elif span < policy.minContributionYears:
        warnings.append(
            f"contribution span of {span} years is below the minimum of "
            f"{policy.minContributionYears} (retire at {settings.startAge + policy.minContributionYears} or later)"
        )

    if settings.retirementAge not in policy.monthsDivisors:
        warnings.append(
            f"no annuity divisor for retirement age {settings.retirementAge}, "
            f"using {policy.defaultDivisor} months"
        )

    return warnings


def check_series(series: Sequence[YearRecord], policy: PensionPolicy = DEFAULT_POLICY) -> List[str]:
    """Flag contribution years whose ratio sits outside the policy bounds.

    Gap years (userWage == 0) are not contribution years and are skipped.
    """
    warnings: List[str] = []
    for record in series:
        if record.userWage <= 0:
            continue
        if not policy.minRatio <= record.ratio <= policy.maxRatio:
            warnings.append(
                f"{record.year} ratio {record.ratio:.2f} outside "
                f"{policy.minRatio:.1f}-{policy.maxRatio:.1f}"
            )
    return warnings
