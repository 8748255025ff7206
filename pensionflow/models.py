from __future__ import annotations

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field


class Settings(BaseModel):
    """Structural inputs for one projection.

    Values are not range-checked here; the policy constraints are reported
    as warnings by ``core.validation`` instead of rejected.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    startYear: int
    startAge: int
    retirementAge: int
    initialSocialWage: float
    socialWageGrowthRate: float  # percent, 4.0 means 4%
    accountBalance: float
    # year -> monthly reference wage; a missing year is projected
    customWages: Dict[int, float] = Field(default_factory=dict)

    @property
    def retirement_year(self) -> int:
        return self.startYear + (self.retirementAge - self.startAge)


class YearRecord(BaseModel):
    model_config = ConfigDict(extra="forbid", validate_assignment=True, allow_inf_nan=False)

    year: int
    socialAverageWage: float
    userWage: float  # 0 marks a gap year
    ratio: float


class PensionResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    monthlyBasicPension: int
    monthlyPersonalPension: int
    totalMonthly: int
    totalAccumulated: int
    averageIndex: float
    basicPensionReplacementRate: float
    periodContribution: int
    monthsDivisor: int
    contributionYears: int

    @classmethod
    def zero(cls, months_divisor: int) -> "PensionResult":
        return cls(
            monthlyBasicPension=0,
            monthlyPersonalPension=0,
            totalMonthly=0,
            totalAccumulated=0,
            averageIndex=0.0,
            basicPensionReplacementRate=0.0,
            periodContribution=0,
            monthsDivisor=months_divisor,
            contributionYears=0,
        )


class PensionPolicy(BaseModel):
    """Statutory constants of the simplified scheme.

    Defaults follow the national basic-pension formula without the
    transitional pension component.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    # individual-account annuity months, keyed by retirement age
    monthsDivisors: Dict[int, int] = Field(
        default_factory=lambda: {50: 195, 55: 170, 60: 139, 65: 101}
    )
    defaultDivisor: int = Field(139, gt=0)
    basicPensionRate: float = 0.01  # per contribution year
    accountContributionRate: float = 0.08
    monthsPerYear: int = 12
    minRatio: float = 0.6
    maxRatio: float = 3.0
    minContributionYears: int = 15

    def divisor_for(self, retirement_age: int) -> int:
        # exact match only, no interpolation between table ages
        return self.monthsDivisors.get(retirement_age) or self.defaultDivisor


DEFAULT_SETTINGS = Settings(
    startYear=2024,
    startAge=25,
    retirementAge=60,
    initialSocialWage=8000,
    socialWageGrowthRate=4.0,
    accountBalance=0,
    customWages={},
)

DEFAULT_POLICY = PensionPolicy()
