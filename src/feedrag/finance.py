"""Financial projection utilities for the fee drag estimator."""
from __future__ import annotations

import datetime
import logging
import math
import sys
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

from .config import FEE_STEP_PCT
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

_MAX_LOG = math.log(sys.float_info.max)

# (year label, ending capital) pairs; index 0 is the current year.
GrowthPoint = Tuple[str, int]
GrowthSeries = Tuple[GrowthPoint, ...]


@dataclass(frozen=True)
class InvestmentConfig:
    starting_capital: float
    gross_return_pct: float
    horizon_years: int
    base_fee_pct: float

    def validate(self) -> "InvestmentConfig":
        """Return ``self`` when the configuration can be projected."""

        for name in ("starting_capital", "gross_return_pct", "horizon_years", "base_fee_pct"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ConfigurationError(f"{name} must be a finite number, got {value!r}")
        if self.starting_capital <= 0:
            raise ConfigurationError(
                f"Starting capital must be positive, got {self.starting_capital:g}"
            )
        if int(self.horizon_years) != self.horizon_years or self.horizon_years < 1:
            raise ConfigurationError(
                f"Horizon must be a whole number of years >= 1, got {self.horizon_years!r}"
            )
        if self.base_fee_pct < 0:
            raise ConfigurationError(
                f"Annual fee cannot be negative, got {self.base_fee_pct:g}%"
            )
        if growth_overflows(self.starting_capital, self.gross_return_pct, self.horizon_years - 1):
            raise ConfigurationError(
                f"{self.horizon_years} years at {self.gross_return_pct:g}% grows past "
                "the largest representable amount"
            )
        return self


@dataclass(frozen=True)
class FeeScenarioSet:
    base_pct: float
    lower_pct: float
    higher_pct: float

    def rounded(self) -> Tuple[int, int, int]:
        """Whole-percent rates for read-only display fields."""

        return (
            int(round(self.base_pct)),
            int(round(self.lower_pct)),
            int(round(self.higher_pct)),
        )

    def rate_for(self, name: str) -> float:
        return {
            "baseFee": self.base_pct,
            "lowerFee": self.lower_pct,
            "higherFee": self.higher_pct,
        }[name]


def derive_fee_scenarios(
    base_fee_pct: float, gross_return_pct: float, strict: bool = True
) -> FeeScenarioSet:
    """Derive the lower/higher comparison rates around ``base_fee_pct``.

    The lower rate sits one point below the base and never drops under zero.
    With ``strict`` the higher rate is capped one point below the gross return,
    so the higher-fee line never has a degenerate net growth rate; otherwise it
    is simply one point above the base.
    """

    lower = max(0.0, base_fee_pct - FEE_STEP_PCT)
    if strict:
        higher = min(gross_return_pct - FEE_STEP_PCT, base_fee_pct + FEE_STEP_PCT)
    else:
        higher = max(0.0, base_fee_pct + FEE_STEP_PCT)
    return FeeScenarioSet(base_pct=base_fee_pct, lower_pct=lower, higher_pct=higher)


def growth_overflows(starting_capital: float, rate_pct: float, years: float) -> bool:
    """True when compounding for ``years`` exceeds the float range."""

    factor = abs(1 + rate_pct / 100.0)
    if years <= 0 or factor <= 1:
        return False
    # One e-fold of headroom so rounding in pow never tips into inf.
    return math.log(starting_capital) + years * math.log(factor) > _MAX_LOG - 1


def compounded_principal(starting_capital: float, years: float, rate_pct: float) -> int:
    """Capital after ``years`` of compounding at ``rate_pct`` percent, rounded."""

    return int(round(starting_capital * (1 + rate_pct / 100.0) ** years))


def year_labels(horizon_years: int, current_year: Optional[int] = None) -> Tuple[str, ...]:
    if current_year is None:
        current_year = datetime.date.today().year
    return tuple(str(current_year + i) for i in range(horizon_years))


def project_growth_py(
    starting_capital: float,
    gross_return_pct: float,
    fee_pct: float,
    horizon_years: int,
    current_year: Optional[int] = None,
) -> GrowthSeries:
    """Pure-Python projection, net rate applied once per year."""

    net_pct = gross_return_pct - fee_pct
    labels = year_labels(horizon_years, current_year)
    return tuple(
        (label, compounded_principal(starting_capital, i, net_pct))
        for i, label in enumerate(labels)
    )


def project_growth_np(
    starting_capital: float,
    gross_return_pct: float,
    fee_pct: float,
    horizon_years: int,
    current_year: Optional[int] = None,
) -> GrowthSeries:
    """Vectorized projection producing the same values as ``project_growth_py``."""

    labels = year_labels(horizon_years, current_year)
    if not labels:
        return ()
    growth = 1 + (gross_return_pct - fee_pct) / 100.0
    powers = growth ** np.arange(horizon_years, dtype=np.float64)
    values = starting_capital * powers
    return tuple((label, int(round(float(v)))) for label, v in zip(labels, values))


def project_growth(
    starting_capital,
    gross_return_pct,
    fee_pct,
    horizon_years,
    current_year=None,
    use_numpy=True,
):
    if use_numpy:
        return project_growth_np(
            starting_capital, gross_return_pct, fee_pct, horizon_years, current_year
        )
    return project_growth_py(
        starting_capital, gross_return_pct, fee_pct, horizon_years, current_year
    )


def solve_years_to_multiple(k: float, r: float, c: float) -> float:
    """Closed-form horizon ``N`` for growth multiple ``k``.

    ``r`` and ``c`` are decimal return and fee rates. Both logarithms use base
    ``1 + r``::

        N = log(k) / (1 - log(1 + r - c))

    which equals ``ln k / ln((1 + r) / (1 + r - c))``: the number of years after
    which fee-free capital is ``k`` times the fee-adjusted capital.
    """

    if r <= -1:
        raise ConfigurationError(f"Return rate {r * 100:g}% leaves no capital to grow")
    if 1 + r - c <= 0:
        raise ConfigurationError(
            f"Fee rate {c * 100:g}% wipes out the {r * 100:g}% return entirely"
        )
    log_base = math.log(1 + r)
    if log_base == 0:
        raise ConfigurationError("A 0% return has no logarithm base to solve against")

    log_k = math.log(k) / log_base
    log_term = math.log(1 + r - c) / log_base
    denominator = 1 - log_term
    if denominator == 0:
        raise ConfigurationError(
            "Fees never change the growth factor, so there is no break-even year"
        )
    return log_k / denominator


def years_to_double(return_pct: float, fee_pct: float) -> float:
    """Years, to one decimal, for fees to halve capital relative to fee-free growth."""

    n = solve_years_to_multiple(2, return_pct / 100.0, fee_pct / 100.0)
    logger.debug("years_to_double(%s, %s) = %s", return_pct, fee_pct, n)
    return round(n, 1)


__all__ = [
    "FeeScenarioSet",
    "GrowthPoint",
    "GrowthSeries",
    "InvestmentConfig",
    "compounded_principal",
    "derive_fee_scenarios",
    "growth_overflows",
    "project_growth",
    "project_growth_np",
    "project_growth_py",
    "solve_years_to_multiple",
    "year_labels",
    "years_to_double",
]
