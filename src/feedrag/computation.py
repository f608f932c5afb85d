"""Computation helpers tying the fee scenarios to their growth series."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from .config import SERIES_ORDER
from .errors import ConfigurationError
from .finance import (
    FeeScenarioSet,
    GrowthSeries,
    InvestmentConfig,
    compounded_principal,
    derive_fee_scenarios,
    growth_overflows,
    project_growth,
    years_to_double,
)

logger = logging.getLogger(__name__)


def resolve_use_numpy(engine: str) -> bool:
    """Return True if the NumPy engine should be used for projections."""

    normalized = engine.lower()
    if normalized not in {"auto", "numpy", "python"}:
        raise ValueError(f"Unknown engine '{engine}' (expected auto/numpy/python)")
    return normalized != "python"


@dataclass(frozen=True)
class ProjectionResult:
    """Everything one recalculation produces; replaced as a whole, never patched."""

    config: InvestmentConfig
    scenarios: FeeScenarioSet
    series: Dict[str, GrowthSeries]

    @property
    def labels(self) -> List[str]:
        return [label for label, _ in self.series["baseFee"]]

    def __len__(self) -> int:
        return len(self.series["baseFee"])

    def value(self, name: str, index: int) -> int:
        return self.series[name][index][1]

    def fee_costs(self, index: int) -> Dict[str, int]:
        """Capital lost to fees at ``index`` for each scenario.

        The reference is the same starting capital compounded at the gross
        return with no fee at all.
        """

        labels = self.labels
        years = int(labels[index]) - int(labels[0])
        reference = compounded_principal(
            self.config.starting_capital, years, self.config.gross_return_pct
        )
        return {
            name: int(round(reference - self.value(name, index)))
            for name in SERIES_ORDER
        }


def calculate_fees_on_capital(
    config: InvestmentConfig,
    current_year: Optional[int] = None,
    use_numpy: bool = True,
    strict: bool = True,
) -> ProjectionResult:
    """Validate ``config`` and project the three fee scenarios."""

    config.validate()
    scenarios = derive_fee_scenarios(
        config.base_fee_pct, config.gross_return_pct, strict=strict
    )
    for name in SERIES_ORDER:
        net_pct = config.gross_return_pct - scenarios.rate_for(name)
        if growth_overflows(config.starting_capital, net_pct, config.horizon_years - 1):
            raise ConfigurationError(
                f"The {name} scenario grows past the largest representable amount"
            )
    series = {
        name: project_growth(
            config.starting_capital,
            config.gross_return_pct,
            scenarios.rate_for(name),
            config.horizon_years,
            current_year,
            use_numpy,
        )
        for name in SERIES_ORDER
    }
    logger.debug(
        "Projected %d years at %.2f%% gross (fees %.2f/%.2f/%.2f%%)",
        config.horizon_years,
        config.gross_return_pct,
        scenarios.lower_pct,
        scenarios.base_pct,
        scenarios.higher_pct,
    )
    return ProjectionResult(config=config, scenarios=scenarios, series=series)


def break_even_or_none(config: InvestmentConfig) -> Optional[float]:
    """Years-to-double for display; ``None`` when the metric is undefined."""

    try:
        return years_to_double(config.gross_return_pct, config.base_fee_pct)
    except ConfigurationError as exc:
        logger.info("Break-even metric unavailable: %s", exc)
        return None


def table_rows(result: ProjectionResult) -> List[List]:
    """Yearly rows: year, the three capitals, then the three fee costs."""

    rows: List[List] = []
    for idx, year in enumerate(result.labels):
        costs = result.fee_costs(idx)
        row: List = [int(year)]
        row.extend(result.value(name, idx) for name in SERIES_ORDER)
        row.extend(costs[name] for name in SERIES_ORDER)
        rows.append(row)
    return rows


TABLE_HEADER = [
    "Year",
    "Higher fee",
    "Base fee",
    "Lower fee",
    "Higher fee cost",
    "Base fee cost",
    "Lower fee cost",
]


__all__ = [
    "ProjectionResult",
    "TABLE_HEADER",
    "break_even_or_none",
    "calculate_fees_on_capital",
    "resolve_use_numpy",
    "table_rows",
]
