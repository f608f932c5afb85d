"""Input parsing helpers for the fee drag estimator."""
from __future__ import annotations

from .config import DEFAULT_LOCALE
from .errors import ConfigurationError
from .finance import InvestmentConfig
from .i18n import normalize_locale


def parse_number(text: str, field: str, locale: str = DEFAULT_LOCALE) -> float:
    """Parse a user-typed number written the way ``locale`` writes numbers.

    en-US reads ``1,000.5``; it-IT reads ``1.000,5``. A trailing ``%`` and
    ``_`` separators are accepted in both.
    """

    cleaned = str(text).strip().rstrip("%").strip().replace("_", "")
    if normalize_locale(locale) == "it-IT":
        cleaned = cleaned.replace(".", "").replace(",", ".")
    else:
        cleaned = cleaned.replace(",", "")
    if not cleaned:
        raise ConfigurationError(f"{field} is required")
    try:
        return float(cleaned)
    except ValueError:
        raise ConfigurationError(f"{field} must be a number, got '{text}'") from None


def parse_years(text: str, field: str = "Years", locale: str = DEFAULT_LOCALE) -> int:
    value = parse_number(text, field, locale)
    if not value.is_integer():
        raise ConfigurationError(f"{field} must be a whole number, got '{text}'")
    return int(value)


def parse_config(
    capital: str,
    return_pct: str,
    years: str,
    fee_pct: str,
    locale: str = DEFAULT_LOCALE,
) -> InvestmentConfig:
    """Build and validate a configuration from raw form/flag text."""

    config = InvestmentConfig(
        starting_capital=parse_number(capital, "Starting capital", locale),
        gross_return_pct=parse_number(return_pct, "Annual return", locale),
        horizon_years=parse_years(years, locale=locale),
        base_fee_pct=parse_number(fee_pct, "Annual fees", locale),
    )
    return config.validate()


__all__ = ["parse_config", "parse_number", "parse_years"]
