"""Currency symbols, number formatting and message templates per locale."""
from __future__ import annotations

from typing import Dict

from .config import DEFAULT_LOCALE, SUPPORTED_LOCALES

_CURRENCY = {"en-US": "$", "it-IT": "€"}

_MESSAGES: Dict[str, Dict[str, str]] = {
    "en-US": {
        "TITLE": "How fees eat your returns",
        "CAPITAL": "Starting capital",
        "ANNUAL_RETURN": "Annual return (%)",
        "YEARS": "Years",
        "ANNUAL_FEES": "Annual fees (%)",
        "LOWER_FEES": "Lower fees (%)",
        "HIGHER_FEES": "Higher fees (%)",
        "CALCULATE": "Calculate",
        "LANGUAGE": "Italiano",
        "YEAR_AXIS": "Year",
        "CAPITAL_AXIS": "Capital ({currency})",
        "CAPITAL_WITH_HIGHER_FEES": "Capital with higher fees",
        "CAPITAL_WITH_BASE_FEES": "Capital with {base_fee_rate}% fees",
        "CAPITAL_WITH_LOWER_FEES": "Capital with lower fees",
        "CAPITAL_FEES_TOOLTIP": (
            "After {years} years you have paid in fees:\n"
            "{lower_fee_rate}% fees: {currency}{lower_principal}\n"
            "{base_fee_rate}% fees: {currency}{base_principal}\n"
            "{higher_fee_rate}% fees: {currency}{higher_principal}"
        ),
        "YEARS_TO_DOUBLE": (
            "In {years} years the fees will have cost you half of what your "
            "capital would be worth without them."
        ),
        "YEARS_TO_DOUBLE_UNDEFINED": "The break-even horizon is undefined for these rates.",
        "SCENARIOS": "Fee scenarios: lower {lower}% | base {base}% | higher {higher}%",
    },
    "it-IT": {
        "TITLE": "Come le commissioni mangiano i tuoi rendimenti",
        "CAPITAL": "Capitale iniziale",
        "ANNUAL_RETURN": "Rendimento annuo (%)",
        "YEARS": "Anni",
        "ANNUAL_FEES": "Spese annue (%)",
        "LOWER_FEES": "Spese inferiori (%)",
        "HIGHER_FEES": "Spese superiori (%)",
        "CALCULATE": "Calcola",
        "LANGUAGE": "English",
        "YEAR_AXIS": "Anno",
        "CAPITAL_AXIS": "Capitale ({currency})",
        "CAPITAL_WITH_HIGHER_FEES": "Capitale con spese superiori",
        "CAPITAL_WITH_BASE_FEES": "Capitale con spese al {base_fee_rate}%",
        "CAPITAL_WITH_LOWER_FEES": "Capitale con spese inferiori",
        "CAPITAL_FEES_TOOLTIP": (
            "Dopo {years} anni hai pagato in spese:\n"
            "spese al {lower_fee_rate}%: {currency}{lower_principal}\n"
            "spese al {base_fee_rate}%: {currency}{base_principal}\n"
            "spese al {higher_fee_rate}%: {currency}{higher_principal}"
        ),
        "YEARS_TO_DOUBLE": (
            "In {years} anni le spese ti saranno costate metà di quanto varrebbe "
            "il tuo capitale senza di esse."
        ),
        "YEARS_TO_DOUBLE_UNDEFINED": "Con questi tassi l'orizzonte di pareggio non è definito.",
        "SCENARIOS": "Scenari di spesa: inferiore {lower}% | base {base}% | superiore {higher}%",
    },
}

_ALIASES = {"en": "en-US", "us": "en-US", "it": "it-IT"}


def normalize_locale(tag: str) -> str:
    """Map ``en``/``it``/``us`` style tags onto the supported locale tags."""

    if tag in SUPPORTED_LOCALES:
        return tag
    alias = _ALIASES.get(tag.strip().lower())
    if alias is None:
        raise ValueError(
            f"Unsupported locale '{tag}' (expected one of {', '.join(SUPPORTED_LOCALES)})"
        )
    return alias


def currency_symbol(locale: str) -> str:
    return _CURRENCY[normalize_locale(locale)]


def format_rate(value: float, locale: str = DEFAULT_LOCALE) -> str:
    """Shortest form of a percentage rate (``2.5``, ``3``) with the locale's decimal mark."""

    text = f"{value:g}"
    if normalize_locale(locale) == "it-IT":
        text = text.replace(".", ",")
    return text


def format_decimal(value: float, locale: str = DEFAULT_LOCALE, digits: int = 2) -> str:
    """Group thousands and fix the fraction digits the way ``locale`` writes numbers."""

    text = f"{value:,.{digits}f}"
    if normalize_locale(locale) == "it-IT":
        text = text.replace(",", "\0").replace(".", ",").replace("\0", ".")
    return text


class MessageCatalog:
    """String-template lookup with ``{name}`` placeholders."""

    def __init__(self, locale: str = DEFAULT_LOCALE) -> None:
        self.locale = normalize_locale(locale)

    def use(self, locale: str) -> None:
        self.locale = normalize_locale(locale)

    @property
    def currency(self) -> str:
        return currency_symbol(self.locale)

    def instant(self, key: str, **params: object) -> str:
        template = _MESSAGES[self.locale].get(key)
        if template is None:
            template = _MESSAGES[DEFAULT_LOCALE].get(key, key)
        return template.format(**params) if params else template


__all__ = [
    "MessageCatalog",
    "currency_symbol",
    "format_decimal",
    "format_rate",
    "normalize_locale",
]
