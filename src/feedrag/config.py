"""
Defaults & Presentation Constants
=================================
Central registry for the estimator's default inputs, layout thresholds and
per-series chart styling.

Exports:
    DEFAULT_INPUTS (dict): Starting values for the CLI flags and GUI form.
    COMPACT_BREAKPOINT_PX (int): Viewport width at or below which the
        tooltip is placed below the chart.
    HIDE_DELAY_MS (int): Debounce before the tooltip hides on pointer leave.
    SERIES_STYLES (dict): Colour, fill target and smoothing per series.
"""
import os
from typing import Dict, Optional, Tuple

DEFAULT_INPUTS: Dict[str, float] = {
    "capital": 100000.0,
    "return_pct": 7.0,
    "years": 30,
    "fee_pct": 3.0,
}

DEFAULT_LOCALE: str = "en-US"
SUPPORTED_LOCALES: Tuple[str, ...] = ("en-US", "it-IT")

COMPACT_BREAKPOINT_PX: int = 768
HIDE_DELAY_MS: int = 50

# One percentage point between the base scenario and its neighbours.
FEE_STEP_PCT: float = 1.0

# Drawing order matters: each series fills down to the one drawn before it.
# Lines are drawn straight between yearly points.
SERIES_ORDER: Tuple[str, ...] = ("higherFee", "baseFee", "lowerFee")

SERIES_STYLES: Dict[str, Dict[str, object]] = {
    "higherFee": {
        "color": "#e74c3c",
        "fill_alpha": 0.2,
        "fill_to": None,  # down to the axis origin
        "linewidth": 3,
        "message": "CAPITAL_WITH_HIGHER_FEES",
    },
    "baseFee": {
        "color": "#f1c40f",
        "fill_alpha": 0.2,
        "fill_to": "higherFee",
        "linewidth": 3,
        "message": "CAPITAL_WITH_BASE_FEES",
    },
    "lowerFee": {
        "color": "#27ae60",
        "fill_alpha": 0.2,
        "fill_to": "baseFee",
        "linewidth": 3,
        "message": "CAPITAL_WITH_LOWER_FEES",
    },
}

LOG_FILE_ENV: str = "FEEDRAG_LOG_FILE"


def log_file_from_env() -> Optional[str]:
    """Return the log file path configured through the environment, if any."""
    value = os.environ.get(LOG_FILE_ENV, "").strip()
    return value or None
