import dataclasses

import pytest

from feedrag.computation import (
    TABLE_HEADER,
    break_even_or_none,
    calculate_fees_on_capital,
    resolve_use_numpy,
    table_rows,
)
from feedrag.errors import ConfigurationError
from feedrag.finance import InvestmentConfig, compounded_principal


def test_end_to_end_default_projection(default_config):
    result = calculate_fees_on_capital(default_config, current_year=2024, use_numpy=False)
    assert result.scenarios.lower_pct == 2
    assert result.scenarios.higher_pct == 4
    assert len(result) == 30
    assert result.value("baseFee", 0) == 100000
    assert result.value("baseFee", 29) == 311865
    assert result.labels[0] == "2024"
    assert result.labels[-1] == "2053"


@pytest.mark.parametrize("use_numpy", [True, False])
@pytest.mark.parametrize(
    "capital, gross, fee",
    [(100000, 7, 3), (5000, 4, 0.5), (250000, 10, 2.25), (1000, 1.5, 0)],
)
def test_higher_fees_never_outperform_lower_fees(capital, gross, fee, use_numpy):
    config = InvestmentConfig(capital, gross, 25, fee)
    result = calculate_fees_on_capital(config, current_year=2024, use_numpy=use_numpy)
    for i in range(1, len(result)):
        assert (
            result.value("higherFee", i)
            <= result.value("baseFee", i)
            <= result.value("lowerFee", i)
        )


def test_fee_costs_start_at_zero(default_config):
    result = calculate_fees_on_capital(default_config, current_year=2024)
    assert result.fee_costs(0) == {"higherFee": 0, "baseFee": 0, "lowerFee": 0}


def test_fee_costs_against_fee_free_reference(default_config):
    result = calculate_fees_on_capital(default_config, current_year=2024, use_numpy=False)
    reference = compounded_principal(100000, 29, 7)
    costs = result.fee_costs(29)
    assert costs["baseFee"] == reference - 311865
    assert costs["higherFee"] > costs["baseFee"] > costs["lowerFee"] > 0


def test_invalid_config_surfaces_error():
    with pytest.raises(ConfigurationError):
        calculate_fees_on_capital(InvestmentConfig(100000, 7, 0, 3))


def test_result_is_replaced_not_mutated(default_config):
    result = calculate_fees_on_capital(default_config, current_year=2024)
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.series = {}
    assert isinstance(result.series["baseFee"], tuple)


def test_loose_policy_uses_unclamped_higher_fee():
    config = InvestmentConfig(1000, 4, 10, 3.5)
    assert calculate_fees_on_capital(config).scenarios.higher_pct == 3.0
    assert calculate_fees_on_capital(config, strict=False).scenarios.higher_pct == 4.5


def test_table_rows(default_config):
    rows = table_rows(calculate_fees_on_capital(default_config, current_year=2024))
    assert len(rows) == 30
    assert len(rows[0]) == len(TABLE_HEADER)
    assert rows[0] == [2024, 100000, 100000, 100000, 0, 0, 0]
    assert rows[29][2] == 311865


def test_break_even_or_none(default_config):
    assert break_even_or_none(default_config) == 24.4
    assert break_even_or_none(InvestmentConfig(1000, 7, 10, 0)) is None


def test_resolve_use_numpy():
    assert resolve_use_numpy("auto") is True
    assert resolve_use_numpy("NumPy") is True
    assert resolve_use_numpy("python") is False
    with pytest.raises(ValueError):
        resolve_use_numpy("fortran")


@pytest.mark.parametrize("use_numpy", [True, False])
def test_overflowing_horizon_is_a_configuration_error(use_numpy):
    with pytest.raises(ConfigurationError, match="representable"):
        calculate_fees_on_capital(
            InvestmentConfig(100000, 7, 12000, 3), current_year=2024, use_numpy=use_numpy
        )


def test_negative_higher_fee_that_overflows_is_rejected():
    # Below 1% gross the capped higher fee turns negative and outgrows the base.
    config = InvestmentConfig(1e300, 0.5, 2000, 3)
    config.validate()
    with pytest.raises(ConfigurationError, match="higherFee"):
        calculate_fees_on_capital(config, current_year=2024)
