"""Tests for basis-point scenario records."""

import pytest

from dealcalc.analysis.brrrr import calculate_brrrr
from dealcalc.analysis.flip import calculate_flip
from dealcalc.analysis.rental import calculate_rental
from dealcalc.config import DefaultsConfig
from dealcalc.errors import InvalidInput
from dealcalc.models import Strategy
from dealcalc.scenarios import build_scenario_record, from_basis_points, to_basis_points


def test_basis_point_conversion():
    assert to_basis_points(6.5) == 650
    assert to_basis_points(0.125) == 13
    assert to_basis_points(-0.125) == -13
    assert to_basis_points(None) is None
    assert from_basis_points(650) == 6.5
    assert from_basis_points(None) is None


class TestScenarioRecords:
    def setup_method(self):
        self.defaults = DefaultsConfig()

    def test_rental_record(self):
        inp = self.defaults.rental
        record = build_scenario_record("Base case", inp, calculate_rental(inp))
        assert record.strategy_type == Strategy.RENTAL
        assert record.down_payment_percent == 2_000
        assert record.interest_rate == 650
        assert record.vacancy_rate == 500
        assert record.down_payment_amount == 50_000
        assert record.monthly_mortgage_payment == 1_264
        assert record.cash_on_cash_return == -447
        assert record.cap_rate == 504

    def test_flip_record(self):
        inp = self.defaults.flip
        record = build_scenario_record("Quick flip", inp, calculate_flip(inp))
        assert record.strategy_type == Strategy.FLIP
        assert record.selling_costs_percent == 600
        assert record.total_profit == -1_500
        assert record.roi == -140
        assert record.loan_term_years is None

    def test_brrrr_finite_record(self):
        inp = self.defaults.brrrr
        record = build_scenario_record("Refi", inp, calculate_brrrr(inp))
        assert record.refinance_ltv == 7_500
        assert record.refinance_rate == 650
        assert record.refinance_loan_term_years == 30
        assert record.cash_on_cash_return == -869
        assert record.infinite_return is False

    def test_brrrr_infinite_record(self):
        inp = self.defaults.brrrr.model_copy(update={"after_repair_value": 400_000})
        record = build_scenario_record("Full recovery", inp, calculate_brrrr(inp))
        assert record.infinite_return is True
        assert record.cash_on_cash_return is None

    def test_mismatched_pair_rejected(self):
        with pytest.raises(InvalidInput):
            build_scenario_record("Bad", self.defaults.flip, calculate_rental(self.defaults.rental))

    def test_blank_name_rejected(self):
        inp = self.defaults.flip
        with pytest.raises(InvalidInput) as exc:
            build_scenario_record("  ", inp, calculate_flip(inp))
        assert exc.value.field == "scenario_name"
