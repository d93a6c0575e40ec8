"""Tests for strategy dispatch."""

import pytest

from dealcalc.analysis.engine import DealCalculator, build_input, parse_strategy
from dealcalc.analysis.flip import calculate_flip
from dealcalc.config import DefaultsConfig
from dealcalc.errors import InvalidInput
from dealcalc.models import BRRRRResult, FlipInput, FlipResult, RentalResult, Strategy


class TestDealCalculator:
    def setup_method(self):
        self.calc = DealCalculator()
        self.defaults = DefaultsConfig()

    def test_dispatches_each_strategy(self):
        assert isinstance(self.calc.calculate("rental", self.defaults.rental), RentalResult)
        assert isinstance(self.calc.calculate("flip", self.defaults.flip), FlipResult)
        assert isinstance(self.calc.calculate(Strategy.BRRRR, self.defaults.brrrr), BRRRRResult)

    def test_accepts_mapping_payload(self):
        payload = self.defaults.flip.model_dump()
        assert self.calc.calculate("flip", payload) == calculate_flip(self.defaults.flip)

    def test_mapping_payload_is_not_mutated(self):
        payload = self.defaults.rental.model_dump()
        snapshot = dict(payload)
        self.calc.calculate("rental", payload)
        assert payload == snapshot

    def test_unknown_strategy(self):
        with pytest.raises(InvalidInput) as exc:
            self.calc.calculate("wholesale", {})
        assert exc.value.field == "strategy"

    def test_mismatched_model(self):
        with pytest.raises(InvalidInput) as exc:
            self.calc.calculate("rental", self.defaults.flip)
        assert exc.value.field == "strategy"

    def test_missing_field_named(self):
        payload = self.defaults.rental.model_dump()
        del payload["monthly_rent"]
        with pytest.raises(InvalidInput) as exc:
            self.calc.calculate("rental", payload)
        assert exc.value.field == "monthly_rent"

    def test_fractional_money_rejected(self):
        payload = self.defaults.flip.model_dump()
        payload["purchase_price"] = 250_000.5
        with pytest.raises(InvalidInput) as exc:
            self.calc.calculate("flip", payload)
        assert exc.value.field == "purchase_price"

    def test_range_errors_propagate(self):
        payload = self.defaults.brrrr.model_dump()
        payload["vacancy_rate"] = -5
        with pytest.raises(InvalidInput) as exc:
            self.calc.calculate("brrrr", payload)
        assert exc.value.field == "vacancy_rate"


def test_parse_strategy():
    assert parse_strategy("brrrr") == Strategy.BRRRR
    assert parse_strategy(Strategy.FLIP) == Strategy.FLIP


def test_build_input_passes_model_through():
    inp = DefaultsConfig().flip
    assert build_input("flip", inp) is inp
    assert isinstance(build_input("flip", inp.model_dump()), FlipInput)
