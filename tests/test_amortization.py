"""Tests for loan amortization."""

import pytest

from dealcalc.analysis.amortization import (
    amortization_schedule,
    exact_monthly_payment,
    monthly_payment,
    payment_for,
    round_currency,
)
from dealcalc.errors import InvalidInput
from dealcalc.models import LoanTerms

LOANS = [
    (200_000, 6.5, 30),
    (225_000, 6.5, 30),
    (150_000, 3.25, 15),
    (80_000, 12.0, 10),
    (1_000, 0.5, 1),
    (950_000, 7.875, 40),
]


def test_known_payments():
    assert monthly_payment(200_000, 6.5, 30) == 1264
    assert monthly_payment(225_000, 6.5, 30) == 1422


def test_zero_rate_is_exact_division():
    assert monthly_payment(120_000, 0, 10) == 1_000
    assert monthly_payment(100_000, 0, 30) == 100_000 / 360
    assert monthly_payment(0, 0, 5) == 0


def test_zero_principal():
    assert monthly_payment(0, 7.0, 30) == 0


@pytest.mark.parametrize("principal,rate,years", LOANS)
def test_payment_is_rounded_to_whole_unit(principal, rate, years):
    payment = monthly_payment(principal, rate, years)
    assert payment == int(payment)
    assert abs(payment - exact_monthly_payment(principal, rate, years)) <= 0.5


@pytest.mark.parametrize("principal,rate,years", LOANS)
def test_exact_payment_retires_loan(principal, rate, years):
    terms = LoanTerms(principal=principal, annual_rate_percent=rate, term_years=years)
    rows = list(amortization_schedule(terms, exact_monthly_payment(principal, rate, years)))
    assert len(rows) == years * 12
    assert abs(rows[-1].balance) <= 1


def test_schedule_defaults_to_rounded_payment():
    terms = LoanTerms(principal=200_000, annual_rate_percent=6.5, term_years=30)
    first = next(amortization_schedule(terms))
    assert first.month == 1
    assert first.interest == pytest.approx(200_000 * 0.065 / 12)
    assert first.interest + first.principal == pytest.approx(payment_for(terms))


def test_zero_rate_schedule_has_no_interest():
    terms = LoanTerms(principal=36_000, annual_rate_percent=0, term_years=3)
    rows = list(amortization_schedule(terms))
    assert all(r.interest == 0 for r in rows)
    assert rows[-1].balance == pytest.approx(0)


def test_round_currency_halves_away_from_zero():
    assert round_currency(2.5) == 3
    assert round_currency(3.5) == 4
    assert round_currency(-2.5) == -3
    assert round_currency(1264.14) == 1264
    assert round_currency(-0.4) == 0


def test_negative_principal_rejected():
    with pytest.raises(InvalidInput) as exc:
        monthly_payment(-1, 5, 30)
    assert exc.value.field == "principal"


def test_negative_rate_rejected():
    with pytest.raises(InvalidInput) as exc:
        monthly_payment(100_000, -0.5, 30)
    assert exc.value.field == "annual_rate_percent"


def test_non_positive_term_rejected():
    with pytest.raises(InvalidInput) as exc:
        monthly_payment(100_000, 5, 0)
    assert exc.value.field == "term_years"


def test_invalid_input_is_value_error():
    with pytest.raises(ValueError):
        monthly_payment(100_000, 5, -1)


@pytest.mark.parametrize("rate", [1e-14, 1e-300, 5e-324])
def test_near_zero_rate_matches_even_split(rate):
    assert exact_monthly_payment(200_000, rate, 30) == pytest.approx(200_000 / 360)
    assert monthly_payment(200_000, rate, 30) == 556


def test_small_rate_keeps_interest():
    assert exact_monthly_payment(200_000, 1e-6, 30) > 200_000 / 360


def test_schedule_rejects_invalid_terms_with_explicit_payment():
    terms = LoanTerms(principal=100_000, annual_rate_percent=5, term_years=-1)
    with pytest.raises(InvalidInput) as exc:
        amortization_schedule(terms, payment=500)
    assert exc.value.field == "term_years"


def test_schedule_rejects_negative_principal():
    terms = LoanTerms(principal=-100, annual_rate_percent=5, term_years=10)
    with pytest.raises(InvalidInput) as exc:
        list(amortization_schedule(terms, payment=1))
    assert exc.value.field == "principal"
