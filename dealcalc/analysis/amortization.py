"""Fixed-rate loan amortization."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterator, NamedTuple

from dealcalc.analysis.validation import require_non_negative, require_positive
from dealcalc.models import LoanTerms


class ScheduleRow(NamedTuple):
    month: int
    interest: float
    principal: float
    balance: float


def round_currency(value: float) -> int:
    """Round to the nearest whole currency unit, halves away from zero."""
    return int(Decimal(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def exact_monthly_payment(principal: float, annual_rate_percent: float, term_years: int) -> float:
    """Unrounded payment that retires ``principal`` in ``term_years * 12`` months."""
    _validate_terms(principal, annual_rate_percent, term_years)

    num_payments = term_years * 12
    monthly_rate = annual_rate_percent / 100 / 12
    # (1 + r)^n - 1 without cancellation, so tiny rates stay positive
    growth_minus_one = math.expm1(num_payments * math.log1p(monthly_rate))
    if growth_minus_one == 0:
        return principal / num_payments
    return principal * monthly_rate * (1 + growth_minus_one) / growth_minus_one


def monthly_payment(principal: float, annual_rate_percent: float, term_years: int) -> float:
    """Monthly payment for a fixed-rate loan.

    Interest-free loans split the principal evenly across the term without
    rounding. Otherwise the standard amortization payment is rounded to a
    whole currency unit, and callers build on that rounded figure.
    """
    payment = exact_monthly_payment(principal, annual_rate_percent, term_years)
    if annual_rate_percent == 0:
        return payment
    return float(round_currency(payment))


def payment_for(terms: LoanTerms) -> float:
    return monthly_payment(terms.principal, terms.annual_rate_percent, terms.term_years)


def amortization_schedule(terms: LoanTerms, payment: float | None = None) -> Iterator[ScheduleRow]:
    """Apply ``payment`` monthly against the loan balance, one row per month.

    Defaults to the rounded payment from :func:`payment_for`. The schedule
    always runs the full term, so a payment that does not exactly retire the
    loan leaves a non-zero (possibly negative) final balance. Invalid terms
    raise immediately, before any row is produced.
    """
    _validate_terms(terms.principal, terms.annual_rate_percent, terms.term_years)
    if payment is None:
        payment = payment_for(terms)
    return _schedule_rows(terms, payment)


def _schedule_rows(terms: LoanTerms, payment: float) -> Iterator[ScheduleRow]:
    monthly_rate = terms.annual_rate_percent / 100 / 12
    balance = float(terms.principal)

    for month in range(1, terms.term_years * 12 + 1):
        interest = balance * monthly_rate
        principal_paid = payment - interest
        balance -= principal_paid
        yield ScheduleRow(month, interest, principal_paid, balance)


def _validate_terms(principal: float, annual_rate_percent: float, term_years: int) -> None:
    require_non_negative("principal", principal)
    require_non_negative("annual_rate_percent", annual_rate_percent)
    require_positive("term_years", term_years)
