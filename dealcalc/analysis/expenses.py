"""Monthly operating-expense policy shared by the rental and BRRRR analyzers."""

from __future__ import annotations

from dealcalc.analysis.amortization import round_currency
from dealcalc.models import BRRRRInput, ExpenseBreakdown, RentalInput


def monthly_expenses(inp: RentalInput | BRRRRInput, mortgage: float) -> ExpenseBreakdown:
    """Itemize monthly costs for a rental carrying the given mortgage payment.

    Vacancy and management are percentages of gross rent, each rounded to a
    whole unit before they are summed.
    """
    vacancy = round_currency(inp.monthly_rent * (inp.vacancy_rate / 100))
    management = round_currency(inp.monthly_rent * (inp.property_management_percent / 100))

    total = (
        mortgage
        + inp.monthly_insurance
        + inp.monthly_property_tax
        + inp.monthly_hoa
        + inp.monthly_maintenance
        + vacancy
        + management
    )

    return ExpenseBreakdown(
        mortgage=mortgage,
        insurance=inp.monthly_insurance,
        property_tax=inp.monthly_property_tax,
        hoa=inp.monthly_hoa,
        maintenance=inp.monthly_maintenance,
        vacancy=vacancy,
        property_management=management,
        total=total,
    )
