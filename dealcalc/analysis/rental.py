"""Cash flow analysis for the buy-and-hold rental strategy."""

from __future__ import annotations

from dealcalc.analysis.amortization import monthly_payment, round_currency
from dealcalc.analysis.expenses import monthly_expenses
from dealcalc.analysis.validation import require_fields
from dealcalc.models import RentalInput, RentalResult


class RentalAnalyzer:
    """Evaluate a rental's monthly cash flow and yield.

    Accounts for mortgage, taxes, insurance, HOA, maintenance, vacancy and
    management. Every monetary intermediate is rounded to a whole unit where
    it is first computed, and later steps build on the rounded figures.
    """

    def calculate(self, inp: RentalInput) -> RentalResult:
        self._validate(inp)

        # Financing
        down_payment = round_currency(inp.purchase_price * (inp.down_payment_percent / 100))
        loan_amount = inp.purchase_price - down_payment
        total_cash_needed = down_payment + inp.closing_costs
        mortgage = monthly_payment(loan_amount, inp.interest_rate, inp.loan_term_years)

        # Cash flow
        expenses = monthly_expenses(inp, mortgage)
        monthly_cash_flow = inp.monthly_rent - expenses.total
        annual_cash_flow = monthly_cash_flow * 12

        cash_on_cash = (annual_cash_flow / total_cash_needed) * 100 if total_cash_needed > 0 else 0.0

        # NOI excludes debt service
        annual_noi = inp.monthly_rent * 12 - expenses.operating_total * 12
        cap_rate = (annual_noi / inp.purchase_price) * 100

        return RentalResult(
            purchase_price=inp.purchase_price,
            down_payment=down_payment,
            loan_amount=loan_amount,
            total_cash_needed=total_cash_needed,
            monthly_mortgage_payment=mortgage,
            monthly_rent=inp.monthly_rent,
            monthly_expenses=expenses.total,
            monthly_cash_flow=monthly_cash_flow,
            annual_cash_flow=annual_cash_flow,
            annual_noi=annual_noi,
            annual_roi=cash_on_cash,
            cash_on_cash_return=cash_on_cash,
            cap_rate=cap_rate,
            expenses=expenses,
        )

    def _validate(self, inp: RentalInput) -> None:
        require_fields(
            inp,
            positive=("purchase_price", "loan_term_years"),
            non_negative=(
                "closing_costs",
                "monthly_rent",
                "monthly_insurance",
                "monthly_property_tax",
                "monthly_hoa",
                "monthly_maintenance",
            ),
            percent=(
                "down_payment_percent",
                "interest_rate",
                "vacancy_rate",
                "property_management_percent",
            ),
        )


def calculate_rental(inp: RentalInput) -> RentalResult:
    """Calculate rental cash flow, cash-on-cash return and cap rate."""
    return RentalAnalyzer().calculate(inp)
