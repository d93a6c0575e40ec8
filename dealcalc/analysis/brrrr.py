"""BRRRR (Buy, Rehab, Rent, Refinance, Repeat) deal analysis."""

from __future__ import annotations

from dealcalc.analysis.amortization import monthly_payment, round_currency
from dealcalc.analysis.expenses import monthly_expenses
from dealcalc.analysis.validation import require_fields, require_positive
from dealcalc.models import BRRRRInput, BRRRRResult, CashOnCashReturn


class BRRRRAnalyzer:
    """Evaluate a BRRRR deal across its two financing events.

    The property is bought with an acquisition loan and rehabbed, then a
    cash-out refinance sized off the after-repair value pays that loan off.
    The new loan carries the rental from then on, and whatever cash the
    refinance did not return stays tied up in the deal.
    """

    def calculate(self, inp: BRRRRInput) -> BRRRRResult:
        self._validate(inp)

        # Acquisition
        down_payment = round_currency(inp.purchase_price * (inp.down_payment_percent / 100))
        total_initial_investment = down_payment + inp.closing_costs + inp.renovation_cost

        # Refinance pays off the acquisition loan before any principal paydown
        refinance_amount = round_currency(inp.after_repair_value * (inp.refinance_ltv_percent / 100))
        original_loan_balance = inp.purchase_price - down_payment
        cash_out_refinance = refinance_amount - original_loan_balance
        cash_left_in_deal = max(0, total_initial_investment - cash_out_refinance)

        # Rental on the new loan
        mortgage = monthly_payment(
            refinance_amount, inp.refinance_rate, inp.effective_refinance_term_years
        )
        expenses = monthly_expenses(inp, mortgage)
        monthly_cash_flow = inp.monthly_rent - expenses.total
        annual_cash_flow = monthly_cash_flow * 12

        infinite_return = cash_left_in_deal <= 0
        if infinite_return:
            cash_on_cash = CashOnCashReturn.infinite()
        else:
            cash_on_cash = CashOnCashReturn.finite((annual_cash_flow / cash_left_in_deal) * 100)

        total_equity = inp.after_repair_value - refinance_amount

        return BRRRRResult(
            purchase_price=inp.purchase_price,
            down_payment=down_payment,
            renovation_cost=inp.renovation_cost,
            total_initial_investment=total_initial_investment,
            after_repair_value=inp.after_repair_value,
            refinance_amount=refinance_amount,
            original_loan_balance=original_loan_balance,
            cash_out_refinance=cash_out_refinance,
            cash_left_in_deal=cash_left_in_deal,
            monthly_mortgage_payment=mortgage,
            monthly_rent=inp.monthly_rent,
            monthly_expenses=expenses.total,
            monthly_cash_flow=monthly_cash_flow,
            annual_cash_flow=annual_cash_flow,
            infinite_return=infinite_return,
            cash_on_cash_return=cash_on_cash,
            total_equity=total_equity,
            expenses=expenses,
        )

    def _validate(self, inp: BRRRRInput) -> None:
        require_fields(
            inp,
            positive=("purchase_price", "loan_term_years"),
            non_negative=(
                "closing_costs",
                "renovation_cost",
                "after_repair_value",
                "monthly_rent",
                "monthly_insurance",
                "monthly_property_tax",
                "monthly_hoa",
                "monthly_maintenance",
            ),
            percent=(
                "down_payment_percent",
                "interest_rate",
                "refinance_ltv_percent",
                "refinance_rate",
                "vacancy_rate",
                "property_management_percent",
            ),
        )
        if inp.refinance_loan_term_years is not None:
            require_positive("refinance_loan_term_years", inp.refinance_loan_term_years)


def calculate_brrrr(inp: BRRRRInput) -> BRRRRResult:
    """Calculate refinance proceeds, post-refinance cash flow and returns."""
    return BRRRRAnalyzer().calculate(inp)
