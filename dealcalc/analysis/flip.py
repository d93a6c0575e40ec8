"""Fix-and-flip deal analysis."""

from __future__ import annotations

from dealcalc.analysis.amortization import round_currency
from dealcalc.analysis.validation import require_fields
from dealcalc.models import FlipInput, FlipResult

# Utilities, insurance and carrying costs while the property is held
MONTHLY_HOLDING_COST_PCT = 0.01


class FlipAnalyzer:
    """Evaluate buying, renovating, and reselling a property.

    Flip loans are short-term, so interest accrues simply on the original
    loan balance for the holding period rather than on an amortizing schedule.
    """

    def calculate(self, inp: FlipInput) -> FlipResult:
        self._validate(inp)

        down_payment = round_currency(inp.purchase_price * (inp.down_payment_percent / 100))
        loan_amount = inp.purchase_price - down_payment
        total_investment = down_payment + inp.closing_costs + inp.renovation_cost

        # Interest during the hold
        monthly_interest = (loan_amount * (inp.interest_rate / 100)) / 12
        interest_costs = round_currency(monthly_interest * inp.holding_months)

        monthly_holding_cost = round_currency(inp.purchase_price * MONTHLY_HOLDING_COST_PCT)
        holding_costs = monthly_holding_cost * inp.holding_months

        # Agent commissions, transfer taxes, etc.
        selling_costs = round_currency(inp.after_repair_value * (inp.selling_costs_percent / 100))

        total_costs = (
            inp.purchase_price
            + inp.closing_costs
            + inp.renovation_cost
            + interest_costs
            + holding_costs
            + selling_costs
        )

        gross_profit = inp.after_repair_value - inp.purchase_price - inp.renovation_cost
        net_profit = inp.after_repair_value - total_costs

        roi = (net_profit / total_investment) * 100 if total_investment > 0 else 0.0

        return FlipResult(
            purchase_price=inp.purchase_price,
            down_payment=down_payment,
            loan_amount=loan_amount,
            renovation_cost=inp.renovation_cost,
            total_investment=total_investment,
            holding_costs=holding_costs,
            interest_costs=interest_costs,
            selling_costs=selling_costs,
            total_costs=total_costs,
            after_repair_value=inp.after_repair_value,
            gross_profit=gross_profit,
            net_profit=net_profit,
            roi=roi,
        )

    def _validate(self, inp: FlipInput) -> None:
        require_fields(
            inp,
            positive=("purchase_price",),
            non_negative=(
                "closing_costs",
                "renovation_cost",
                "holding_months",
                "after_repair_value",
            ),
            percent=("down_payment_percent", "interest_rate", "selling_costs_percent"),
        )


def calculate_flip(inp: FlipInput) -> FlipResult:
    """Calculate flip costs, profit and return on invested cash."""
    return FlipAnalyzer().calculate(inp)
