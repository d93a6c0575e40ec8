"""Flattening calculations into storage records.

Storage keeps percentages as integer basis points (percent x 100). The
conversion lives here so the analyzers only ever see plain percentages.
"""

from __future__ import annotations

from typing import Optional

from dealcalc.analysis.amortization import round_currency
from dealcalc.analysis.engine import AnyInput, AnyResult
from dealcalc.errors import InvalidInput
from dealcalc.models import (
    BRRRRInput,
    BRRRRResult,
    FlipInput,
    FlipResult,
    RentalInput,
    RentalResult,
    ScenarioRecord,
    Strategy,
)


def to_basis_points(percent: Optional[float]) -> Optional[int]:
    if percent is None:
        return None
    return round_currency(percent * 100)


def from_basis_points(bps: Optional[int]) -> Optional[float]:
    if bps is None:
        return None
    return bps / 100


def build_scenario_record(name: str, inp: AnyInput, result: AnyResult) -> ScenarioRecord:
    """Combine a calculation's input and result into one storable record."""
    if not name or not name.strip():
        raise InvalidInput("scenario_name", "must not be empty")

    if isinstance(inp, RentalInput) and isinstance(result, RentalResult):
        return _rental_record(name, inp, result)
    if isinstance(inp, FlipInput) and isinstance(result, FlipResult):
        return _flip_record(name, inp, result)
    if isinstance(inp, BRRRRInput) and isinstance(result, BRRRRResult):
        return _brrrr_record(name, inp, result)
    raise InvalidInput(
        "strategy", f"{type(inp).__name__} does not match {type(result).__name__}"
    )


def _operating_fields(inp: RentalInput | BRRRRInput) -> dict:
    return {
        "monthly_rent": inp.monthly_rent,
        "vacancy_rate": to_basis_points(inp.vacancy_rate),
        "property_management_percent": to_basis_points(inp.property_management_percent),
        "monthly_insurance": inp.monthly_insurance,
        "monthly_property_tax": inp.monthly_property_tax,
        "monthly_hoa": inp.monthly_hoa,
        "monthly_maintenance": inp.monthly_maintenance,
    }


def _rental_record(name: str, inp: RentalInput, r: RentalResult) -> ScenarioRecord:
    return ScenarioRecord(
        scenario_name=name,
        strategy_type=Strategy.RENTAL,
        purchase_price=inp.purchase_price,
        down_payment_percent=to_basis_points(inp.down_payment_percent),
        down_payment_amount=r.down_payment,
        loan_amount=r.loan_amount,
        interest_rate=to_basis_points(inp.interest_rate),
        loan_term_years=inp.loan_term_years,
        closing_costs=inp.closing_costs,
        **_operating_fields(inp),
        monthly_mortgage_payment=r.monthly_mortgage_payment,
        monthly_cash_flow=r.monthly_cash_flow,
        annual_cash_flow=r.annual_cash_flow,
        cash_on_cash_return=to_basis_points(r.cash_on_cash_return),
        cap_rate=to_basis_points(r.cap_rate),
    )


def _flip_record(name: str, inp: FlipInput, r: FlipResult) -> ScenarioRecord:
    return ScenarioRecord(
        scenario_name=name,
        strategy_type=Strategy.FLIP,
        purchase_price=inp.purchase_price,
        down_payment_percent=to_basis_points(inp.down_payment_percent),
        down_payment_amount=r.down_payment,
        loan_amount=r.loan_amount,
        interest_rate=to_basis_points(inp.interest_rate),
        closing_costs=inp.closing_costs,
        renovation_cost=inp.renovation_cost,
        holding_months=inp.holding_months,
        selling_costs_percent=to_basis_points(inp.selling_costs_percent),
        after_repair_value=inp.after_repair_value,
        total_profit=r.net_profit,
        roi=to_basis_points(r.roi),
    )


def _brrrr_record(name: str, inp: BRRRRInput, r: BRRRRResult) -> ScenarioRecord:
    return ScenarioRecord(
        scenario_name=name,
        strategy_type=Strategy.BRRRR,
        purchase_price=inp.purchase_price,
        down_payment_percent=to_basis_points(inp.down_payment_percent),
        down_payment_amount=r.down_payment,
        loan_amount=r.original_loan_balance,
        interest_rate=to_basis_points(inp.interest_rate),
        loan_term_years=inp.loan_term_years,
        closing_costs=inp.closing_costs,
        **_operating_fields(inp),
        renovation_cost=inp.renovation_cost,
        after_repair_value=inp.after_repair_value,
        refinance_ltv=to_basis_points(inp.refinance_ltv_percent),
        refinance_rate=to_basis_points(inp.refinance_rate),
        refinance_loan_term_years=inp.effective_refinance_term_years,
        monthly_mortgage_payment=r.monthly_mortgage_payment,
        monthly_cash_flow=r.monthly_cash_flow,
        annual_cash_flow=r.annual_cash_flow,
        cash_on_cash_return=to_basis_points(r.cash_on_cash_return.percent),
        infinite_return=r.infinite_return,
    )
