"""Data models for DealCalc."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, model_validator


class Strategy(str, Enum):
    RENTAL = "rental"
    FLIP = "flip"
    BRRRR = "brrrr"


class ReturnKind(str, Enum):
    FINITE = "finite"
    INFINITE = "infinite"


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True)


class LoanTerms(_Record):
    """A fixed-rate, fully amortizing loan."""

    principal: float
    annual_rate_percent: float
    term_years: int


class RentalInput(_Record):
    """Assumptions for a buy-and-hold rental."""

    purchase_price: int
    down_payment_percent: float
    interest_rate: float  # percentage, e.g. 6.5
    loan_term_years: int
    closing_costs: int = 0

    monthly_rent: int
    vacancy_rate: float = 0.0  # percentage, e.g. 5
    property_management_percent: float = 0.0  # percentage, e.g. 10
    monthly_insurance: int = 0
    monthly_property_tax: int = 0
    monthly_hoa: int = 0
    monthly_maintenance: int = 0


class FlipInput(_Record):
    """Assumptions for a buy, renovate and sell project."""

    purchase_price: int
    down_payment_percent: float
    interest_rate: float
    closing_costs: int = 0

    renovation_cost: int = 0
    holding_months: int = 0
    after_repair_value: int
    selling_costs_percent: float = 0.0  # percentage, e.g. 6


class BRRRRInput(_Record):
    """Assumptions for buy, rehab, rent, refinance, repeat."""

    purchase_price: int
    down_payment_percent: float
    interest_rate: float  # acquisition loan
    loan_term_years: int  # acquisition loan
    closing_costs: int = 0

    renovation_cost: int = 0
    after_repair_value: int
    refinance_ltv_percent: float  # percentage of ARV, e.g. 75
    refinance_rate: float
    refinance_loan_term_years: Optional[int] = None  # falls back to loan_term_years

    monthly_rent: int
    vacancy_rate: float = 0.0
    property_management_percent: float = 0.0
    monthly_insurance: int = 0
    monthly_property_tax: int = 0
    monthly_hoa: int = 0
    monthly_maintenance: int = 0

    @property
    def effective_refinance_term_years(self) -> int:
        if self.refinance_loan_term_years is None:
            return self.loan_term_years
        return self.refinance_loan_term_years


class ExpenseBreakdown(_Record):
    """Itemized monthly expenses of an operating rental."""

    mortgage: float
    insurance: int
    property_tax: int
    hoa: int
    maintenance: int
    vacancy: int
    property_management: int
    total: float

    @property
    def operating_total(self) -> int:
        """Monthly expenses excluding debt service."""
        return (
            self.insurance
            + self.property_tax
            + self.hoa
            + self.maintenance
            + self.vacancy
            + self.property_management
        )


class CashOnCashReturn(_Record):
    """Cash-on-cash return that may be undefined when no cash is left in a deal.

    A finite return carries its percentage. An infinite return means every
    dollar invested came back out, so there is no percentage to report.
    """

    kind: ReturnKind
    percent: Optional[float] = None

    @model_validator(mode="after")
    def _check_percent(self) -> CashOnCashReturn:
        if self.kind == ReturnKind.FINITE and self.percent is None:
            raise ValueError("a finite return needs a percent")
        if self.kind == ReturnKind.INFINITE and self.percent is not None:
            raise ValueError("an infinite return has no percent")
        return self

    @classmethod
    def finite(cls, percent: float) -> CashOnCashReturn:
        return cls(kind=ReturnKind.FINITE, percent=percent)

    @classmethod
    def infinite(cls) -> CashOnCashReturn:
        return cls(kind=ReturnKind.INFINITE)

    @property
    def is_infinite(self) -> bool:
        return self.kind == ReturnKind.INFINITE


class RentalResult(_Record):
    """Metrics for a buy-and-hold rental."""

    purchase_price: int
    down_payment: int
    loan_amount: int
    total_cash_needed: int

    monthly_mortgage_payment: float
    monthly_rent: int
    monthly_expenses: float
    monthly_cash_flow: float

    annual_cash_flow: float
    annual_noi: int
    annual_roi: float  # percentage
    cash_on_cash_return: float  # percentage
    cap_rate: float  # percentage

    expenses: ExpenseBreakdown


class FlipResult(_Record):
    """Metrics for a fix-and-flip project."""

    purchase_price: int
    down_payment: int
    loan_amount: int
    renovation_cost: int
    total_investment: int

    holding_costs: int
    interest_costs: int
    selling_costs: int
    total_costs: int

    after_repair_value: int
    gross_profit: int
    net_profit: int
    roi: float  # percentage


class BRRRRResult(_Record):
    """Metrics for a BRRRR deal after the cash-out refinance."""

    purchase_price: int
    down_payment: int
    renovation_cost: int
    total_initial_investment: int

    after_repair_value: int
    refinance_amount: int
    original_loan_balance: int
    cash_out_refinance: int
    cash_left_in_deal: int

    monthly_mortgage_payment: float
    monthly_rent: int
    monthly_expenses: float
    monthly_cash_flow: float
    annual_cash_flow: float

    infinite_return: bool
    cash_on_cash_return: CashOnCashReturn
    total_equity: int

    expenses: ExpenseBreakdown


class ScenarioRecord(BaseModel):
    """A calculation flattened for storage, with percentages in basis points."""

    scenario_name: str
    strategy_type: Strategy
    purchase_price: int
    down_payment_percent: int  # basis points
    down_payment_amount: int
    loan_amount: Optional[int] = None
    interest_rate: int  # basis points
    loan_term_years: Optional[int] = None
    closing_costs: int = 0

    monthly_rent: Optional[int] = None
    vacancy_rate: Optional[int] = None  # basis points
    property_management_percent: Optional[int] = None  # basis points
    monthly_insurance: Optional[int] = None
    monthly_property_tax: Optional[int] = None
    monthly_hoa: Optional[int] = None
    monthly_maintenance: Optional[int] = None

    renovation_cost: Optional[int] = None
    holding_months: Optional[int] = None
    selling_costs_percent: Optional[int] = None  # basis points
    after_repair_value: Optional[int] = None
    refinance_ltv: Optional[int] = None  # basis points
    refinance_rate: Optional[int] = None  # basis points
    refinance_loan_term_years: Optional[int] = None

    monthly_mortgage_payment: Optional[float] = None
    monthly_cash_flow: Optional[float] = None
    annual_cash_flow: Optional[float] = None
    cash_on_cash_return: Optional[int] = None  # basis points
    infinite_return: bool = False
    cap_rate: Optional[int] = None  # basis points
    total_profit: Optional[int] = None
    roi: Optional[int] = None  # basis points
