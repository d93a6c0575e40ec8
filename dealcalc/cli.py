"""CLI interface for DealCalc."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from dealcalc.analysis.amortization import amortization_schedule, payment_for
from dealcalc.analysis.engine import DealCalculator, build_input
from dealcalc.config import AppConfig, load_config
from dealcalc.errors import InvalidInput
from dealcalc.models import BRRRRResult, FlipResult, LoanTerms, RentalResult, Strategy

app = typer.Typer(
    name="dealcalc",
    help="Investment return calculator for rental, flip and BRRRR deals.",
    no_args_is_help=True,
)
console = Console()
logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO", verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _load(config_path: Optional[Path], verbose: bool) -> AppConfig:
    cfg = load_config(config_path)
    setup_logging(cfg.logging.level, verbose)
    return cfg


def _run(cfg: AppConfig, strategy: Strategy, overrides: dict[str, Any]):
    """Merge CLI overrides onto the configured defaults and calculate."""
    defaults = getattr(cfg.defaults, strategy.value).model_dump()
    payload = {**defaults, **{k: v for k, v in overrides.items() if v is not None}}
    logger.debug("Calculating %s with %s", strategy.value, payload)
    try:
        inp = build_input(strategy, payload)
        return DealCalculator().calculate(strategy, inp)
    except InvalidInput as e:
        console.print(f"[bold red]Invalid input[/bold red] {e.field}: {e.message}")
        raise typer.Exit(code=2)


def _money(value: float) -> str:
    text = f"${abs(value):,.0f}"
    return f"-{text}" if value < 0 else text


def _pct(value: float) -> str:
    return f"{value:.2f}%"


def _expense_rows(table: Table, result: RentalResult | BRRRRResult) -> None:
    e = result.expenses
    table.add_row("  Mortgage", _money(e.mortgage))
    table.add_row("  Insurance", _money(e.insurance))
    table.add_row("  Property tax", _money(e.property_tax))
    table.add_row("  HOA", _money(e.hoa))
    table.add_row("  Maintenance", _money(e.maintenance))
    table.add_row("  Vacancy", _money(e.vacancy))
    table.add_row("  Management", _money(e.property_management))


def _flow_style(value: float) -> str:
    return "green" if value >= 0 else "red"


def _display_rental(r: RentalResult) -> None:
    table = Table(title="Rental Analysis", show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Purchase price", _money(r.purchase_price))
    table.add_row("Down payment", _money(r.down_payment))
    table.add_row("Loan amount", _money(r.loan_amount))
    table.add_row("Total cash needed", _money(r.total_cash_needed))
    table.add_row("Monthly rent", _money(r.monthly_rent))
    table.add_row("Monthly expenses", _money(r.monthly_expenses))
    _expense_rows(table, r)
    style = _flow_style(r.monthly_cash_flow)
    table.add_row("Monthly cash flow", f"[{style}]{_money(r.monthly_cash_flow)}[/{style}]")
    table.add_row("Annual cash flow", f"[{style}]{_money(r.annual_cash_flow)}[/{style}]")
    table.add_row("Annual NOI", _money(r.annual_noi))
    table.add_row("Cash-on-cash return", _pct(r.cash_on_cash_return))
    table.add_row("Cap rate", _pct(r.cap_rate))
    console.print(table)


def _display_flip(r: FlipResult) -> None:
    table = Table(title="Flip Analysis", show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Purchase price", _money(r.purchase_price))
    table.add_row("Down payment", _money(r.down_payment))
    table.add_row("Loan amount", _money(r.loan_amount))
    table.add_row("Renovation", _money(r.renovation_cost))
    table.add_row("Total investment", _money(r.total_investment))
    table.add_row("Interest", _money(r.interest_costs))
    table.add_row("Holding", _money(r.holding_costs))
    table.add_row("Selling", _money(r.selling_costs))
    table.add_row("Total costs", _money(r.total_costs))
    table.add_row("After repair value", _money(r.after_repair_value))
    table.add_row("Gross profit", _money(r.gross_profit))
    style = _flow_style(r.net_profit)
    table.add_row("Net profit", f"[{style}]{_money(r.net_profit)}[/{style}]")
    table.add_row("ROI", _pct(r.roi))
    console.print(table)


def _display_brrrr(r: BRRRRResult) -> None:
    table = Table(title="BRRRR Analysis", show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Purchase price", _money(r.purchase_price))
    table.add_row("Down payment", _money(r.down_payment))
    table.add_row("Renovation", _money(r.renovation_cost))
    table.add_row("Total initial investment", _money(r.total_initial_investment))
    table.add_row("After repair value", _money(r.after_repair_value))
    table.add_row("Refinance amount", _money(r.refinance_amount))
    table.add_row("Cash out at refinance", _money(r.cash_out_refinance))
    table.add_row("Cash left in deal", _money(r.cash_left_in_deal))
    table.add_row("Monthly rent", _money(r.monthly_rent))
    table.add_row("Monthly expenses", _money(r.monthly_expenses))
    _expense_rows(table, r)
    style = _flow_style(r.monthly_cash_flow)
    table.add_row("Monthly cash flow", f"[{style}]{_money(r.monthly_cash_flow)}[/{style}]")
    table.add_row("Annual cash flow", f"[{style}]{_money(r.annual_cash_flow)}[/{style}]")
    if r.cash_on_cash_return.is_infinite:
        table.add_row("Cash-on-cash return", "[bold green]∞ (all capital recovered)[/bold green]")
    else:
        table.add_row("Cash-on-cash return", _pct(r.cash_on_cash_return.percent))
    table.add_row("Equity retained", _money(r.total_equity))
    console.print(table)


@app.command()
def rental(
    purchase_price: int = typer.Option(None, "--price", "-p", help="Purchase price"),
    down_payment_percent: float = typer.Option(None, "--down", help="Down payment %"),
    interest_rate: float = typer.Option(None, "--rate", help="Annual interest rate %"),
    loan_term_years: int = typer.Option(None, "--term", help="Loan term in years"),
    closing_costs: int = typer.Option(None, "--closing"),
    monthly_rent: int = typer.Option(None, "--rent", "-r"),
    vacancy_rate: float = typer.Option(None, "--vacancy", help="Vacancy %"),
    property_management_percent: float = typer.Option(None, "--management", help="Management fee %"),
    monthly_insurance: int = typer.Option(None, "--insurance"),
    monthly_property_tax: int = typer.Option(None, "--tax"),
    monthly_hoa: int = typer.Option(None, "--hoa"),
    monthly_maintenance: int = typer.Option(None, "--maintenance"),
    config_path: Path = typer.Option(None, "--config", "-c", help="Path to config TOML file"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Analyze a buy-and-hold rental."""
    overrides = dict(locals())
    overrides.pop("config_path")
    overrides.pop("verbose")
    cfg = _load(config_path, verbose)
    _display_rental(_run(cfg, Strategy.RENTAL, overrides))


@app.command()
def flip(
    purchase_price: int = typer.Option(None, "--price", "-p", help="Purchase price"),
    down_payment_percent: float = typer.Option(None, "--down", help="Down payment %"),
    interest_rate: float = typer.Option(None, "--rate", help="Annual interest rate %"),
    closing_costs: int = typer.Option(None, "--closing"),
    renovation_cost: int = typer.Option(None, "--rehab"),
    holding_months: int = typer.Option(None, "--months", help="Holding period in months"),
    after_repair_value: int = typer.Option(None, "--arv"),
    selling_costs_percent: float = typer.Option(None, "--selling", help="Selling costs % of ARV"),
    config_path: Path = typer.Option(None, "--config", "-c", help="Path to config TOML file"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Analyze a fix-and-flip project."""
    overrides = dict(locals())
    overrides.pop("config_path")
    overrides.pop("verbose")
    cfg = _load(config_path, verbose)
    _display_flip(_run(cfg, Strategy.FLIP, overrides))


@app.command()
def brrrr(
    purchase_price: int = typer.Option(None, "--price", "-p", help="Purchase price"),
    down_payment_percent: float = typer.Option(None, "--down", help="Down payment %"),
    interest_rate: float = typer.Option(None, "--rate", help="Acquisition interest rate %"),
    loan_term_years: int = typer.Option(None, "--term", help="Acquisition loan term in years"),
    closing_costs: int = typer.Option(None, "--closing"),
    renovation_cost: int = typer.Option(None, "--rehab"),
    after_repair_value: int = typer.Option(None, "--arv"),
    refinance_ltv_percent: float = typer.Option(None, "--ltv", help="Refinance LTV % of ARV"),
    refinance_rate: float = typer.Option(None, "--refi-rate", help="Refinance interest rate %"),
    refinance_loan_term_years: int = typer.Option(None, "--refi-term", help="Refinance term in years"),
    monthly_rent: int = typer.Option(None, "--rent", "-r"),
    vacancy_rate: float = typer.Option(None, "--vacancy", help="Vacancy %"),
    property_management_percent: float = typer.Option(None, "--management", help="Management fee %"),
    monthly_insurance: int = typer.Option(None, "--insurance"),
    monthly_property_tax: int = typer.Option(None, "--tax"),
    monthly_hoa: int = typer.Option(None, "--hoa"),
    monthly_maintenance: int = typer.Option(None, "--maintenance"),
    config_path: Path = typer.Option(None, "--config", "-c", help="Path to config TOML file"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Analyze a buy, rehab, rent, refinance, repeat deal."""
    overrides = dict(locals())
    overrides.pop("config_path")
    overrides.pop("verbose")
    cfg = _load(config_path, verbose)
    _display_brrrr(_run(cfg, Strategy.BRRRR, overrides))


@app.command()
def schedule(
    principal: float = typer.Option(..., "--principal", "-p", help="Loan amount"),
    rate: float = typer.Option(..., "--rate", help="Annual interest rate %"),
    years: int = typer.Option(30, "--years", "-y"),
):
    """Show a yearly amortization summary for a fixed-rate loan."""
    terms = LoanTerms(principal=principal, annual_rate_percent=rate, term_years=years)
    try:
        payment = payment_for(terms)
    except InvalidInput as e:
        console.print(f"[bold red]Invalid input[/bold red] {e.field}: {e.message}")
        raise typer.Exit(code=2)

    table = Table(title=f"Amortization: {_money(principal)} at {rate}% for {years} years")
    table.add_column("Year", style="dim")
    table.add_column("Interest", justify="right")
    table.add_column("Principal", justify="right")
    table.add_column("Ending balance", justify="right")

    interest_ytd = principal_ytd = 0.0
    for row in amortization_schedule(terms, payment):
        interest_ytd += row.interest
        principal_ytd += row.principal
        if row.month % 12 == 0:
            table.add_row(
                str(row.month // 12),
                _money(interest_ytd),
                _money(principal_ytd),
                _money(row.balance),
            )
            interest_ytd = principal_ytd = 0.0

    console.print(Panel(f"Monthly payment: [bold]{_money(payment)}[/bold]"))
    console.print(table)


@app.command()
def config_show(
    config_path: Path = typer.Option(None, "--config", "-c"),
):
    """Display current configuration."""
    cfg = load_config(config_path)
    console.print_json(json.dumps(cfg.model_dump(), indent=2, default=str))


@app.command()
def serve(
    config_path: Path = typer.Option(None, "--config", "-c"),
    host: str = typer.Option(None, "--host"),
    port: int = typer.Option(None, "--port"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Start the calculation API server."""
    import uvicorn

    cfg = _load(config_path, verbose)

    from dealcalc.api.server import create_app

    host = host or cfg.api.host
    port = port or cfg.api.port
    web_app = create_app(cfg)
    console.print(f"[bold]Starting DealCalc API at http://{host}:{port}[/bold]")
    uvicorn.run(web_app, host=host, port=port)


if __name__ == "__main__":
    app()
