"""Configuration management for DealCalc."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

from dealcalc.models import BRRRRInput, FlipInput, RentalInput

CONFIG_DIR = Path(__file__).parent.parent / "config"


class EnvSettings(BaseSettings):
    """Overrides read from the environment (DEALCALC_CONFIG, DEALCALC_LOG_LEVEL)."""

    model_config = SettingsConfigDict(env_prefix="DEALCALC_")

    config: Optional[Path] = None
    log_level: Optional[str] = None


class DefaultsConfig(BaseModel):
    """Starting inputs for each calculator."""

    rental: RentalInput = RentalInput(
        purchase_price=250_000,
        down_payment_percent=20,
        interest_rate=6.5,
        loan_term_years=30,
        closing_costs=7_500,
        monthly_rent=2_000,
        vacancy_rate=5,
        property_management_percent=10,
        monthly_insurance=150,
        monthly_property_tax=300,
        monthly_hoa=0,
        monthly_maintenance=200,
    )
    flip: FlipInput = FlipInput(
        purchase_price=250_000,
        down_payment_percent=20,
        interest_rate=8,
        closing_costs=7_500,
        renovation_cost=50_000,
        holding_months=6,
        after_repair_value=350_000,
        selling_costs_percent=6,
    )
    brrrr: BRRRRInput = BRRRRInput(
        purchase_price=200_000,
        down_payment_percent=20,
        interest_rate=7,
        loan_term_years=30,
        closing_costs=6_000,
        renovation_cost=40_000,
        after_repair_value=300_000,
        refinance_ltv_percent=75,
        refinance_rate=6.5,
        monthly_rent=2_200,
        vacancy_rate=5,
        property_management_percent=10,
        monthly_insurance=150,
        monthly_property_tax=250,
        monthly_hoa=0,
        monthly_maintenance=200,
    )


class ApiConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8000


class LoggingConfig(BaseModel):
    level: str = "INFO"


class AppConfig(BaseModel):
    defaults: DefaultsConfig = DefaultsConfig()
    api: ApiConfig = ApiConfig()
    logging: LoggingConfig = LoggingConfig()


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load configuration from TOML files.

    Loads default.toml first, then merges local.toml, DEALCALC_CONFIG, or a
    custom path on top. DEALCALC_LOG_LEVEL overrides the logging level.
    """
    env = EnvSettings()
    default_path = CONFIG_DIR / "default.toml"
    data: dict[str, Any] = AppConfig().model_dump()

    if default_path.exists():
        with open(default_path, "rb") as f:
            data = _deep_merge(data, tomllib.load(f))

    local_path = config_path or env.config or CONFIG_DIR / "local.toml"
    if local_path.exists():
        with open(local_path, "rb") as f:
            overrides = tomllib.load(f)
        data = _deep_merge(data, overrides)

    if env.log_level:
        data = _deep_merge(data, {"logging": {"level": env.log_level}})

    return AppConfig(**data)
