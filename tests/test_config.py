"""Tests for configuration loading."""

from dealcalc.config import AppConfig, _deep_merge, load_config


def test_load_default_config():
    cfg = load_config()
    assert isinstance(cfg, AppConfig)
    assert cfg.api.port > 0
    assert cfg.logging.level


def test_defaults_match_calculator_forms():
    cfg = load_config()
    assert cfg.defaults.rental.purchase_price == 250_000
    assert cfg.defaults.rental.interest_rate == 6.5
    assert cfg.defaults.flip.holding_months == 6
    assert cfg.defaults.brrrr.refinance_ltv_percent == 75
    assert cfg.defaults.brrrr.refinance_loan_term_years is None


def test_local_override_merges(tmp_path):
    local = tmp_path / "local.toml"
    local.write_text("[defaults.rental]\nmonthly_rent = 2500\n\n[api]\nport = 9001\n")
    cfg = load_config(local)
    assert cfg.defaults.rental.monthly_rent == 2_500
    assert cfg.defaults.rental.purchase_price == 250_000
    assert cfg.api.port == 9001


def test_env_overrides(tmp_path, monkeypatch):
    local = tmp_path / "env.toml"
    local.write_text("[defaults.flip]\nafter_repair_value = 375000\n")
    monkeypatch.setenv("DEALCALC_CONFIG", str(local))
    monkeypatch.setenv("DEALCALC_LOG_LEVEL", "DEBUG")
    cfg = load_config()
    assert cfg.defaults.flip.after_repair_value == 375_000
    assert cfg.logging.level == "DEBUG"


def test_config_deep_merge():
    base = {"a": {"b": 1, "c": 2}, "d": 3}
    override = {"a": {"b": 10}, "e": 5}
    result = _deep_merge(base, override)
    assert result == {"a": {"b": 10, "c": 2}, "d": 3, "e": 5}
