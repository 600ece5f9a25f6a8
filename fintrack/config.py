"""Configuration file management for fintrack."""

import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

from fintrack.domain.budget import validate_budget_amount
from fintrack.domain.models import CategoryName, Money

DEFAULT_CURRENCY = "¥"
DEFAULT_TREND_MONTHS = 6


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "fintrack" / "config.toml"


def default_config() -> dict[str, Any]:
    """Return a fresh default configuration."""
    return {
        "currency": DEFAULT_CURRENCY,
        "trend_months": DEFAULT_TREND_MONTHS,
        "budgets": {},
    }


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(default_config(), f)

    os.chmod(config_path, 0o600)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file, filling in defaults.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary. A missing file yields the defaults.

    Raises:
        tomllib.TOMLDecodeError: If the config file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    config = default_config()
    if not config_path.exists():
        return config

    with open(config_path, "rb") as f:
        config.update(tomllib.load(f))
    return config


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def get_budgets(config_path: Path | None = None) -> dict[CategoryName, Money]:
    """Get configured monthly budgets in the order they were first set.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Dictionary of category -> budget amount.

    Raises:
        ValueError: If the budgets entry is not a table.
    """
    config = load_config(config_path)
    return {CategoryName(k): Money(v) for k, v in _budget_table(config).items()}


def _budget_table(config: dict[str, Any]) -> dict[str, Any]:
    budgets = config.get("budgets", {})
    if not isinstance(budgets, dict):
        raise ValueError(f"Config 'budgets' must be a table, got {budgets!r}")
    return budgets


def set_budget(category: str, amount: float, config_path: Path | None = None) -> None:
    """Add or update a category budget.

    Args:
        category: Category name.
        amount: Monthly budget amount.
        config_path: Path to config file. If None, uses default location.

    Raises:
        ValidationError: If amount is not a finite number greater than zero.
        ValueError: If the existing budgets entry is not a table.
    """
    validated = validate_budget_amount(amount)
    config = load_config(config_path)

    budgets = dict(_budget_table(config))
    budgets[category] = validated

    config["budgets"] = budgets
    save_config(config, config_path)
