"""
Configuration management using Pydantic models loaded from YAML.
"""

from datetime import date
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.catalog import CALENDAR_DAYS, DEFAULT_BASE_PRICE, MIN_BASE_PRICE


class PropertySeed(BaseModel):
    """A property listed at startup."""
    name: str
    days: List[int] = Field(default_factory=list)
    base_price: Optional[float] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        """Ensure the name is not blank."""
        value = value.strip()
        if not value:
            raise ValueError("Property name cannot be blank")
        return value

    @field_validator("days")
    @classmethod
    def validate_days(cls, value: List[int]) -> List[int]:
        """Ensure days are within the calendar."""
        invalid_days = [day for day in value if not 1 <= day <= CALENDAR_DAYS]
        if invalid_days:
            raise ValueError(f"days must be between 1 and {CALENDAR_DAYS}, got {invalid_days}")
        return value

    @field_validator("base_price")
    @classmethod
    def validate_base_price(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and value < MIN_BASE_PRICE:
            raise ValueError(f"base_price must be at least {MIN_BASE_PRICE}, got {value}")
        return value


class ExchangeConfig(BaseModel):
    """Application configuration."""
    currency_symbol: str = "₱"
    default_base_price: float = DEFAULT_BASE_PRICE
    max_base_price: float = 999999.0
    calendar_start: Optional[date] = None  # maps day 1 to a real date for weekday labels
    properties: List[PropertySeed] = Field(default_factory=list)

    @field_validator("default_base_price")
    @classmethod
    def validate_default_base_price(cls, value: float) -> float:
        """Ensure the default respects the price floor."""
        if value < MIN_BASE_PRICE:
            raise ValueError(f"default_base_price must be at least {MIN_BASE_PRICE}, got {value}")
        return value

    @field_validator("properties")
    @classmethod
    def validate_properties(cls, value: List[PropertySeed]) -> List[PropertySeed]:
        """Ensure property names are unique, ignoring case."""
        seen_names: set[str] = set()
        for seed in value:
            name_key = seed.name.casefold()
            if name_key in seen_names:
                raise ValueError(f"Duplicate property name detected: {seed.name}")
            seen_names.add(name_key)
        return value

    @model_validator(mode="after")
    def validate_price_range(self) -> "ExchangeConfig":
        """Ensure the price ceiling is above the default."""
        if self.max_base_price < self.default_base_price:
            raise ValueError("max_base_price must not be lower than default_base_price")
        return self

    def format_price(self, amount: float) -> str:
        """Format an amount with the currency symbol, e.g. ``₱1,500.00``."""
        return f"{self.currency_symbol}{amount:,.2f}"

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "ExchangeConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            ExchangeConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        return cls(**data)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path


def load_config(config_path: Optional[Path] = None) -> ExchangeConfig:
    """
    Load an explicit config file, or the default one if present.

    A missing default file yields the built-in defaults; a missing
    explicit file is an error.
    """
    if config_path is not None:
        return ExchangeConfig.load_from_yaml(config_path)

    default_path = get_default_config_path()
    if not default_path.exists():
        return ExchangeConfig()
    return ExchangeConfig.load_from_yaml(default_path)
