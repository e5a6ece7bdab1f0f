"""
Lanka Pantry - Configuration Module
===================================

Centralized tuning constants for the prediction and budget engines.
Every threshold the engines apply lives here so it can be overridden from
a JSON file without touching code.
"""

import json
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

from .exceptions import InvalidInputError
from .utils.constants import DIET_EXCLUSIONS
from .utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class PredictionConfig:
    """Configuration for consumption estimation and need projection"""
    # Observed history must span at least this many days
    min_history_days: float = 3.0

    # Heuristic per-person daily rate by catalog unit
    heuristic_unit_rates: Dict[str, float] = field(default_factory=lambda: {
        'kg': 0.05,
        'l': 0.05,
        'g': 50.0,
    })
    heuristic_default_rate: float = 0.5

    # Rate -> monthly requirement
    frequency_multipliers: Dict[str, float] = field(default_factory=lambda: {
        'daily': 30,
        'weekly': 4,
        'monthly': 1,
        'adhoc': 0,
    })

    # Monthly target -> rate; adhoc targets are taken as-is
    manual_target_divisors: Dict[str, float] = field(default_factory=lambda: {
        'daily': 30,
        'weekly': 4,
        'monthly': 1,
        'adhoc': 1,
    })

    # Rate x price -> daily value; frequencies not listed contribute nothing
    daily_value_divisors: Dict[str, float] = field(default_factory=lambda: {
        'daily': 1,
        'weekly': 7,
        'monthly': 30,
    })

    diet_exclusions: Dict[str, List[str]] = field(
        default_factory=lambda: {k: list(v) for k, v in DIET_EXCLUSIONS.items()}
    )

    # Names allowed within substitution groups; empty means no restriction
    allowed_items: List[str] = field(default_factory=list)


@dataclass
class BudgetConfig:
    """Budget calculator rules and recommendation thresholds"""
    # Income share (%) above which each tier applies, checked in order
    tier_thresholds: Dict[str, float] = field(default_factory=lambda: {
        'critical': 50.0,
        'warning': 40.0,
        'healthy': 25.0,
    })

    fallback_sector: str = 'urban'
    fallback_rice_type: str = 'samba'

    # Share of template vegetables bought by home-growing sectors
    home_growing_purchase_ratio: float = 0.6

    # 12.5kg LPG cylinder lasts about 45 days
    lpg_monthly_fraction: float = 0.67

    spice_cost_per_capita: float = 400.0

    # (floor, per-capita) monthly quantities
    flour_kg: List[float] = field(default_factory=lambda: [2, 0.5])
    chicken_kg: List[float] = field(default_factory=lambda: [2, 0.45])
    fish_kg: List[float] = field(default_factory=lambda: [2, 1.2])
    red_meat_kg: List[float] = field(default_factory=lambda: [1, 0.3])
    soya_packs: List[float] = field(default_factory=lambda: [6, 2])
    oil_liters: List[float] = field(default_factory=lambda: [3, 0.75])
    coconuts: List[float] = field(default_factory=lambda: [15, 5])
    sugar_kg: List[float] = field(default_factory=lambda: [2, 0.75])
    tea_grams: List[float] = field(default_factory=lambda: [200, 100])
    tea_pack_grams: float = 100.0

    # Fruit kg per person is this base plus the income quintile number
    fruit_base_kg: float = 2.0


@dataclass
class ForecastConfig:
    """Seasonal, inflation and sufficiency parameters"""
    vegetable_weight: float = 0.4
    fish_weight: float = 0.2
    horizon_months: int = 3

    # About 25% a year, from 213% over 2019-2024
    monthly_inflation_rate: float = 0.019
    inflation_months: int = 6
    unknown_item_price: float = 100.0

    ideal_food_share: float = 35.0
    critical_gap_share: float = 15.0

    iqr_multiplier: float = 1.5
    min_outlier_points: int = 4

    top_strategies: int = 5


@dataclass
class OutputConfig:
    """Export settings"""
    output_dir: Path = field(default_factory=lambda: Path.cwd() / 'outputs')
    csv_float_format: str = '%.2f'
    json_indent: int = 2


@dataclass
class LoggingConfig:
    level: str = 'INFO'
    log_file: Optional[str] = None


@dataclass
class Config:
    """
    Master configuration for Lanka Pantry

    Usage:
        config = Config()
        config.prediction.min_history_days = 7
        config = Config.from_json('pantry.json')
    """

    prediction: PredictionConfig = field(default_factory=PredictionConfig)
    budget: BudgetConfig = field(default_factory=BudgetConfig)
    forecast: ForecastConfig = field(default_factory=ForecastConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def __post_init__(self):
        """Convert string paths to Path objects"""
        if isinstance(self.output.output_dir, str):
            self.output.output_dir = Path(self.output.output_dir)

    @classmethod
    def from_dict(cls, overrides: Dict[str, Any]) -> 'Config':
        """
        Build a config from defaults plus nested overrides.

        Unknown sections and keys are ignored with a warning.

        Args:
            overrides: e.g. ``{"prediction": {"min_history_days": 7}}``

        Returns:
            Configured Config instance
        """
        config = cls()
        for section_name, values in (overrides or {}).items():
            section = getattr(config, section_name, None)
            if not is_dataclass(section):
                logger.warning(f"Ignoring unknown config section '{section_name}'")
                continue
            if not isinstance(values, dict):
                raise InvalidInputError(
                    f"Config section '{section_name}' must be an object, got {type(values).__name__}"
                )
            known = {f.name for f in fields(section)}
            for key, value in values.items():
                if key not in known:
                    logger.warning(f"Ignoring unknown config key '{section_name}.{key}'")
                    continue
                setattr(section, key, value)
        config.__post_init__()
        return config

    @classmethod
    def from_json(cls, path: str) -> 'Config':
        """
        Load overrides from a JSON file.

        Args:
            path: Path to a JSON object with per-section overrides

        Returns:
            Configured Config instance
        """
        config_path = Path(path)
        if not config_path.exists():
            raise InvalidInputError(f"Config file not found: {config_path}")
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                overrides = json.load(f)
        except json.JSONDecodeError as exc:
            raise InvalidInputError(f"Invalid JSON in config file {config_path}: {exc}")
        if not isinstance(overrides, dict):
            raise InvalidInputError(f"Config file {config_path} must contain a JSON object")
        logger.info(f"Loaded configuration overrides from {config_path}")
        return cls.from_dict(overrides)


# Default configuration instance
DEFAULT_CONFIG = Config()
