"""Configuration loading for the scheduler (YAML or JSON)."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml


DEFAULT_DB_URL = "sqlite:///shiftplan.db"
HORIZONS = {"7days": 7, "14days": 14, "30days": 30}


def _default_preferred_staff() -> Dict[str, int]:
    return {
        "Server": 4,
        "Line Cook": 2,
        "Head Server": 1,
        "Host": 1,
        "Manager": 1,
    }


@dataclass
class ScheduleConstraints:
    """Business rules consumed by the shift generator and efficiency scorer.

    ``max_hours_per_week`` and ``preferred_staff_per_position`` are carried
    through but not consulted by the generator or the scorer.
    """

    min_staff_per_shift: int = 3
    max_hours_per_week: int = 40
    overtime_threshold: int = 40
    preferred_staff_per_position: Dict[str, int] = field(default_factory=_default_preferred_staff)
    # Placeholder discount used to estimate "optimized" labour cost
    optimized_cost_factor: float = 0.95


@dataclass
class ForecastSettings:
    customers_per_staff: int = 15
    cost_accuracy_factor: float = 1.05
    default_horizon: str = "7days"


@dataclass
class SchedulerConfig:
    db_url: str = DEFAULT_DB_URL
    constraints: ScheduleConstraints = field(default_factory=ScheduleConstraints)
    forecasting: ForecastSettings = field(default_factory=ForecastSettings)


DEFAULT_CONSTRAINTS = ScheduleConstraints()


def _read_raw(path: Path) -> Dict[str, Any]:
    text = path.read_text()
    if path.suffix.lower() in (".yaml", ".yml"):
        data = yaml.safe_load(text)
    else:
        data = json.loads(text)
    return data or {}


def _build_constraints(raw: Dict[str, Any]) -> ScheduleConstraints:
    cons = ScheduleConstraints()
    if "min_staff_per_shift" in raw:
        cons.min_staff_per_shift = int(raw["min_staff_per_shift"])
    if "max_hours_per_week" in raw:
        cons.max_hours_per_week = int(raw["max_hours_per_week"])
    if "overtime_threshold" in raw:
        cons.overtime_threshold = int(raw["overtime_threshold"])
    if "preferred_staff_per_position" in raw:
        cons.preferred_staff_per_position = {
            str(pos): int(count) for pos, count in raw["preferred_staff_per_position"].items()
        }
    if "optimized_cost_factor" in raw:
        cons.optimized_cost_factor = float(raw["optimized_cost_factor"])
    return cons


def _build_forecasting(raw: Dict[str, Any]) -> ForecastSettings:
    settings = ForecastSettings()
    if "customers_per_staff" in raw:
        settings.customers_per_staff = int(raw["customers_per_staff"])
    if "cost_accuracy_factor" in raw:
        settings.cost_accuracy_factor = float(raw["cost_accuracy_factor"])
    if "default_horizon" in raw:
        settings.default_horizon = str(raw["default_horizon"])
    return settings


def validate_config(cfg: SchedulerConfig) -> None:
    """Raise ValueError if any configured value is out of range."""
    cons = cfg.constraints
    if cons.min_staff_per_shift < 0:
        raise ValueError("min_staff_per_shift must be >= 0")
    if cons.overtime_threshold <= 0:
        raise ValueError("overtime_threshold must be > 0")
    if cons.max_hours_per_week <= 0:
        raise ValueError("max_hours_per_week must be > 0")
    if not 0 < cons.optimized_cost_factor <= 1:
        raise ValueError("optimized_cost_factor must be in (0, 1]")
    for pos, count in cons.preferred_staff_per_position.items():
        if count < 0:
            raise ValueError(f"preferred_staff_per_position[{pos}] must be >= 0")

    fc = cfg.forecasting
    if fc.customers_per_staff <= 0:
        raise ValueError("customers_per_staff must be > 0")
    if fc.cost_accuracy_factor <= 0:
        raise ValueError("cost_accuracy_factor must be > 0")
    if fc.default_horizon not in HORIZONS:
        raise ValueError(f"default_horizon must be one of {sorted(HORIZONS)}")


def load_config(path: str | Path | None = None) -> SchedulerConfig:
    """
    Load scheduler configuration from a YAML or JSON file.

    Missing sections and keys fall back to defaults. Passing ``None``
    returns the default configuration.

    Raises:
        FileNotFoundError: If ``path`` does not exist
        ValueError: If a value is out of range
    """
    if path is None:
        return SchedulerConfig()

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    raw = _read_raw(path)
    cfg = SchedulerConfig(
        db_url=str(raw.get("db_url", DEFAULT_DB_URL)),
        constraints=_build_constraints(raw.get("constraints") or {}),
        forecasting=_build_forecasting(raw.get("forecasting") or {}),
    )
    validate_config(cfg)
    return cfg
