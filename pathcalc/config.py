# pathcalc/config.py
from __future__ import annotations

import copy
import json
import os
from dataclasses import dataclass
from typing import Optional

from .units import UnitOfLength


class PathConfigError(ValueError):
    """The configuration cannot drive a point calculation."""


CONFIG_FILENAME = "config.json"

# LemLib v0.4 preset: inches, byte-voltage speeds
DEFAULT_CONFIG = {
    "general": {
        "unit_of_length": {"value": "in"},
        "point_density": {"value": 2.0},
    },
    "path_config": {
        "speed_limit_from": {"value": 20.0},
        "speed_limit_to": {"value": 100.0},
        "application_range_from": {"value": 1.4},
        "application_range_to": {"value": 1.8},
    },
    "codegen": {
        "path_dir": {"value": "export/paths"},
        "point_columns": {"value": "{X}, {Y}, {SPEED}"},
    },
}


@dataclass(frozen=True)
class NumberRange:
    start: float
    end: float

    @property
    def span(self) -> float:
        return self.end - self.start


@dataclass(frozen=True)
class PathConfig:
    speed_limit: NumberRange
    application_range: NumberRange
    point_density: float
    unit: UnitOfLength = UnitOfLength.CENTIMETER

    def __post_init__(self):
        if not self.point_density > 0:
            raise PathConfigError(f"point_density must be > 0, got {self.point_density}")


def _flatten(section: dict) -> dict:
    """Extract 'value' from nested dict structure."""
    flat = {}
    for k, v in section.items():
        flat[k] = v.get("value", v) if isinstance(v, dict) and "value" in v else v
    return flat


def _load_json(path: str) -> Optional[dict]:
    """Load JSON file, return None when it does not exist."""
    if not os.path.exists(path):
        return None
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _save_json(path: str, data: dict) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def default_config() -> dict:
    return copy.deepcopy(DEFAULT_CONFIG)


def load_config(filename: Optional[str] = None) -> dict:
    """Load config from filename (default: ./config.json), writing defaults if missing.

    Sections missing from the file are filled from DEFAULT_CONFIG.
    """
    filename = filename or os.path.join(os.getcwd(), CONFIG_FILENAME)
    data = _load_json(filename)
    if data is None:
        data = default_config()
        _save_json(filename, data)
        return data
    if not isinstance(data, dict):
        raise PathConfigError(f"{filename}: config root must be an object")
    merged = default_config()
    for section, values in data.items():
        if isinstance(values, dict) and isinstance(merged.get(section), dict):
            merged[section].update(values)
        else:
            merged[section] = values
    return merged


def save_config(filename: str, cfg: dict) -> None:
    """Save a config dict; flat sections are wrapped back into {"value": ...} leaves."""
    def wrap(v):
        return v if isinstance(v, dict) and "value" in v else {"value": v}

    raw = {section: {k: wrap(v) for k, v in values.items()} if isinstance(values, dict) else values
           for section, values in cfg.items()}
    _save_json(filename, raw)


def general_flat(cfg: dict) -> dict:
    return _flatten(cfg.get("general", {}))


def path_flat(cfg: dict) -> dict:
    return _flatten(cfg.get("path_config", {}))


def codegen_flat(cfg: dict) -> dict:
    return _flatten(cfg.get("codegen", {}))


def path_config_from(cfg: dict) -> PathConfig:
    """Build the calculation config from a config document."""
    gen = general_flat(cfg)
    pc = path_flat(cfg)
    try:
        unit = UnitOfLength.from_name(gen.get("unit_of_length", "cm"))
        return PathConfig(
            speed_limit=NumberRange(float(pc["speed_limit_from"]), float(pc["speed_limit_to"])),
            application_range=NumberRange(float(pc["application_range_from"]), float(pc["application_range_to"])),
            point_density=float(gen["point_density"]),
            unit=unit,
        )
    except KeyError as e:
        raise PathConfigError(f"missing config key: {e.args[0]}") from e
    except (TypeError, ValueError) as e:
        if isinstance(e, PathConfigError):
            raise
        raise PathConfigError(str(e)) from e
