import json
import math
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Union


class ConfigError(ValueError):
    """Raised when a configuration value or file is invalid."""


@dataclass(frozen=True)
class SchedulerConfig:
    exam_duration_hours: float = 3
    break_hours: float = 0.5
    day_start: int = 9
    day_end: int = 17
    # 1 = at most one invigilation sub-slot per faculty per day
    max_assignments_per_day: int = 1
    # input ceilings
    max_courses: int = 5000
    max_students: int = 200000
    max_faculty: int = 2000
    max_days: int = 366

    def validate(self) -> None:
        if self.exam_duration_hours <= 0:
            raise ConfigError("exam_duration_hours must be > 0")
        if self.break_hours < 0:
            raise ConfigError("break_hours must be >= 0")
        if not 0 <= self.day_start < self.day_end <= 24:
            raise ConfigError("day_start/day_end must satisfy 0 <= day_start < day_end <= 24")
        if self.max_assignments_per_day < 1:
            raise ConfigError("max_assignments_per_day must be >= 1")
        for name in ("max_courses", "max_students", "max_faculty", "max_days"):
            if getattr(self, name) < 1:
                raise ConfigError(f"{name} must be >= 1")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


DEFAULT_CONFIG = SchedulerConfig()


def config_from_dict(raw: Dict[str, Any]) -> SchedulerConfig:
    if not isinstance(raw, dict):
        raise ConfigError(f"Expected a JSON object, got {type(raw).__name__}")
    known = {f.name: f for f in fields(SchedulerConfig)}
    unknown = sorted(set(raw) - set(known))
    if unknown:
        raise ConfigError(f"Unknown config key(s): {unknown}")
    values = {}
    for key, value in raw.items():
        is_float = known[key].type in (float, "float")
        if isinstance(value, bool):
            raise ConfigError(f"Config key '{key}' expects a number, got {value!r}")
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise ConfigError(f"Config key '{key}' expects a number, got {value!r}") from None
        if not math.isfinite(number):
            raise ConfigError(f"Config key '{key}' must be finite, got {value!r}")
        if is_float:
            values[key] = number
        elif number.is_integer():
            values[key] = int(number)
        else:
            raise ConfigError(f"Config key '{key}' expects a whole number, got {value!r}")
    cfg = SchedulerConfig(**values)
    cfg.validate()
    return cfg


def load_config(path: Union[str, Path]) -> SchedulerConfig:
    """Load overrides from a JSON file on top of the defaults."""
    with Path(path).open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {path}: {e}") from None
    return config_from_dict(raw)
