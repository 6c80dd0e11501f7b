"""Typed configuration keys."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ConfigType(Enum):
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    STRING = "string"

    @property
    def is_numeric(self) -> bool:
        return self in (ConfigType.INT, ConfigType.FLOAT)


TRUTHY_STRINGS = frozenset({"true", "1", "yes", "on"})


def to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in TRUTHY_STRINGS
    return bool(value)


CONVERTERS: dict[ConfigType, Callable[[Any], Any]] = {
    ConfigType.INT: int,
    ConfigType.FLOAT: float,
    ConfigType.BOOL: to_bool,
    ConfigType.STRING: str,
}


@dataclass(frozen=True)
class ConfigKey:
    """
    One registered key, e.g. ``priority.families.weight``.

    ``default=None`` marks the key as required: it must then come from the
    environment or the database. Bounds apply to numeric keys only.
    """

    key: str
    config_type: ConfigType
    default: Any = None
    description: str = ""
    min_value: float | None = None
    max_value: float | None = None
    allowed_values: tuple[Any, ...] | None = None
    validator: Callable[[Any], bool] | None = None

    @property
    def required(self) -> bool:
        return self.default is None

    def convert(self, raw: Any) -> Any:
        """Raw env/database value to the key's type; raises ValueError/TypeError."""
        return CONVERTERS[self.config_type](raw)

    def validate(self, value: Any) -> str | None:
        """Error message for an out-of-range value, None when acceptable."""
        problems: list[str] = []
        if self.config_type.is_numeric:
            if self.min_value is not None and value < self.min_value:
                problems.append(f"{value} is below the minimum of {self.min_value}")
            if self.max_value is not None and value > self.max_value:
                problems.append(f"{value} exceeds the maximum of {self.max_value}")
        if self.allowed_values is not None and value not in self.allowed_values:
            problems.append(f"{value!r} is not one of {list(self.allowed_values)}")
        if self.validator is not None and not self.validator(value):
            problems.append(f"{value!r} was rejected by the key's validator")
        return "; ".join(problems) or None
