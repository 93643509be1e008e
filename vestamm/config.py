"""
Engine configuration.

`AmmConfig` is a frozen dataclass so a single instance can be shared by every
pool an engine serves. `load_config()` reads the same fields from a YAML file.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Union

import yaml


SECONDS_PER_DAY = 24 * 3600

DEFAULT_MIN_VESTING_SECONDS = 30 * SECONDS_PER_DAY
DEFAULT_MAX_VESTING_SECONDS = 180 * SECONDS_PER_DAY
DEFAULT_REWARD_SCALE = 1_000_000_000_000


@dataclass(frozen=True)
class AmmConfig:
    """Runtime config for the vesting AMM."""

    min_vesting_seconds: int = DEFAULT_MIN_VESTING_SECONDS
    max_vesting_seconds: int = DEFAULT_MAX_VESTING_SECONDS
    # Fixed-point scale of `acc_reward_per_share`.
    reward_scale: int = DEFAULT_REWARD_SCALE
    # If True, early exits settle accrued reward on the withdrawn amount first.
    settle_reward_on_early_exit: bool = False

    def __post_init__(self) -> None:
        for name in ("min_vesting_seconds", "max_vesting_seconds", "reward_scale"):
            v = getattr(self, name)
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} must be an int")
        if not isinstance(self.settle_reward_on_early_exit, bool):
            raise TypeError("settle_reward_on_early_exit must be a bool")
        if self.min_vesting_seconds < 0:
            raise ValueError(f"min_vesting_seconds must be non-negative: {self.min_vesting_seconds}")
        if self.min_vesting_seconds > self.max_vesting_seconds:
            raise ValueError(
                f"min_vesting_seconds ({self.min_vesting_seconds}) > "
                f"max_vesting_seconds ({self.max_vesting_seconds})"
            )
        if self.reward_scale <= 0:
            raise ValueError(f"reward_scale must be positive: {self.reward_scale}")


def config_from_mapping(obj: Mapping[str, Any]) -> AmmConfig:
    """Build an AmmConfig from a plain mapping, rejecting unknown keys."""
    if not isinstance(obj, Mapping):
        raise TypeError("config must be a mapping")
    known = {f.name for f in fields(AmmConfig)}
    unknown = sorted(set(obj) - known)
    if unknown:
        raise ValueError(f"unknown config keys: {', '.join(unknown)}")
    return AmmConfig(**dict(obj))


def load_config(path: Union[str, Path]) -> AmmConfig:
    """
    Load an AmmConfig from a YAML file.

    An empty file yields the defaults. Keys may be nested under a top-level
    `vestamm:` section.
    """
    text = Path(path).read_text(encoding="utf-8")
    obj = yaml.safe_load(text)
    if obj is None:
        return AmmConfig()
    if not isinstance(obj, Mapping):
        raise TypeError("config YAML must be a mapping")
    section = obj.get("vestamm", obj)
    if section is None:
        return AmmConfig()
    return config_from_mapping(section)
