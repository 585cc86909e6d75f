"""
Pair configuration.

Defaults match the canonical constant-product pair. Configuration can be
loaded from a YAML mapping; unknown keys are rejected (fail-closed).
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Union

import yaml

from ..state.balances import ZERO_ADDRESS
from .liquidity import MINIMUM_LIQUIDITY


@dataclass(frozen=True)
class PairConfig:
    """Runtime config for a pair."""

    minimum_liquidity: int = MINIMUM_LIQUIDITY
    lock_address: str = ZERO_ADDRESS
    lp_name: str = "Pairswap LP"
    lp_symbol: str = "PAIR-LP"

    def __post_init__(self) -> None:
        if not isinstance(self.minimum_liquidity, int) or isinstance(self.minimum_liquidity, bool):
            raise TypeError("minimum_liquidity must be an int")
        if self.minimum_liquidity <= 0:
            raise ValueError(f"minimum_liquidity must be positive: {self.minimum_liquidity}")
        for name in ("lock_address", "lp_name", "lp_symbol"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                raise ValueError(f"{name} must be a non-empty string")


def config_from_mapping(obj: Mapping[str, Any]) -> PairConfig:
    if not isinstance(obj, Mapping):
        raise TypeError("pair config must be a mapping")
    known = {f.name for f in fields(PairConfig)}
    unknown = sorted(set(obj) - known)
    if unknown:
        raise ValueError(f"unknown pair config keys: {', '.join(map(str, unknown))}")
    return PairConfig(**dict(obj))


def load_config(path: Union[str, Path]) -> PairConfig:
    """Load a `PairConfig` from a YAML file. An empty file yields the defaults."""
    obj = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    if obj is None:
        return PairConfig()
    return config_from_mapping(obj)
