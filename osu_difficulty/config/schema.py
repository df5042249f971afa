"""Immutable difficulty-pass configuration."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

OUTPUT_FORMATS = ("table", "json", "csv")


@dataclass(frozen=True)
class DifficultyConfig:
    """Settings resolved from CLI args and the config file.

    ``clock_rate`` overrides the rate implied by the mods when set.
    """

    clock_rate: Optional[float] = None
    stacking: bool = True
    mods: Dict[str, Any] = field(default_factory=dict)

    # Input
    version: Optional[str] = None

    # Output
    output_format: str = "table"
    output: Optional[str] = None
    precision: int = 3

    def __post_init__(self) -> None:
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(f"output format must be one of {OUTPUT_FORMATS}, got {self.output_format!r}")
        if self.clock_rate is not None and (not math.isfinite(self.clock_rate) or self.clock_rate <= 0):
            raise ValueError(f"clock_rate must be a positive number, got {self.clock_rate!r}")
        if self.precision < 0:
            raise ValueError(f"precision must be >= 0, got {self.precision!r}")

    @classmethod
    def from_args(cls, args: Any, *, mods: Optional[Dict[str, Any]] = None) -> "DifficultyConfig":
        def get(key: str, default: Any = None) -> Any:
            if isinstance(args, dict):
                return args.get(key, default)
            return getattr(args, key, default)

        clock_rate = get("clock_rate")
        return cls(
            clock_rate=float(clock_rate) if clock_rate is not None else None,
            stacking=not bool(get("no_stacking", False)),
            mods=dict(mods or {}),
            version=get("version"),
            output_format=str(get("format", "table") or "table").lower(),
            output=get("output"),
            precision=int(get("precision", 3)),
        )
