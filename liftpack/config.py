"""Configuration loaded from ``liftpack.toml``.

Example file:

    [experiment]
    data_dir = "data/equities"
    symbols = ["aa", "amat", "ba", "cof", "ge", "ibm", "intc", "mmm", "mrk", "wmt"]
    samples = 512
    field = "close"
    quantizer = "decimal2"

    [packet]
    wavelet = "line"
    cost = "width"
    threshold = 0.0
    arena_block_bytes = 1048576

Every key is optional; missing keys take the defaults below.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal, cast

from pydantic import BaseModel, Field, field_validator

# TOML loading for Python 3.11+ and older
try:
    import tomllib  # type: ignore[import-not-found, unused-ignore]
except ImportError:
    import tomli as tomllib  # type: ignore[import-not-found, no-redef, unused-ignore]

from liftpack.core.split_view import is_power_of_two
from liftpack.data.yahoo import PriceField
from liftpack.lifting import WAVELETS

CONFIG_ENV = "LIFTPACK_CONFIG"
CONFIG_NAME = "liftpack.toml"

DEFAULT_SYMBOLS = ["aa", "amat", "ba", "cof", "ge", "ibm", "intc", "mmm", "mrk", "wmt"]


class ExperimentConfig(BaseModel):
    """Where the price histories live and how they are read."""

    data_dir: Path = Path("data/equities")
    symbols: list[str] = Field(default_factory=lambda: list(DEFAULT_SYMBOLS))
    samples: int = 512
    field: str = "close"
    quantizer: Literal["round3", "decimal2"] = "decimal2"

    @field_validator("samples")
    @classmethod
    def _power_of_two(cls, v: int) -> int:
        if v < 2 or not is_power_of_two(v):
            raise ValueError(f"samples must be a power of two >= 2, got {v}")
        return v

    @field_validator("field")
    @classmethod
    def _known_field(cls, v: str) -> str:
        PriceField.parse(v)
        return v.lower()


class PacketConfig(BaseModel):
    """Packet tree and best basis settings."""

    wavelet: str = "line"
    cost: Literal["width", "shannon", "threshold"] = "width"
    threshold: float = Field(default=0.0, ge=0.0)
    arena_block_bytes: int = Field(default=1 << 20, gt=0)

    @field_validator("wavelet")
    @classmethod
    def _known_wavelet(cls, v: str) -> str:
        if v not in WAVELETS:
            raise ValueError(f"Unknown wavelet '{v}', expected one of {sorted(WAVELETS)}")
        return v


class LiftpackConfig(BaseModel):
    experiment: ExperimentConfig = Field(default_factory=ExperimentConfig)
    packet: PacketConfig = Field(default_factory=PacketConfig)


def resolve_config_path(config_path: str | Path | None = None) -> Path | None:
    """Resolve configuration path from env, explicit path, or defaults.

    Returns None when no file is found and none was asked for.

    Raises:
        FileNotFoundError: If the env var or explicit path names a missing file
    """
    env_config = os.environ.get(CONFIG_ENV)
    explicit = env_config or config_path
    if explicit:
        path = Path(explicit)
        if not path.exists():
            raise FileNotFoundError(
                f"Config file not found at {path}. Set {CONFIG_ENV} or create {CONFIG_NAME}"
            )
        return path
    candidates = [Path(CONFIG_NAME), Path.home() / CONFIG_NAME]
    for candidate in candidates:
        if candidate.exists():
            return candidate
    return None


def load_config(config_path: str | Path | None = None) -> LiftpackConfig:
    """Load and validate the configuration, falling back to defaults."""
    path = resolve_config_path(config_path)
    if path is None:
        return LiftpackConfig()
    with open(path, "rb") as f:
        raw = cast(dict[str, Any], tomllib.load(f))
    return LiftpackConfig.model_validate(raw)
