from __future__ import annotations

import os
from dataclasses import dataclass, replace

from rigsnr.core.metrics import DEFAULT_CEILING, DEFAULT_OFFSET, NORMALIZED_FLOOR

# Hamlib RIG_MODEL_IC7300
DEFAULT_MODEL = 3073
DEFAULT_BAUD = 4800
DEFAULT_INTERVAL = 0.020
DEFAULT_RIGCTLD_PORT = 4532

DEFAULT_PORT = "/dev/ttyUSB0"

BACKENDS = ("hamlib", "rigctld", "mock")


@dataclass(slots=True)
class MeterConfig:
    model: int = DEFAULT_MODEL
    port: str = DEFAULT_PORT
    baud: int = DEFAULT_BAUD
    interval: float = DEFAULT_INTERVAL
    ceiling: float = DEFAULT_CEILING
    offset: int = DEFAULT_OFFSET
    backend: str = "hamlib"
    rigctld_host: str = "localhost"
    rigctld_port: int = DEFAULT_RIGCTLD_PORT
    hamlib_debug: int = 0

    def with_overrides(self, **overrides: object) -> "MeterConfig":
        """Return a copy with every non-None override applied."""
        values = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **values)

    def validate(self) -> None:
        if self.backend not in BACKENDS:
            raise ValueError(f"unknown backend {self.backend!r} (expected one of {BACKENDS})")
        if self.interval <= 0:
            raise ValueError(f"interval must be positive, got {self.interval!r}")
        if self.ceiling < NORMALIZED_FLOOR:
            raise ValueError(f"ceiling must be >= {NORMALIZED_FLOOR:g}, got {self.ceiling!r}")
        if self.baud <= 0:
            raise ValueError(f"baud rate must be positive, got {self.baud!r}")
        if not 0 < self.rigctld_port < 65536:
            raise ValueError(f"rigctld port out of range: {self.rigctld_port!r}")

    def to_log_string(self) -> str:
        link = (
            f"rigctld={self.rigctld_host}:{self.rigctld_port}"
            if self.backend == "rigctld"
            else f"model={self.model} port={self.port} baud={self.baud}"
        )
        return (
            f"backend={self.backend} {link} "
            f"interval_ms={self.interval * 1000:.0f} ceiling={self.ceiling:g} "
            f"offset={self.offset} hamlib_debug={self.hamlib_debug}"
        )


def load_meter_config() -> MeterConfig:
    backend = os.environ.get("RIGSNR_BACKEND", "hamlib").strip().lower()
    if backend not in BACKENDS:
        backend = "hamlib"
    if _env_bool("RIGSNR_MOCK", False):
        backend = "mock"
    return MeterConfig(
        model=_env_int("RIGSNR_MODEL", DEFAULT_MODEL),
        port=os.environ.get("RIGSNR_PORT", DEFAULT_PORT),
        baud=_env_int("RIGSNR_BAUD", DEFAULT_BAUD),
        interval=_env_float("RIGSNR_INTERVAL_MS", DEFAULT_INTERVAL * 1000) / 1000,
        ceiling=_env_float("RIGSNR_CEILING", DEFAULT_CEILING),
        offset=_env_int("RIGSNR_OFFSET", DEFAULT_OFFSET),
        backend=backend,
        rigctld_host=os.environ.get("RIGSNR_RIGCTLD_HOST", "localhost"),
        rigctld_port=_env_int("RIGSNR_RIGCTLD_PORT", DEFAULT_RIGCTLD_PORT),
        hamlib_debug=_env_int("RIGSNR_HAMLIB_DEBUG", 0),
    )


def parse_rigctld_address(value: str) -> tuple[str, int]:
    """Split ``HOST[:PORT]`` into a (host, port) pair."""
    host, sep, port = value.rpartition(":")
    if not sep:
        return value, DEFAULT_RIGCTLD_PORT
    if not host:
        host = "localhost"
    return host, int(port)


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}
