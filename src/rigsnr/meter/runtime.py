from __future__ import annotations

import logging
from typing import Any

from rigsnr.core.errors import RigError
from rigsnr.core.types import SampleSource

from .config import MeterConfig
from .hamlib_source import HamlibSampleSource
from .rigctld import RigctldSampleSource

logger = logging.getLogger(__name__)

MODEL_PREFIX = "RIG_MODEL_"


def import_hamlib() -> Any:
    try:
        import Hamlib  # type: ignore[import-not-found]
    except ImportError as exc:
        raise RuntimeError(
            "Hamlib Python bindings are not available. Install your distribution's "
            "python3-hamlib package, or use --rigctld / --mock."
        ) from exc
    return Hamlib


def list_models(hamlib: Any) -> list[tuple[int, str]]:
    """Return (model id, name) pairs for every model the bindings know."""
    models: dict[int, str] = {}
    for attr in dir(hamlib):
        if not attr.startswith(MODEL_PREFIX):
            continue
        value = getattr(hamlib, attr)
        if isinstance(value, int) and not isinstance(value, bool):
            models.setdefault(value, attr[len(MODEL_PREFIX) :])
    return sorted(models.items())


def create_sample_source(config: MeterConfig, *, hamlib: Any | None = None) -> SampleSource:
    """Build and open the sample source selected by *config*.

    Raises :class:`RigInitError` or :class:`RigOpenError` for fatal
    startup failures; nothing is left open when they are raised.
    """
    logger.debug("creating sample source %s", config.to_log_string())

    if config.backend == "mock":
        from rigsnr.mock import MockSampleSource

        return MockSampleSource()

    if config.backend == "rigctld":
        remote = RigctldSampleSource(config.rigctld_host, config.rigctld_port)
        remote.open()
        return remote

    source = HamlibSampleSource(hamlib if hamlib is not None else import_hamlib())
    source.set_debug_verbosity(config.hamlib_debug)
    try:
        source.initialize(config.model)
        source.open(config.port, config.baud)
    except RigError:
        source.close()
        raise
    return source
