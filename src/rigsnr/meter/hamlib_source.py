from __future__ import annotations

import logging
from typing import Any

from rigsnr.core.errors import RigInitError, RigOpenError, SampleReadError

logger = logging.getLogger(__name__)


class HamlibSampleSource:
    """S-meter readings straight from a serial rig through the Hamlib bindings.

    *hamlib* is the imported ``Hamlib`` module (see
    :func:`rigsnr.meter.runtime.import_hamlib`). It is passed in rather
    than imported here so tests can hand over a stand-in.
    """

    def __init__(self, hamlib: Any) -> None:
        self._hamlib = hamlib
        self._rig: Any | None = None
        self._opened = False

    def set_debug_verbosity(self, level: int) -> None:
        self._hamlib.rig_set_debug(level)

    def initialize(self, model: int) -> None:
        try:
            rig = self._hamlib.Rig(model)
        except (RuntimeError, TypeError, ValueError) as exc:
            raise RigInitError(f"Unable to init rig model {model} (wrong rig selection?)") from exc
        if rig is None or getattr(rig, "rig", True) is None:
            raise RigInitError(f"Unable to init rig model {model} (wrong rig selection?)")
        self._rig = rig
        logger.debug("hamlib rig initialised for model %d", model)

    def open(self, port: str, baud: int) -> None:
        rig = self._require_rig()
        rig.set_conf("rig_pathname", port)
        rig.set_conf("serial_speed", str(baud))
        rig.open()
        status = rig.error_status
        if status != self._hamlib.RIG_OK:
            raise RigOpenError(f"rig_open: error = {self._hamlib.rigerror(status)}")
        self._opened = True
        logger.debug("hamlib rig opened on %s at %d baud", port, baud)

    def read_strength(self) -> int:
        rig = self._require_rig()
        value = rig.get_level_i(self._hamlib.RIG_LEVEL_STRENGTH, self._hamlib.RIG_VFO_CURR)
        status = rig.error_status
        if status != self._hamlib.RIG_OK:
            raise SampleReadError(f"get strength: {self._hamlib.rigerror(status)}")
        return int(value)

    def close(self) -> None:
        if self._rig is None:
            return
        if self._opened:
            self._rig.close()
            self._opened = False
        self._rig = None

    def _require_rig(self) -> Any:
        if self._rig is None:
            raise RuntimeError("Rig is not initialised.")
        return self._rig
