"""Serial port discovery for rig links."""

from __future__ import annotations

import os
from dataclasses import dataclass

from serial.tools import list_ports


@dataclass(frozen=True, slots=True)
class SerialPortInfo:
    device: str
    description: str
    hwid: str


def available_ports() -> list[SerialPortInfo]:
    return [
        SerialPortInfo(device=port.device, description=port.description, hwid=port.hwid)
        for port in sorted(list_ports.comports(), key=lambda p: p.device)
    ]


def port_present(device: str, ports: list[SerialPortInfo] | None = None) -> bool:
    """Return True if *device* is an enumerated serial port.

    Symlinks such as ``/dev/serial/by-id/...`` are resolved before the
    comparison.
    """
    if ports is None:
        ports = available_ports()
    candidates = {device, os.path.realpath(device)}
    return any(p.device in candidates or os.path.realpath(p.device) in candidates for p in ports)
