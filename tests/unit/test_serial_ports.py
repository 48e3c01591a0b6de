from __future__ import annotations

from types import SimpleNamespace

import rigsnr.platform.serial_ports as ports_mod
from rigsnr.platform.serial_ports import SerialPortInfo, available_ports, port_present


def test_available_ports_sorted(monkeypatch) -> None:
    fake = [
        SimpleNamespace(device="/dev/ttyUSB1", description="CP2102", hwid="USB VID:PID=10C4:EA60"),
        SimpleNamespace(device="/dev/ttyUSB0", description="IC-7300", hwid="USB VID:PID=10C4:EA60"),
    ]
    monkeypatch.setattr(ports_mod.list_ports, "comports", lambda: fake)

    ports = available_ports()
    assert [p.device for p in ports] == ["/dev/ttyUSB0", "/dev/ttyUSB1"]
    assert ports[0].description == "IC-7300"


def test_port_present_matches_device_and_symlink(tmp_path) -> None:
    target = tmp_path / "ttyUSB0"
    target.touch()
    link = tmp_path / "usb-Silicon_Labs_CP2102-if00-port0"
    link.symlink_to(target)
    ports = [SerialPortInfo(device=str(target), description="", hwid="")]

    assert port_present(str(target), ports)
    assert port_present(str(link), ports)
    assert not port_present(str(tmp_path / "ttyUSB7"), ports)
