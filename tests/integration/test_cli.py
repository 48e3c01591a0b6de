from __future__ import annotations

import io
import logging
import logging.handlers
from pathlib import Path
from types import SimpleNamespace

import pytest

import rigsnr.meter.logging_setup as log_mod
import rigsnr.radio_cli as cli_mod
from rigsnr.core.errors import RigInitError, RigOpenError
from rigsnr.main import build_parser, main
from rigsnr.mock import ScriptedKeySource, ScriptedSampleSource


@pytest.fixture(autouse=True)
def isolated_logging(tmp_path: Path, monkeypatch):
    log_dir = tmp_path / "state"
    monkeypatch.setattr(log_mod, "LOG_DIR", log_dir)
    monkeypatch.setattr(log_mod, "LOG_FILE", log_dir / "rigsnr.log")
    monkeypatch.setattr(log_mod, "_configured", False)
    monkeypatch.setattr(log_mod, "_stderr_handler", None)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("RIGSNR_MOCK", raising=False)
    monkeypatch.delenv("RIGSNR_BACKEND", raising=False)
    before = list(logging.getLogger().handlers)
    yield log_dir
    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler not in before:
            root.removeHandler(handler)
            handler.close()


class FakeTerminal:
    """Context manager standing in for TerminalKeySource."""

    def __init__(self, keys: list[str]) -> None:
        self._keys = ScriptedKeySource(keys)

    def __call__(self) -> "FakeTerminal":
        return self

    def __enter__(self) -> ScriptedKeySource:
        return self._keys

    def __exit__(self, *exc_info: object) -> None:
        return None


def test_meter_runs_until_cancel_key(monkeypatch, capsys) -> None:
    source = ScriptedSampleSource([-45, -10])
    monkeypatch.setattr(cli_mod, "create_sample_source", lambda config: source)
    monkeypatch.setattr(cli_mod, "TerminalKeySource", FakeTerminal([]))

    # cancel once the script has been consumed
    original_read = source.read_strength

    def read_and_maybe_cancel() -> int:
        if source.exhausted:
            fake_keys = cli_mod.TerminalKeySource._keys
            fake_keys.press("\x03")
        return original_read()

    monkeypatch.setattr(source, "read_strength", read_and_maybe_cancel)

    assert main(["--interval", "1"]) == 0

    captured = capsys.readouterr()
    assert "SNR:    15.04 DNR:    35.00" in captured.out
    assert cli_mod.KEY_HINT in captured.err
    assert source.closed is True


def test_mock_flag_selects_mock_backend(monkeypatch, capsys) -> None:
    monkeypatch.setattr(cli_mod, "TerminalKeySource", FakeTerminal(["\r", "\x03"]))
    assert main(["--mock", "--interval", "5"]) == 0


def test_init_failure_exits_1(monkeypatch, capsys) -> None:
    def fail(config):
        raise RigInitError("Unable to init rig model 999 (wrong rig selection?)")

    monkeypatch.setattr(cli_mod, "create_sample_source", fail)
    assert main(["-m", "999"]) == 1
    assert "Unable to init rig" in capsys.readouterr().err


def test_open_failure_exits_2(monkeypatch, capsys) -> None:
    def fail(config):
        raise RigOpenError("rig_open: error = IO error")

    monkeypatch.setattr(cli_mod, "create_sample_source", fail)
    assert main(["-r", "/dev/ttyNOPE"]) == 2
    assert "rig_open" in capsys.readouterr().err


def test_flags_reach_config(monkeypatch) -> None:
    seen = {}

    def capture(config):
        seen["config"] = config
        raise RigOpenError("stop here")

    monkeypatch.setattr(cli_mod, "create_sample_source", capture)
    main(["-m", "1035", "-r", "/dev/ttyACM0", "-s", "38400", "--interval", "50", "--ceiling", "100"])

    config = seen["config"]
    assert (config.model, config.port, config.baud) == (1035, "/dev/ttyACM0", 38400)
    assert config.interval == pytest.approx(0.05)
    assert config.ceiling == 100.0
    assert config.backend == "hamlib"


def test_rigctld_flag_selects_network_backend(monkeypatch) -> None:
    seen = {}

    def capture(config):
        seen["config"] = config
        raise RigOpenError("stop here")

    monkeypatch.setattr(cli_mod, "create_sample_source", capture)
    assert main(["--rigctld", "shack:4600"]) == 2
    config = seen["config"]
    assert (config.backend, config.rigctld_host, config.rigctld_port) == ("rigctld", "shack", 4600)


@pytest.mark.parametrize(
    "argv",
    [["-s", "fast"], ["-m", "ic7300"], ["--interval", "0"], ["--ceiling", "0"]],
)
def test_malformed_flags_fail_fast_with_usage(argv, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 2
    assert "usage:" in capsys.readouterr().err


def test_list_models(monkeypatch, capsys) -> None:
    fake = SimpleNamespace(RIG_MODEL_DUMMY=1, RIG_MODEL_IC7300=3073)
    monkeypatch.setattr(cli_mod, "import_hamlib", lambda: fake)

    assert main(["-l"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["     1  DUMMY", "  3073  IC7300"]


def test_list_models_without_hamlib(monkeypatch, capsys) -> None:
    def missing():
        raise RuntimeError("Hamlib Python bindings are not available.")

    monkeypatch.setattr(cli_mod, "import_hamlib", missing)
    assert main(["--list"]) == 1
    assert "Hamlib Python bindings" in capsys.readouterr().err


def test_doctor_mock_backend(monkeypatch, capsys) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO())
    assert main(["doctor", "--mock"]) == 1
    out = capsys.readouterr().out
    assert "[OK] mock" in out
    assert "[FAIL] tty" in out


def test_doctor_reports_missing_serial_port(monkeypatch, capsys) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO())
    monkeypatch.setattr(cli_mod, "import_hamlib", lambda: SimpleNamespace())
    monkeypatch.setattr(cli_mod, "available_ports", lambda: [])

    assert main(["doctor", "-r", "/dev/ttyUSB3"]) == 1
    out = capsys.readouterr().out
    assert "[OK] hamlib" in out
    assert "[FAIL] serial: Expected /dev/ttyUSB3 (found: none)" in out


def test_doctor_keeps_link_flags_given_before_it(monkeypatch, capsys) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO())
    monkeypatch.setattr(cli_mod, "import_hamlib", lambda: SimpleNamespace())
    monkeypatch.setattr(cli_mod, "available_ports", lambda: [])

    assert main(["-r", "/dev/ttyACM0", "doctor"]) == 1
    assert "Expected /dev/ttyACM0" in capsys.readouterr().out

    assert main(["-r", "/dev/ttyACM0", "--mock", "doctor"]) == 1
    out = capsys.readouterr().out
    assert "[OK] mock" in out
    assert "serial" not in out


def test_doctor_link_flags_after_subcommand_win() -> None:
    argv = ["-r", "/dev/ttyACM0", "doctor", "-r", "/dev/ttyS2", "-s", "9600"]
    args = build_parser().parse_args(argv)
    config = cli_mod.resolve_config(args)
    assert config.port == "/dev/ttyS2"
    assert config.baud == 9600
    assert config.backend == "hamlib"


def test_export_logs_to_file(isolated_logging: Path, tmp_path: Path, capsys) -> None:
    isolated_logging.mkdir(parents=True)
    (isolated_logging / "rigsnr.log").write_text("hello from the log\n")
    dest = tmp_path / "export.txt"

    assert main(["export-logs", "-o", str(dest)]) == 0
    assert dest.read_text() == "hello from the log\n"
    assert f"Logs written to {dest}" in capsys.readouterr().out
