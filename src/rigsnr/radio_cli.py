from __future__ import annotations

import argparse
import logging
import socket
import sys

from rigsnr.meter.config import MeterConfig, load_meter_config, parse_rigctld_address
from rigsnr.meter.renderer import ERASE_STRATEGIES, LineRenderer
from rigsnr.meter.runtime import create_sample_source, import_hamlib, list_models
from rigsnr.meter.session import MeterSession
from rigsnr.platform.serial_ports import available_ports, port_present
from rigsnr.platform.terminal import TerminalKeySource

logger = logging.getLogger(__name__)

KEY_HINT = "Enter: reset extremes  Ctrl+C: quit"


def _rigctld_address(value: str) -> tuple[str, int]:
    try:
        return parse_rigctld_address(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid rigctld address {value!r}") from exc


def add_link_args(p: argparse.ArgumentParser, *, inherit: bool = False) -> None:
    """Add the rig link options.

    With *inherit* the options leave no default behind, so a subcommand
    keeps whatever the top-level parser already collected for them.
    """
    unset = argparse.SUPPRESS if inherit else None
    p.add_argument("-m", "--model", type=int, default=unset, help="Hamlib rig model id")
    p.add_argument("-r", "--port", default=unset, help="Serial device of the rig")
    p.add_argument("-s", "--baud", type=int, default=unset, help="Serial baud rate")
    p.add_argument(
        "--rigctld",
        type=_rigctld_address,
        default=unset,
        metavar="HOST[:PORT]",
        help="Read the S-meter through a running rigctld instead of the serial port",
    )
    p.add_argument(
        "--mock",
        action="store_true",
        default=argparse.SUPPRESS if inherit else False,
        help="Use a simulated S-meter",
    )


def add_meter_args(p: argparse.ArgumentParser) -> None:
    add_link_args(p)
    p.add_argument(
        "--interval", type=float, default=None, metavar="MS", help="Poll interval (default 20)"
    )
    p.add_argument(
        "--ceiling", type=float, default=None, help="Starting low extreme after a reset (default 200)"
    )
    p.add_argument(
        "--offset", type=int, default=None, help="Offset added to raw readings (default 55)"
    )
    p.add_argument(
        "--hamlib-debug",
        dest="hamlib_debug",
        type=int,
        default=None,
        metavar="LEVEL",
        help="Hamlib debug verbosity (default 0, silent)",
    )
    p.add_argument(
        "--erase",
        choices=sorted(ERASE_STRATEGIES),
        default="backspace",
        help="How the readout overwrites itself",
    )
    p.add_argument("-l", "--list", action="store_true", help="List known rig models and exit")
    p.add_argument("--debug", action="store_true", help="Enable verbose debug logs")


def register_subcommands(sub: argparse._SubParsersAction) -> None:
    doctor = sub.add_parser("doctor", help="Check host prerequisites for reading the rig")
    add_link_args(doctor, inherit=True)

    export = sub.add_parser("export-logs", help="Export application logs for bug reports")
    export.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write logs to file (default: stdout)",
    )


def resolve_config(args: argparse.Namespace) -> MeterConfig:
    """Merge environment defaults with command-line overrides."""
    config = load_meter_config()
    interval_ms = getattr(args, "interval", None)
    backend = None
    host = port = None
    if getattr(args, "rigctld", None) is not None:
        backend = "rigctld"
        host, port = args.rigctld
    if getattr(args, "mock", False):
        backend = "mock"
    config = config.with_overrides(
        model=args.model,
        port=args.port,
        baud=args.baud,
        interval=interval_ms / 1000 if interval_ms is not None else None,
        ceiling=getattr(args, "ceiling", None),
        offset=getattr(args, "offset", None),
        hamlib_debug=getattr(args, "hamlib_debug", None),
        backend=backend,
        rigctld_host=host,
        rigctld_port=port,
    )
    config.validate()
    return config


def _list_models() -> int:
    for model_id, name in list_models(import_hamlib()):
        print(f"{model_id:>6}  {name}")
    return 0


def _doctor(config: MeterConfig) -> int:
    checks: list[tuple[str, bool, str]] = []

    if config.backend == "hamlib":
        try:
            import_hamlib()
            checks.append(("hamlib", True, "Python bindings import succeeded"))
        except RuntimeError as exc:
            checks.append(("hamlib", False, str(exc)))

        ports = available_ports()
        found = port_present(config.port, ports)
        known = ", ".join(p.device for p in ports) or "none"
        checks.append(("serial", found, f"Expected {config.port} (found: {known})"))
    elif config.backend == "rigctld":
        address = f"{config.rigctld_host}:{config.rigctld_port}"
        try:
            with socket.create_connection((config.rigctld_host, config.rigctld_port), timeout=2.0):
                pass
            checks.append(("rigctld", True, f"Connected to {address}"))
        except OSError as exc:
            checks.append(("rigctld", False, f"Cannot reach {address}: {exc}"))
    else:
        checks.append(("mock", True, "Simulated S-meter needs no hardware"))

    checks.append(
        ("tty", sys.stdin.isatty(), "stdin should be a terminal for Enter/Ctrl+C control")
    )

    ok = True
    for name, passed, detail in checks:
        label = "OK" if passed else "FAIL"
        print(f"[{label}] {name}: {detail}")
        if not passed:
            ok = False
    return 0 if ok else 1


def _export_logs(output: str | None) -> int:
    from rigsnr.meter.logging_setup import export_logs_to_path, export_logs_to_stdout

    if output:
        export_logs_to_path(output)
        print(f"Logs written to {output}")
    else:
        export_logs_to_stdout()
    return 0


def run_meter(config: MeterConfig, *, erase: str = "backspace") -> int:
    logger.info("starting meter: %s", config.to_log_string())
    source = create_sample_source(config)
    renderer = LineRenderer(sys.stdout, erase=ERASE_STRATEGIES[erase])
    try:
        with TerminalKeySource() as keys:
            print(KEY_HINT, file=sys.stderr, flush=True)
            session = MeterSession(config, source, renderer, keys)
            session.run()
            status = session.status()
    finally:
        source.close()
    logger.info("meter stopped after %s samples", status["samples"])
    return 0


def dispatch(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    if args.command == "export-logs":
        return _export_logs(args.output)

    try:
        config = resolve_config(args)
    except ValueError as exc:
        parser.error(str(exc))

    if args.command == "doctor":
        return _doctor(config)
    if args.command is None:
        if args.list:
            return _list_models()
        return run_meter(config, erase=args.erase)
    raise RuntimeError(f"Unsupported command: {args.command}")
