from __future__ import annotations

import argparse
import importlib.metadata
import sys
import traceback
from typing import Sequence

from rigsnr.core.errors import RigError


def build_parser() -> argparse.ArgumentParser:
    from rigsnr.radio_cli import add_meter_args, register_subcommands

    parser = argparse.ArgumentParser(
        prog="rigsnr",
        description="Live SNR/DNR readout from a Hamlib rig's S-meter",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=importlib.metadata.version("rigsnr"),
    )
    add_meter_args(parser)

    sub = parser.add_subparsers(dest="command")
    register_subcommands(sub)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command != "export-logs":
        from rigsnr.meter.logging_setup import configure_logging

        configure_logging("DEBUG" if args.debug else None)

    from rigsnr.radio_cli import dispatch

    try:
        return dispatch(args, parser)
    except RigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return exc.exit_code
    except Exception as exc:  # noqa: BLE001
        if getattr(args, "debug", False):
            print(f"[debug] error: {exc}", file=sys.stderr)
            traceback.print_exc()
        else:
            print(f"error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
