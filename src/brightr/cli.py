from __future__ import annotations

import argparse
import logging
import sys
from typing import Any

from brightr import __version__, config
from brightr.adjust import AdjustConfig, Adjuster, AdjustmentResult
from brightr.errors import BrightrError, InvalidInput
from brightr.locator import DeviceLocator, sysfs_lister
from brightr.logging_config import setup_logging
from brightr.system.backlight import Backlight
from brightr.system.logind import LogindBacklight

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def _common_options() -> argparse.ArgumentParser:
    # SUPPRESS keeps a flag given before the subcommand from being reset by
    # the subparser's copy of the same option.
    common = argparse.ArgumentParser(add_help=False, argument_default=argparse.SUPPRESS)
    dev = common.add_argument_group("device options")
    dev.add_argument(
        "-n",
        "--name",
        help="backlight device to adjust, overriding automatic detection",
    )
    dev.add_argument(
        "-r",
        "--raw",
        action=argparse.BooleanOptionalAction,
        help="use the driver's raw brightness values instead of percentages",
    )
    dev.add_argument(
        "-e",
        "--exponent",
        type=float,
        metavar="N",
        help="map percentages to raw values with this exponent (gamma); default 1 is linear",
    )
    dev.add_argument(
        "-m",
        "--min",
        type=int,
        metavar="RAW",
        help="saturate the bottom of the range at this raw value instead of 0",
    )
    dev.add_argument(
        "--logind",
        action=argparse.BooleanOptionalAction,
        help="write through systemd-logind instead of sysfs (no root needed)",
    )
    common.add_argument(
        "-p",
        "--picky",
        action=argparse.BooleanOptionalAction,
        help="exit non-zero when the device is already at the edge of its range",
    )
    common.add_argument("-c", "--config", help="YAML config file")
    common.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return common


def _build_parser() -> argparse.ArgumentParser:
    common = _common_options()
    ap = argparse.ArgumentParser(
        prog="brightr",
        description="Adjust display backlight. Values are percentages unless -r/--raw is given.",
        parents=[common],
    )
    ap.add_argument("--version", action="version", version=__version__)

    sub = ap.add_subparsers(dest="cmd", required=True)

    sub.add_parser(
        "get",
        parents=[common],
        help='print the current setting as "x/y", where y is the maximum',
    )
    set_ = sub.add_parser("set", parents=[common], help="set the backlight to a specific value")
    set_.add_argument("value", help="new backlight value")
    up = sub.add_parser(
        "up",
        parents=[common],
        help="increase brightness, saturating at the top of the device's range",
    )
    up.add_argument("value", metavar="by", help="amount to increase by")
    down = sub.add_parser(
        "down",
        parents=[common],
        help="decrease brightness, saturating at the minimum level",
    )
    down.add_argument("value", metavar="by", help="amount to decrease by")

    return ap


def _parse_amount(text: str, raw: bool) -> float:
    try:
        return int(text, 10) if raw else float(text)
    except ValueError:
        unit = "an integer" if raw else "a number"
        raise InvalidInput(f"invalid value {text!r}: expected {unit}") from None


def _saturation_message(cmd: str, cfg: dict[str, Any]) -> str:
    if cmd == "up":
        return "cannot increase brightness past range for device"
    if cmd == "down":
        return f"cannot decrease brightness past {cfg['min']}"
    return "can't adjust brightness outside of range of device"


def execute(args: argparse.Namespace) -> int:
    overrides = {
        "name": getattr(args, "name", None),
        "raw": getattr(args, "raw", None),
        "exponent": getattr(args, "exponent", None),
        "min": getattr(args, "min", None),
        "picky": getattr(args, "picky", None),
        "logind": getattr(args, "logind", None),
    }
    cfg = config.merge(config.load(getattr(args, "config", None)), overrides)
    log.debug("effective settings: %s", cfg)

    amount = None
    if args.cmd != "get":
        amount = _parse_amount(args.value, cfg["raw"])

    adjust_cfg = AdjustConfig(
        exponent=float(cfg["exponent"]),
        min_raw=int(cfg["min"]),
        raw_mode=bool(cfg["raw"]),
    )
    locator = DeviceLocator(
        list_devices=sysfs_lister(cfg["sysfs_root"]),
        open_device=LogindBacklight.open if cfg["logind"] else Backlight.open,
    )
    adjuster = Adjuster(locator.locate(cfg["name"]), adjust_cfg)

    if args.cmd == "get":
        current, maximum = adjuster.reading()
        print(f"{current}/{maximum}")
        return EXIT_OK

    result: AdjustmentResult = getattr(adjuster, args.cmd)(amount)
    log.debug("result: %s", result)
    if cfg["picky"] and result.saturated and not result.changed:
        print(f"brightr: {_saturation_message(args.cmd, cfg)}", file=sys.stderr)
        return EXIT_FAILURE
    return EXIT_OK


def run(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    setup_logging(verbose=getattr(args, "verbose", False))
    try:
        return execute(args)
    except BrightrError as e:
        print(f"brightr: {e}", file=sys.stderr)
        return EXIT_FAILURE


def main() -> None:
    sys.exit(run())
