from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from dataclasses import replace
from typing import List, Optional

from ..printing import PrintJobBuilder, PrintSettings
from ..protocol.job import DEFAULT_FEED_LINES
from ..protocol.types import DEFAULT_THRESHOLD, DEFAULT_WIDTH, TrimSettings
from ..transport.profile import PROFILES, TransportProfile, get_profile
from ..transport.transmitter import send

DEVICE_ENV_VAR = "RASTERPRINT_DEVICE"

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Print an image on an ESC/POS thermal printer over Bluetooth LE or a serial port."
    )
    parser.add_argument("path", help="Image to print (.png/.jpg/.gif/.bmp/.webp)")
    dest = parser.add_mutually_exclusive_group()
    dest.add_argument("--bluetooth", metavar="ADDRESS", help="BLE address of the printer")
    dest.add_argument(
        "--serial",
        metavar="PORT",
        help=f"Serial port of the printer (default: ${DEVICE_ENV_VAR})",
    )
    dest.add_argument("--output", metavar="FILE", help="Write the command stream to a file instead of printing")
    parser.add_argument("--width", type=int, default=DEFAULT_WIDTH, help="Print width in dots (default: %(default)s)")
    parser.add_argument(
        "--threshold", type=int, default=DEFAULT_THRESHOLD, help="Ink threshold 0-255 (default: %(default)s)"
    )
    parser.add_argument("--auto-trim", action="store_true", help="Crop to the non-white content before scaling")
    parser.add_argument("--trim-padding", type=int, default=TrimSettings().padding, help=argparse.SUPPRESS)
    parser.add_argument(
        "--feed", type=int, default=DEFAULT_FEED_LINES, help="Lines to feed after the image (default: %(default)s)"
    )
    parser.add_argument("--cut", action="store_true", help="Cut the paper after feeding")
    parser.add_argument("--initialize", action="store_true", help="Reset the printer before the image")
    parser.add_argument(
        "--profile", choices=sorted(PROFILES), default="normal", help="Transfer speed profile (default: %(default)s)"
    )
    parser.add_argument("--chunk-size", type=int, help="Override the profile's chunk size in bytes")
    parser.add_argument("--delay-ms", type=int, help="Override the profile's delay between chunks")
    parser.add_argument("--preview", metavar="FILE", help="Save the monochrome preview as an image")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every transfer step")
    return parser.parse_args(argv)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def settings_from_args(args: argparse.Namespace) -> PrintSettings:
    return PrintSettings(
        width=args.width,
        threshold=args.threshold,
        auto_trim=args.auto_trim,
        trim=TrimSettings(padding=args.trim_padding),
        feed_lines=args.feed,
        cut=args.cut,
        initialize=args.initialize,
    )


def profile_from_args(args: argparse.Namespace) -> TransportProfile:
    profile = get_profile(args.profile)
    overrides = {}
    if args.chunk_size is not None:
        overrides["chunk_size"] = args.chunk_size
    if args.delay_ms is not None:
        overrides["inter_chunk_delay_ms"] = args.delay_ms
    if overrides:
        profile = replace(profile, **overrides)
    profile.validate()
    return profile


def _log_progress(sent: int, total: int) -> None:
    logger.debug("%d/%d bytes sent", sent, total)


def print_bluetooth(address: str, data: bytes, profile: TransportProfile) -> int:
    from ..transport.bluetooth import connect_ble

    async def run() -> None:
        async with connect_ble(address) as sink:
            await send(data, sink, sink.fit_profile(profile), _log_progress)

    asyncio.run(run())
    return 0


def print_serial(port: str, data: bytes, profile: TransportProfile) -> int:
    from ..transport.serial import SerialWriteSink

    async def run() -> None:
        with SerialWriteSink(port) as sink:
            await send(data, sink, profile, _log_progress)

    asyncio.run(run())
    return 0


def write_output(path: str, data: bytes) -> int:
    with open(path, "wb") as handle:
        handle.write(data)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)
    serial_port = args.serial or os.environ.get(DEVICE_ENV_VAR)
    if not (args.bluetooth or serial_port or args.output):
        print(
            f"Missing destination: use --bluetooth, --serial, --output or set ${DEVICE_ENV_VAR}.",
            file=sys.stderr,
        )
        return 2
    try:
        builder = PrintJobBuilder(settings_from_args(args))
        result = builder.rasterize_file(args.path)
        if args.preview:
            result.bitmap.to_image().save(args.preview)
        data = builder.build_from_result(result)
        logger.info("Encoded %dx%d image into %d bytes", result.bitmap.width, result.bitmap.height, len(data))
        if args.output:
            return write_output(args.output, data)
        profile = profile_from_args(args)
        if args.bluetooth:
            return print_bluetooth(args.bluetooth, data, profile)
        return print_serial(serial_port, data, profile)
    except Exception as exc:
        print(str(exc), file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
