import argparse
import sys
from collections import namedtuple

from typing import Dict, List

from .drivers.veroval.constants import DEFAULT_BAUD_RATE, VALID_USERS

# The device shows up as a USB CDC ACM serial port
DEFAULT_DEVICE = "COM3" if sys.platform == "win32" else "/dev/ttyACM0"
DEFAULT_USER = 1

ExportConfiguration = namedtuple(
    "ExportConfiguration",
    [
        "device",
        "user",
        "output_csv_filepath",  # None means stdout
        "baud_rate",
        "retries",
        "count_only",
        "verbose",
    ],
)


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"{value} is not a non-negative integer")
    return number


def _parse_args(args: List[str]) -> Dict:
    arg_parser = argparse.ArgumentParser(
        description=(
            "Export blood pressure measurements stored on a Veroval duo control monitor as CSV"
        ),
        formatter_class=argparse.RawTextHelpFormatter,
    )

    arg_parser.add_argument(
        "device",
        nargs="?",
        default=DEFAULT_DEVICE,
        help=f"serial device the monitor is connected to. Default: {DEFAULT_DEVICE}",
    )

    arg_parser.add_argument(
        "user",
        nargs="?",
        type=int,
        choices=VALID_USERS,
        default=DEFAULT_USER,
        help=f"user slot to export. Default: {DEFAULT_USER}",
    )

    arg_parser.add_argument(
        "-o",
        "--output",
        dest="output_csv_filepath",
        required=False,
        default=None,
        help="csv filepath to write to. Default: stdout",
    )

    arg_parser.add_argument(
        "--baud-rate",
        type=int,
        default=DEFAULT_BAUD_RATE,
        help=f"serial baud rate. Default: {DEFAULT_BAUD_RATE}",
    )

    arg_parser.add_argument(
        "--retries",
        type=_non_negative_int,
        default=0,
        help=(
            "retry a failed exchange this many times, reopening the port each time. "
            "Default: fail on the first error"
        ),
    )

    arg_parser.add_argument(
        "--count-only",
        action="store_true",
        default=False,
        help="print how many observations are stored instead of exporting them",
    )

    arg_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="log serial traffic",
    )

    return vars(arg_parser.parse_args(args))


def get_export_configuration(cli_args: List[str]) -> ExportConfiguration:
    args = _parse_args(cli_args)
    return ExportConfiguration(**args)
