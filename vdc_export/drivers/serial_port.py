import logging

import serial

logger = logging.getLogger(__name__)


def get_serial_connection(
    port: str, baud_rate: int = 9600, timeout: float = 0
) -> serial.Serial:
    """ Build a serial connection handle for a port without opening it

    The handle is owned by the caller and passed to whatever needs to talk on it;
    that code is responsible for opening it (if it isn't already) and closing it.

    Args:
        port: serial port or pyserial URL to use, e.g. "COM3" or "/dev/ttyACM0"
        baud_rate: baud rate for serial connection
        timeout: read timeout in seconds. Default: 0, i.e. reads return whatever is
            already buffered without waiting.

    Returns:
        an unopened serial.Serial

    Raises:
        ValueError if parameters are out of range, e.g. baud rate etc.
    """
    logger.debug(f"Preparing serial connection on {port} at {baud_rate} baud")

    return serial.serial_for_url(
        port, baudrate=baud_rate, timeout=timeout, do_not_open=True
    )
