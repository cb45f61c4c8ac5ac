import logging
import time

import serial

from vdc_export.drivers.veroval.constants import (
    COMMAND_SETTLE_SECONDS,
    ENQ,
    ENQUIRY_SETTLE_SECONDS,
    ETX,
    MAX_RESPONSE_BYTES,
    STX,
)
from vdc_export.drivers.veroval.exceptions import (
    NegativeAcknowledgementError,
    TransportError,
    TruncatedResponseError,
    UnexpectedAcknowledgementError,
)
from vdc_export.drivers.veroval.responses import Acknowledgement, AcknowledgementKind

logger = logging.getLogger(__name__)


class SerialTransport:
    """ Runs one framed request/response exchange at a time on a serial connection

    The exchange with the device is strictly:

     1. open the connection if it isn't open
     2. send STX, the command, ETX
     3. wait COMMAND_SETTLE_SECONDS
     4. read a 1 byte acknowledgement
     5. send ENQ to ask for the payload
     6. wait ENQUIRY_SETTLE_SECONDS
     7. on a positive acknowledgement, read up to MAX_RESPONSE_BYTES of payload
     8. close the connection, whatever happened

    The connection is closed after every exchange, so a retry always starts from a
    freshly opened port.
    """

    def __init__(self, connection: serial.Serial):
        self.connection = connection

    def exchange(self, command: bytes) -> bytes:
        """ Send a command and return the raw payload the device responds with

        Args:
            command: command bytes without STX/ETX framing

        Returns:
            raw response bytes, at most MAX_RESPONSE_BYTES long

        Raises:
            TransportError if the connection can't be opened, written or read, or no acknowledgement arrives
            NegativeAcknowledgementError if the device rejected the command
            UnexpectedAcknowledgementError if the device sent anything else instead of an acknowledgement
        """
        try:
            if not self.connection.is_open:
                self.connection.open()

            return self._send_framed_command_and_read_payload(command)

        except serial.SerialException as e:
            raise TransportError(
                f"Serial communication on {self.connection.port} failed: {e}"
            ) from e

        finally:
            self.connection.close()

    def _send_framed_command_and_read_payload(self, command: bytes) -> bytes:
        port = self.connection.port
        logger.debug(f"Serial command on {port}: {command!r}")

        self.connection.write(STX)
        self.connection.write(command)
        self.connection.write(ETX)
        time.sleep(COMMAND_SETTLE_SECONDS)

        try:
            acknowledgement, _ = Acknowledgement.decode(self.connection.read(1))
        except TruncatedResponseError as e:
            raise TransportError(
                f"No acknowledgement received on {port} for {command!r}"
            ) from e
        logger.debug(f"Acknowledgement on {port}: 0x{acknowledgement.flag:02x}")

        self.connection.write(ENQ)
        time.sleep(ENQUIRY_SETTLE_SECONDS)

        kind = acknowledgement.classify()
        if kind == AcknowledgementKind.negative:
            raise NegativeAcknowledgementError(
                f"Negative acknowledgement received from the device for {command!r}"
            )
        if kind == AcknowledgementKind.other:
            raise UnexpectedAcknowledgementError(acknowledgement.flag)

        response = self.connection.read(MAX_RESPONSE_BYTES)
        logger.debug(f"Serial response on {port}: {len(response)} bytes")

        return response
