import logging

from vdc_export.drivers.veroval.commands import (
    build_count_command,
    build_observations_command,
)
from vdc_export.drivers.veroval.exceptions import (
    CountMismatchError,
    NoObservationsError,
)
from vdc_export.drivers.veroval.responses import ObservationCount, ObservationSet
from vdc_export.drivers.veroval.transport import SerialTransport

logger = logging.getLogger(__name__)


class VerovalDevice:
    """ Reads stored measurements from a Veroval duo control monitor

    Not safe for concurrent use: exchanges on the same transport must be serialized.
    """

    def __init__(self, transport: SerialTransport):
        self.transport = transport

    def fetch_observation_count(self, user: int) -> ObservationCount:
        """ Ask the device how many observations it holds for a user slot

        Raises:
            InvalidUserError if user isn't 1 or 2
            plus anything SerialTransport.exchange or ObservationCount.decode raise
        """
        command = build_count_command(user)
        raw_response = self.transport.exchange(command)
        observation_count, _ = ObservationCount.decode(raw_response)

        logger.info(
            f"Device reports {observation_count.value()} observations for user #{user}"
        )
        return observation_count

    def fetch_observations(self, user: int) -> ObservationSet:
        """ Fetch every stored observation for a user slot

        The count is fetched first and compared with the number of records actually
        decoded, so a payload that was cut short or padded never gets through.

        Raises:
            NoObservationsError if the device holds no observations for the user;
                no observations request is sent in that case
            CountMismatchError if the decoded record count differs from the declared count
            plus anything fetch_observation_count or ObservationSet.decode raise
        """
        expected_count = self.fetch_observation_count(user).value()
        if expected_count == 0:
            raise NoObservationsError(user)

        command = build_observations_command(user)
        raw_response = self.transport.exchange(command)
        observation_set, _ = ObservationSet.decode(raw_response)

        actual_count = len(observation_set.observations)
        if actual_count != expected_count:
            raise CountMismatchError(expected_count, actual_count)

        logger.info(f"Decoded {actual_count} observations for user #{user}")
        return observation_set
