import sys
import logging

from .configure import get_export_configuration
from .drivers.serial_port import get_serial_connection
from .drivers.veroval import (
    AcknowledgementError,
    CountMismatchError,
    SerialTransport,
    TransportError,
    VerovalDevice,
    VerovalError,
)
from .drivers.veroval.exceptions import FieldValidationError, TruncatedResponseError
from .export import observations_to_dataframe, write_csv
from .retry import retry_on_exception

# A fresh exchange might succeed after these. Bad arguments and an empty slot won't change.
_RETRIABLE_ERRORS = (
    TransportError,
    AcknowledgementError,
    FieldValidationError,
    TruncatedResponseError,
    CountMismatchError,
)


def run(cli_args=None):
    if cli_args is None:
        # First argument is the name of the command itself, not an "argument" we want to parse
        cli_args = sys.argv[1:]
    export_configuration = get_export_configuration(cli_args)

    # Logs go to stderr so they never end up in the csv on stdout
    logging_format = "%(asctime)s [%(levelname)s]--- %(message)s"
    logging.basicConfig(
        level=logging.DEBUG if export_configuration.verbose else logging.INFO,
        format=logging_format,
        handlers=[logging.StreamHandler(sys.stderr)],
    )

    user = export_configuration.user
    connection = get_serial_connection(
        export_configuration.device, baud_rate=export_configuration.baud_rate
    )
    device = VerovalDevice(SerialTransport(connection))
    with_retry = retry_on_exception(
        _RETRIABLE_ERRORS, retries=export_configuration.retries
    )

    logging.info(f"Reading user #{user} from {export_configuration.device}")

    try:
        if export_configuration.count_only:
            observation_count = with_retry(device.fetch_observation_count)(user)
            print(observation_count.value())
            return

        observation_set = with_retry(device.fetch_observations)(user)

    except VerovalError as e:
        logging.error(f"Export failed: {e}")
        raise

    write_csv(
        observations_to_dataframe(user, observation_set),
        export_configuration.output_csv_filepath,
    )

    if export_configuration.output_csv_filepath:
        logging.info(
            f"Wrote {len(observation_set.observations)} observations to "
            f"{export_configuration.output_csv_filepath}"
        )
