from enum import Enum

from vdc_export.drivers.veroval.constants import (
    GET_OBSERVATION_COUNT_TEMPLATE,
    GET_OBSERVATIONS_TEMPLATE,
    VALID_USERS,
)
from vdc_export.drivers.veroval.exceptions import InvalidUserError


class VerovalCommand(Enum):
    get_observation_count = GET_OBSERVATION_COUNT_TEMPLATE
    get_observations = GET_OBSERVATIONS_TEMPLATE

    def to_bytes(self, user: int) -> bytes:
        """ Render this command for a user slot, without the STX/ETX framing """
        _validate_user(user)
        return self.value.format(user=user).encode("ascii")


def _validate_user(user: int) -> None:
    # bool is an int subclass, and True == 1, so rule it out explicitly
    if isinstance(user, bool) or not isinstance(user, int) or user not in VALID_USERS:
        raise InvalidUserError(
            f"You must specify either 1 or 2 for the value of user, not {user!r}"
        )


def build_count_command(user: int) -> bytes:
    return VerovalCommand.get_observation_count.to_bytes(user)


def build_observations_command(user: int) -> bytes:
    return VerovalCommand.get_observations.to_bytes(user)
