from .commands import build_count_command, build_observations_command  # noqa: F401
from .device import VerovalDevice  # noqa: F401
from .exceptions import (  # noqa: F401 unused imports
    AcknowledgementError,
    CountMismatchError,
    FieldValidationError,
    InvalidUserError,
    NegativeAcknowledgementError,
    NoObservationsError,
    TransportError,
    TruncatedResponseError,
    UnexpectedAcknowledgementError,
    VerovalError,
)
from .responses import (  # noqa: F401
    Acknowledgement,
    AcknowledgementKind,
    Observation,
    ObservationCount,
    ObservationSet,
)
from .transport import SerialTransport  # noqa: F401
