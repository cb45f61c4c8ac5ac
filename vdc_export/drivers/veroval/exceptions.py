class VerovalError(Exception):
    # Base class for everything that can go wrong talking to the device
    pass


class InvalidUserError(VerovalError, ValueError):
    # Error class used when a user slot other than 1 or 2 is requested
    pass


class FieldValidationError(VerovalError, ValueError):
    """ Raised when a fixed-width field isn't a non-negative integer within its expected range """

    def __init__(self, field_name, raw, minimum, maximum):
        self.field_name = field_name
        self.raw = raw
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(
            f"{field_name} field {raw!r} is not an integer in the expected range {minimum}-{maximum}"
        )


class TruncatedResponseError(VerovalError, ValueError):
    # Error class used when a response ends before a complete header or record
    pass


class TransportError(VerovalError):
    # Error class used when the serial connection can't be opened, written or read
    pass


class AcknowledgementError(VerovalError):
    # Base class for a non-positive acknowledgement from the device
    pass


class NegativeAcknowledgementError(AcknowledgementError):
    pass


class UnexpectedAcknowledgementError(AcknowledgementError):
    def __init__(self, flag):
        self.flag = flag
        super().__init__(
            f"Unexpected acknowledgement byte 0x{flag:02x} received from the device"
        )


class CountMismatchError(VerovalError):
    # Error class used when the device's declared count disagrees with the records it sent
    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected {expected} observations but received {actual}")


class NoObservationsError(VerovalError):
    def __init__(self, user):
        self.user = user
        super().__init__(f"No observations available for user #{user}")
