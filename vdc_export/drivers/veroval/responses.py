"""
Response records sent by the Veroval duo control blood pressure monitor.

Every response record is ASCII text in fixed-width fields. Acknowledgements are the one
exception: a single raw byte sent right after a command.

Observation count response:

 - Header       5 bytes, skipped
 - Count        3 ASCII digits, 000 to 100

Observations response:

 - Header       5 bytes, skipped
 - Records      one 25 byte Observation per stored measurement, until the end of the payload

Each record type has a `decode(data)` classmethod that returns `(record, bytes_consumed)`.
"""
import calendar
import collections
import datetime
from enum import Enum
from typing import Tuple

from vdc_export.drivers.veroval.constants import (
    MAX_OBSERVATION_COUNT,
    NEGATIVE_ACKNOWLEDGEMENT,
    POSITIVE_ACKNOWLEDGEMENT,
    RESPONSE_HEADER_BYTES,
)
from vdc_export.drivers.veroval.exceptions import (
    FieldValidationError,
    TruncatedResponseError,
)
from vdc_export.drivers.veroval.fields import (
    Field,
    Padding,
    decode_field,
    encode_field,
    flag_field,
    layout_width,
)


class AcknowledgementKind(Enum):
    positive = "positive"
    negative = "negative"
    other = "other"


class Acknowledgement(collections.namedtuple("Acknowledgement", ["flag"])):
    __slots__ = ()

    @classmethod
    def decode(cls, data: bytes) -> Tuple["Acknowledgement", int]:
        if not data:
            raise TruncatedResponseError("Acknowledgement needs 1 byte but none remain")
        return cls(flag=data[0]), 1

    def classify(self) -> AcknowledgementKind:
        if self.flag == POSITIVE_ACKNOWLEDGEMENT:
            return AcknowledgementKind.positive
        if self.flag == NEGATIVE_ACKNOWLEDGEMENT:
            return AcknowledgementKind.negative
        return AcknowledgementKind.other


def _skip_header(data: bytes, record_name: str) -> int:
    if len(data) < RESPONSE_HEADER_BYTES:
        raise TruncatedResponseError(
            f"{record_name} response {data!r} is shorter than its {RESPONSE_HEADER_BYTES} byte header"
        )
    return RESPONSE_HEADER_BYTES


OBSERVATION_COUNT_FIELD = Field(
    "observation_count", width=3, minimum=0, maximum=MAX_OBSERVATION_COUNT
)


class ObservationCount(
    collections.namedtuple("ObservationCount", ["observation_count"])
):
    """ How many observations the device claims to hold for a user """

    __slots__ = ()

    @classmethod
    def decode(cls, data: bytes) -> Tuple["ObservationCount", int]:
        # Anything after the count is ignored
        offset = _skip_header(data, "ObservationCount")
        observation_count = decode_field(OBSERVATION_COUNT_FIELD, data, offset)
        return cls(observation_count), offset + OBSERVATION_COUNT_FIELD.width

    def value(self) -> int:
        return self.observation_count

    def __int__(self):
        return self.observation_count


# Field order and widths as sent by the device
OBSERVATION_LAYOUT = (
    Field("year", width=2, minimum=0, maximum=99),
    Field("month", width=2, minimum=1, maximum=12),
    Field("day", width=2, minimum=1, maximum=31),
    Field("hour", width=2, minimum=0, maximum=23),
    Field("minute", width=2, minimum=0, maximum=59),
    flag_field("regular_heart_beat"),
    Field("systolic", width=3, minimum=0, maximum=990),  # mmHg
    Field("diastolic", width=3, minimum=0, maximum=990),  # mmHg
    Field("pulse", width=3, minimum=0, maximum=990),  # beats/min
    flag_field("body_movement"),
    flag_field("incorrect_cuff_wrapping"),
    flag_field("unsuitable_temperature"),
    Padding(width=1),
    flag_field("usable"),
)

OBSERVATION_WIDTH = layout_width(OBSERVATION_LAYOUT)

_YEAR_OFFSET = 2000


class Observation(
    collections.namedtuple(
        "Observation",
        [field.name for field in OBSERVATION_LAYOUT if isinstance(field, Field)],
    )
):
    """ A single stored blood pressure measurement """

    __slots__ = ()

    @classmethod
    def decode(cls, data: bytes) -> Tuple["Observation", int]:
        if len(data) < OBSERVATION_WIDTH:
            raise TruncatedResponseError(
                f"Observation needs {OBSERVATION_WIDTH} bytes but only {len(data)} remain: {data!r}"
            )

        values = {}
        offset = 0
        for field in OBSERVATION_LAYOUT:
            if isinstance(field, Field):
                values[field.name] = decode_field(field, data, offset)
            offset += field.width

        observation = cls(**values)
        observation._validate_day_of_month()
        return observation, offset

    def to_bytes(self) -> bytes:
        """ The record as the device would send it, with the padding byte as "0" """
        return b"".join(
            encode_field(field, getattr(self, field.name))
            if isinstance(field, Field)
            else b"0" * field.width
            for field in OBSERVATION_LAYOUT
        )

    def _validate_day_of_month(self):
        _, days_in_month = calendar.monthrange(self.full_year, self.month)
        if self.day > days_in_month:
            raise FieldValidationError(
                "day", f"{self.day:02d}", minimum=1, maximum=days_in_month
            )

    @property
    def full_year(self) -> int:
        return self.year + _YEAR_OFFSET

    @property
    def date(self) -> datetime.date:
        return datetime.date(self.full_year, self.month, self.day)

    @property
    def time_of_day(self) -> datetime.time:
        return datetime.time(self.hour, self.minute)


class ObservationSet(collections.namedtuple("ObservationSet", ["observations"])):
    """ Every observation the device sent in one response, in the order it sent them """

    __slots__ = ()

    @classmethod
    def decode(cls, data: bytes) -> Tuple["ObservationSet", int]:
        offset = _skip_header(data, "ObservationSet")

        trailing_bytes = (len(data) - offset) % OBSERVATION_WIDTH
        if trailing_bytes:
            raise TruncatedResponseError(
                f"Observations payload ends with a partial {trailing_bytes} byte record"
            )

        observations = []
        while offset < len(data):
            observation, consumed = Observation.decode(data[offset:])
            observations.append(observation)
            offset += consumed

        return cls(tuple(observations)), offset
