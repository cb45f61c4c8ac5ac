# Fixed-width ASCII field decoding shared by every Veroval response record
import collections
import string

from vdc_export.drivers.veroval.exceptions import (
    FieldValidationError,
    TruncatedResponseError,
)


Field = collections.namedtuple(
    "Field",
    [
        "name",
        "width",  # number of ASCII characters on the wire
        "minimum",  # inclusive
        "maximum",  # inclusive
    ],
)

# Bytes the device sends that we step over without decoding
Padding = collections.namedtuple("Padding", ["width"])


def flag_field(name: str) -> Field:
    return Field(name, width=1, minimum=0, maximum=1)


def layout_width(layout) -> int:
    return sum(field.width for field in layout)


def decode_field(field: Field, data: bytes, offset: int = 0) -> int:
    """ Decode a fixed-width ASCII decimal field into an integer, enforcing its range

    Args:
        field: Field describing the width and inclusive range
        data: byte string containing the field
        offset: index of the field's first byte within data

    Returns:
        the decoded integer

    Raises:
        TruncatedResponseError if data ends before the field does
        FieldValidationError if the field isn't all digits or is outside the field's range
    """
    raw = data[offset : offset + field.width]
    if len(raw) < field.width:
        raise TruncatedResponseError(
            f"{field.name} field needs {field.width} bytes at offset {offset} "
            f"but only {len(raw)} remain"
        )

    raw_text = raw.decode("ascii", errors="replace")
    # str.isdigit() accepts non-ASCII digits, so check against the ASCII set explicitly
    if not all(char in string.digits for char in raw_text):
        raise FieldValidationError(field.name, raw_text, field.minimum, field.maximum)

    value = int(raw_text)
    if not field.minimum <= value <= field.maximum:
        raise FieldValidationError(field.name, raw_text, field.minimum, field.maximum)

    return value


def encode_field(field: Field, value: int) -> bytes:
    """ Inverse of decode_field: zero-pad an in-range integer to the field's width """
    if not field.minimum <= value <= field.maximum:
        raise FieldValidationError(field.name, str(value), field.minimum, field.maximum)

    return f"{value:0{field.width}d}".encode("ascii")
