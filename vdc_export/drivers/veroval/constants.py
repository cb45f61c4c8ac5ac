# Constants required for the Veroval duo control blood pressure monitor

# Framing bytes wrapped around every command
STX = b"\x02"
ETX = b"\x03"
# Sent after the acknowledgement to ask the device to start transmitting its payload
ENQ = b"\x05"

POSITIVE_ACKNOWLEDGEMENT = 0x06
NEGATIVE_ACKNOWLEDGEMENT = 0x15

# The device never sends more than this in a single payload
MAX_RESPONSE_BYTES = 3000

# The device has no timing negotiation: it expects the host to wait these fixed intervals (seconds)
COMMAND_SETTLE_SECONDS = 1
ENQUIRY_SETTLE_SECONDS = 0.5

# Every response starts with a header that carries nothing we use
RESPONSE_HEADER_BYTES = 5

GET_OBSERVATION_COUNT_TEMPLATE = "?MRN{user}"
GET_OBSERVATIONS_TEMPLATE = "?MDR{user}A"

# The device stores measurements for two independent user profiles
VALID_USERS = (1, 2)

MAX_OBSERVATION_COUNT = 100

# The device enumerates as a USB CDC device, so the baud rate is mostly ignored
DEFAULT_BAUD_RATE = 9600
