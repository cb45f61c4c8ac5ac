import pytest

from vdc_export.drivers.veroval import device as module
from vdc_export.drivers.veroval.exceptions import (
    CountMismatchError,
    FieldValidationError,
    InvalidUserError,
    NegativeAcknowledgementError,
    NoObservationsError,
)
from vdc_export.drivers.veroval.responses import Observation

COUNT_HEADER = b"\x02MRN1"
OBSERVATIONS_HEADER = b"\x02MDR1"

FIRST_OBSERVATION = Observation(
    year=21,
    month=3,
    day=14,
    hour=9,
    minute=5,
    regular_heart_beat=1,
    systolic=128,
    diastolic=84,
    pulse=67,
    body_movement=0,
    incorrect_cuff_wrapping=0,
    unsuitable_temperature=0,
    usable=1,
)
SECOND_OBSERVATION = FIRST_OBSERVATION._replace(
    day=15, hour=21, minute=47, systolic=135, diastolic=88, pulse=72, body_movement=1
)
THIRD_OBSERVATION = FIRST_OBSERVATION._replace(day=16)


@pytest.fixture
def mock_transport(mocker):
    return mocker.Mock()


def _observations_response(*observations):
    return OBSERVATIONS_HEADER + b"".join(
        observation.to_bytes() for observation in observations
    )


class TestFetchObservationCount:
    def test_sends_count_command_and_decodes_response(self, mock_transport):
        mock_transport.exchange.return_value = COUNT_HEADER + b"017"

        observation_count = module.VerovalDevice(mock_transport).fetch_observation_count(2)

        assert observation_count.value() == 17
        mock_transport.exchange.assert_called_once_with(b"?MRN2")

    def test_invalid_user_never_reaches_transport(self, mock_transport):
        with pytest.raises(InvalidUserError):
            module.VerovalDevice(mock_transport).fetch_observation_count(3)

        mock_transport.exchange.assert_not_called()

    def test_blows_up_on_out_of_range_count(self, mock_transport):
        mock_transport.exchange.return_value = COUNT_HEADER + b"101"

        with pytest.raises(FieldValidationError):
            module.VerovalDevice(mock_transport).fetch_observation_count(1)


class TestFetchObservations:
    def test_returns_observations_when_count_matches(self, mocker, mock_transport):
        mock_transport.exchange.side_effect = [
            COUNT_HEADER + b"002",
            _observations_response(FIRST_OBSERVATION, SECOND_OBSERVATION),
        ]

        observation_set = module.VerovalDevice(mock_transport).fetch_observations(1)

        assert observation_set.observations == (FIRST_OBSERVATION, SECOND_OBSERVATION)
        assert mock_transport.exchange.call_args_list == [
            mocker.call(b"?MRN1"),
            mocker.call(b"?MDR1A"),
        ]

    @pytest.mark.parametrize(
        "observations",
        [
            (FIRST_OBSERVATION,),
            (FIRST_OBSERVATION, SECOND_OBSERVATION, THIRD_OBSERVATION),
        ],
    )
    def test_blows_up_when_count_differs(self, mock_transport, observations):
        mock_transport.exchange.side_effect = [
            COUNT_HEADER + b"002",
            _observations_response(*observations),
        ]

        with pytest.raises(CountMismatchError) as exc_info:
            module.VerovalDevice(mock_transport).fetch_observations(1)

        assert (exc_info.value.expected, exc_info.value.actual) == (
            2,
            len(observations),
        )

    def test_zero_count_raises_without_fetching_observations(self, mock_transport):
        mock_transport.exchange.return_value = COUNT_HEADER + b"000"

        with pytest.raises(NoObservationsError, match="#2"):
            module.VerovalDevice(mock_transport).fetch_observations(2)

        mock_transport.exchange.assert_called_once_with(b"?MRN2")

    def test_passes_through_transport_errors(self, mock_transport):
        mock_transport.exchange.side_effect = NegativeAcknowledgementError("nope")

        with pytest.raises(NegativeAcknowledgementError):
            module.VerovalDevice(mock_transport).fetch_observations(1)

        mock_transport.exchange.assert_called_once_with(b"?MRN1")

    def test_invalid_record_fails_whole_set(self, mock_transport):
        bad_record = FIRST_OBSERVATION.to_bytes()[:11] + b"991" + FIRST_OBSERVATION.to_bytes()[14:]
        mock_transport.exchange.side_effect = [
            COUNT_HEADER + b"002",
            OBSERVATIONS_HEADER + FIRST_OBSERVATION.to_bytes() + bad_record,
        ]

        with pytest.raises(FieldValidationError, match="systolic"):
            module.VerovalDevice(mock_transport).fetch_observations(1)
