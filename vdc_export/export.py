import sys
from typing import IO, Optional

import pandas as pd

from .drivers.veroval import ObservationSet

CSV_COLUMNS = [
    "User",
    "Date",
    "Hour",
    "Regular Heart Beat",
    "Systolic",
    "Diastolic",
    "Pulse",
    "Body Movement",
    "Incorrect Cuff Wrapping",
    "Unsuitable Temperature",
    "Usable Measurement",
]


def observations_to_dataframe(
    user: int, observation_set: ObservationSet
) -> pd.DataFrame:
    """ One row per observation, in device order. Values are assumed already validated. """
    rows = [
        [
            user,
            observation.date.isoformat(),
            observation.time_of_day.strftime("%H:%M"),
            observation.regular_heart_beat,
            observation.systolic,
            observation.diastolic,
            observation.pulse,
            observation.body_movement,
            observation.incorrect_cuff_wrapping,
            observation.unsuitable_temperature,
            observation.usable,
        ]
        for observation in observation_set.observations
    ]
    return pd.DataFrame(rows, columns=CSV_COLUMNS)


def write_csv(observations_df: pd.DataFrame, output: Optional[IO] = None) -> None:
    """
        Write observations as csv with a header row

        Args:
            observations_df: DataFrame from observations_to_dataframe
            output: file-like object or path to write to
    """
    observations_df.to_csv(output if output is not None else sys.stdout, index=False)
