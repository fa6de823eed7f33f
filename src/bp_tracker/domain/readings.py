"""Domain models for blood pressure readings."""

from dataclasses import dataclass
from enum import Enum


class ReadingSource(str, Enum):
    """Where a reading came from."""

    MANUAL = "manual"
    HEALTH_CONNECT = "health_connect"


@dataclass(frozen=True)
class Reading:
    """One timestamped blood pressure measurement.

    ``timestamp`` is milliseconds since the Unix epoch.
    """

    systolic: int
    diastolic: int
    timestamp: int
    source: ReadingSource = ReadingSource.MANUAL
    id: str | None = None
    note: str | None = None
