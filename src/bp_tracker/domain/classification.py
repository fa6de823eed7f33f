"""Blood pressure classification."""

from dataclasses import dataclass
from enum import Enum


class BPStatus(str, Enum):
    """Severity tiers, most elevated first."""

    ELEVATED = "Elevated"
    SLIGHTLY_ELEVATED = "Slightly Elevated"
    NORMAL = "Normal"
    SLIGHTLY_LOWER = "Slightly Lower"
    LOWER = "Lower"


ELEVATED_STATUSES = frozenset({BPStatus.ELEVATED, BPStatus.SLIGHTLY_ELEVATED})

STATUS_COLORS: dict[BPStatus, str] = {
    BPStatus.ELEVATED: "#BF616A",
    BPStatus.SLIGHTLY_ELEVATED: "#D08770",
    BPStatus.NORMAL: "#A3BE8C",
    BPStatus.SLIGHTLY_LOWER: "#81A1C1",
    BPStatus.LOWER: "#5E81AC",
}


@dataclass(frozen=True)
class Thresholds:
    """Cutoffs in mmHg.

    High cutoffs are inclusive lower bounds, low cutoffs are exclusive upper
    bounds.
    """

    elevated_systolic: float = 140
    elevated_diastolic: float = 90
    slightly_elevated_systolic: float = 120
    slightly_elevated_diastolic: float = 80
    lower_systolic: float = 90
    lower_diastolic: float = 60
    slightly_lower_systolic: float = 100
    slightly_lower_diastolic: float = 65


DEFAULT_THRESHOLDS = Thresholds()


@dataclass(frozen=True)
class ClassificationResult:
    """Status of a reading with its default display color."""

    status: BPStatus
    color: str

    @property
    def is_healthy(self) -> bool:
        return is_healthy(self.status)


def classify_status(
    systolic: float, diastolic: float, thresholds: Thresholds = DEFAULT_THRESHOLDS
) -> BPStatus:
    """Return the status tier for a systolic/diastolic pair.

    High tiers are checked before low tiers, so a pair that is high on one
    number and low on the other is elevated.
    """
    t = thresholds
    if systolic >= t.elevated_systolic or diastolic >= t.elevated_diastolic:
        return BPStatus.ELEVATED
    if (
        systolic >= t.slightly_elevated_systolic
        or diastolic >= t.slightly_elevated_diastolic
    ):
        return BPStatus.SLIGHTLY_ELEVATED
    if systolic < t.lower_systolic or diastolic < t.lower_diastolic:
        return BPStatus.LOWER
    if systolic < t.slightly_lower_systolic or diastolic < t.slightly_lower_diastolic:
        return BPStatus.SLIGHTLY_LOWER
    return BPStatus.NORMAL


def classify(
    systolic: float, diastolic: float, thresholds: Thresholds = DEFAULT_THRESHOLDS
) -> ClassificationResult:
    """Classify a reading into a status and color."""
    status = classify_status(systolic, diastolic, thresholds)
    return ClassificationResult(status=status, color=STATUS_COLORS[status])


def is_healthy(status: BPStatus) -> bool:
    """Return True unless the status is one of the elevated tiers."""
    return status not in ELEVATED_STATUSES
