"""XP and level progression."""

from dataclasses import dataclass

XP_PER_READING = 50
XP_PER_LEVEL = 500


@dataclass(frozen=True)
class LevelProgress:
    """Level derived from accumulated XP."""

    xp: int
    level: int
    next_level_xp: int
    progress: float


def level_progress(xp: int) -> LevelProgress:
    """Return the linear level for an XP total."""
    xp = max(xp, 0)
    level = xp // XP_PER_LEVEL + 1
    return LevelProgress(
        xp=xp,
        level=level,
        next_level_xp=level * XP_PER_LEVEL,
        progress=(xp % XP_PER_LEVEL) / XP_PER_LEVEL,
    )
