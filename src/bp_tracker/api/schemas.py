"""Pydantic models for API request payloads."""

from pydantic import BaseModel, Field


class ReadingCreate(BaseModel):
    """Manual reading payload; ``timestamp`` is epoch milliseconds."""

    systolic: int = Field(gt=0)
    diastolic: int = Field(gt=0)
    timestamp: int | None = None
    note: str | None = None


class SyncedReading(BaseModel):
    """Reading exported by the health-data provider."""

    systolic: int
    diastolic: int
    timestamp: int
    note: str | None = None


class ImportRequest(BaseModel):
    """Batch of synced readings."""

    readings: list[SyncedReading] = Field(default_factory=list)
