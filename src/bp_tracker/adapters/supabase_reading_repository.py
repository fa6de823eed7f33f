"""Supabase repository for blood pressure readings."""

from dataclasses import dataclass

from supabase import Client

from bp_tracker.domain.readings import Reading, ReadingSource
from bp_tracker.services.readings import ReadingRepository

_COLUMNS = "id, systolic, diastolic, timestamp_ms, source, note"


@dataclass
class SupabaseReadingRepository(ReadingRepository):
    """Supabase implementation for readings."""

    client: Client

    def list_readings(self, source: ReadingSource | None = None) -> list[Reading]:
        """Return readings ordered by timestamp."""
        query = self.client.table("bp_readings").select(_COLUMNS)
        if source is not None:
            query = query.eq("source", source.value)
        response = query.order("timestamp_ms", desc=False).execute()
        return [_parse_row(row) for row in response.data or []]

    def add_reading(self, reading: Reading) -> Reading:
        """Insert a reading and return it with its id."""
        response = (
            self.client.table("bp_readings").insert(_to_row(reading)).execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create reading")
        return _parse_row(response.data[0])

    def add_readings(self, readings: list[Reading]) -> None:
        """Insert readings in one request."""
        if not readings:
            return
        self.client.table("bp_readings").insert(
            [_to_row(reading) for reading in readings]
        ).execute()

    def clear_readings(self) -> None:
        """Delete every stored reading."""
        self.client.table("bp_readings").delete().not_.is_("id", "null").execute()


def _to_row(reading: Reading) -> dict[str, object]:
    return {
        "systolic": reading.systolic,
        "diastolic": reading.diastolic,
        "timestamp_ms": reading.timestamp,
        "source": reading.source.value,
        "note": reading.note,
    }


def _parse_row(row: dict[str, object]) -> Reading:
    raw_id = row.get("id")
    return Reading(
        id=str(raw_id) if raw_id is not None else None,
        systolic=int(row.get("systolic", 0)),
        diastolic=int(row.get("diastolic", 0)),
        timestamp=int(row.get("timestamp_ms", 0)),
        source=ReadingSource(row.get("source") or ReadingSource.MANUAL.value),
        note=row.get("note"),
    )
