"""Supabase repository for XP and reminder state."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from bp_tracker.services.readings import ProgressRepository

# Single-user app: all progress lives in one row.
PROGRESS_ROW_ID = 1


@dataclass
class SupabaseProgressRepository(ProgressRepository):
    """Supabase implementation for user progress."""

    client: Client

    def get_xp(self) -> int:
        """Return stored XP or zero."""
        row = self._get_row()
        if row is None:
            return 0
        return int(row.get("xp") or 0)

    def add_xp(self, amount: int) -> int:
        """Add XP to the stored total."""
        total = self.get_xp() + amount
        self._upsert({"xp": total})
        return total

    def get_last_congratulated_at(self) -> datetime | None:
        """Return the last congratulation time if any."""
        row = self._get_row()
        raw = row.get("last_congratulated_at") if row else None
        if isinstance(raw, str) and raw:
            return datetime.fromisoformat(raw)
        return None

    def set_last_congratulated_at(self, moment: datetime) -> None:
        """Persist the last congratulation time."""
        self._upsert({"last_congratulated_at": moment.isoformat()})

    def clear_progress(self) -> None:
        """Reset XP and congratulation state."""
        self._upsert({"xp": 0, "last_congratulated_at": None})

    def _get_row(self) -> dict[str, object] | None:
        response = (
            self.client.table("user_progress")
            .select("xp, last_congratulated_at")
            .eq("id", PROGRESS_ROW_ID)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0]

    def _upsert(self, values: dict[str, object]) -> None:
        self.client.table("user_progress").upsert(
            {
                "id": PROGRESS_ROW_ID,
                **values,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).execute()
