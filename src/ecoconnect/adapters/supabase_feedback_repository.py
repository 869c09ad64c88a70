"""Supabase-backed feedback repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from ecoconnect.domain.feedback import FeedbackRecord
from ecoconnect.services.feedback import FeedbackRepository


@dataclass
class SupabaseFeedbackRepository(FeedbackRepository):
    """Supabase implementation for feedback persistence."""

    client: Client
    table: str = "feedback"

    def create_feedback(
        self,
        item_id: str,
        rating: int,
        comment: str | None,
        was_helpful: bool | None,
    ) -> FeedbackRecord:
        """Create a feedback row and return it."""
        response = (
            self.client.table(self.table)
            .insert(
                {
                    "item_id": item_id,
                    "rating": rating,
                    "comment": comment,
                    "was_helpful": was_helpful,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create feedback")
        row = response.data[0]
        return FeedbackRecord(
            id=UUID(row["id"]),
            item_id=row["item_id"],
            rating=row["rating"],
            comment=row.get("comment"),
            was_helpful=row.get("was_helpful"),
            created_at=datetime.fromisoformat(row["created_at"]),
        )
