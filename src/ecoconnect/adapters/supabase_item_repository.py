"""Supabase-backed item repository."""

from dataclasses import asdict, dataclass
from datetime import datetime

from supabase import Client

from ecoconnect.domain.categories import coerce_category
from ecoconnect.domain.items import Facility, ItemRecord, Recommendation
from ecoconnect.domain.questions import Question
from ecoconnect.services.items import ItemRepository

_COLUMNS = (
    "id, image_ref, material, item_name, description, condition_estimate, "
    "confidence, category, questions, user_answers, recommendation, "
    "nearby_facilities, created_at"
)


@dataclass
class SupabaseItemRepository(ItemRepository):
    """Supabase implementation for item persistence."""

    client: Client
    table: str = "items"

    def create_item(self, record: ItemRecord) -> str:
        """Insert an item row and return its id."""
        response = self.client.table(self.table).insert(_to_row(record)).execute()
        if not response.data:
            raise RuntimeError("Failed to create item")
        return str(response.data[0]["id"])

    def get_item(self, item_id: str) -> ItemRecord | None:
        """Return an item by id, if present."""
        response = (
            self.client.table(self.table)
            .select(_COLUMNS)
            .eq("id", item_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _from_row(response.data[0])

    def update_item(self, record: ItemRecord) -> None:
        """Overwrite the mutable columns of an item."""
        row = _to_row(record)
        self.client.table(self.table).update(
            {
                "user_answers": row["user_answers"],
                "recommendation": row["recommendation"],
                "nearby_facilities": row["nearby_facilities"],
            }
        ).eq("id", record.id).execute()


def _to_row(record: ItemRecord) -> dict[str, object]:
    return {
        "id": record.id,
        "image_ref": record.image_ref,
        "material": record.material,
        "item_name": record.item_name,
        "description": record.description,
        "condition_estimate": record.condition_estimate,
        "confidence": record.confidence,
        "category": str(record.category),
        "questions": [
            {"id": q.id, "prompt": q.prompt, "options": list(q.options)}
            for q in record.questions
        ],
        "user_answers": record.user_answers,
        "recommendation": (
            asdict(record.recommendation) if record.recommendation else None
        ),
        "nearby_facilities": (
            [asdict(facility) for facility in record.nearby_facilities]
            if record.nearby_facilities is not None
            else None
        ),
        "created_at": record.created_at.isoformat(),
    }


def _from_row(row: dict[str, object]) -> ItemRecord:
    recommendation = row.get("recommendation")
    facilities = row.get("nearby_facilities")
    return ItemRecord(
        id=str(row["id"]),
        image_ref=str(row["image_ref"]),
        material=str(row.get("material") or ""),
        item_name=str(row.get("item_name") or ""),
        description=str(row.get("description") or ""),
        condition_estimate=str(row.get("condition_estimate") or ""),
        confidence=str(row.get("confidence") or ""),
        category=coerce_category(str(row["category"])),
        questions=[
            Question(
                id=question["id"],
                prompt=question["prompt"],
                options=tuple(question["options"]),
            )
            for question in row.get("questions") or []
        ],
        created_at=datetime.fromisoformat(str(row["created_at"])),
        user_answers=row.get("user_answers"),
        recommendation=(
            Recommendation(**recommendation)
            if isinstance(recommendation, dict)
            else None
        ),
        nearby_facilities=(
            [Facility(**facility) for facility in facilities]
            if isinstance(facilities, list)
            else None
        ),
    )
