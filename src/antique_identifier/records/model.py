import base64
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ..analysis.result import CombinedAnalysisResult
from ..classifier.model import Category


@dataclass(frozen=True)
class SavedAntiqueRecord:
    """A user-saved antique, as handed to the persistence collaborator."""
    name: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    category: Optional[str] = None
    year: Optional[int] = None
    notes: Optional[str] = None
    date_added: Optional[datetime] = field(default_factory=lambda: datetime.now(timezone.utc))
    image_bytes: Optional[bytes] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "year": self.year,
            "notes": self.notes,
            "date_added": self.date_added.isoformat() if self.date_added else None,
            "image": base64.b64encode(self.image_bytes).decode("ascii") if self.image_bytes else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SavedAntiqueRecord":
        date_added = data.get("date_added")
        image = data.get("image")
        return cls(
            id=data["id"],
            name=data["name"],
            category=data.get("category"),
            year=data.get("year"),
            notes=data.get("notes"),
            date_added=datetime.fromisoformat(date_added) if date_added else None,
            image_bytes=base64.b64decode(image) if image else None,
        )


def record_from_result(result: CombinedAnalysisResult,
                       name: Optional[str] = None,
                       year: Optional[int] = None,
                       notes: Optional[str] = None,
                       image_bytes: Optional[bytes] = None) -> SavedAntiqueRecord:
    """
    Build a record from an analysis, defaulting the name to the top label.

    Empty notes are stored as None; an unknown category is left unset.
    """
    record_name = (name or "").strip() or result.top_label or "Unidentified item"
    category = result.category.value if result.category != Category.UNKNOWN else None
    return SavedAntiqueRecord(
        name=record_name,
        category=category,
        year=year,
        notes=notes.strip() if notes and notes.strip() else None,
        image_bytes=image_bytes,
    )
