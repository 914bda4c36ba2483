"""Item domain entity: a tracked stock unit with quantity and reorder threshold."""
from datetime import datetime
from typing import Optional

from itstock.domain.common import format_timestamp, parse_timestamp, require_count, require_text, utc_now


class Item:
    # Fields a caller may patch through StockLedger.edit_item
    EDITABLE_FIELDS = ("name", "category", "quantity", "min_threshold", "location", "reference")

    def __init__(self, id: str, name: str, category: str = "", quantity: int = 0,
                 min_threshold: int = 0, location: str = "", reference: str = "",
                 last_updated: Optional[datetime] = None):
        self.id = id
        self.name = name
        self.category = category
        self.quantity = quantity
        self.min_threshold = min_threshold
        self.location = location or ""
        self.reference = reference or ""
        self.last_updated = last_updated or utc_now()

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.min_threshold

    def touch(self):
        self.last_updated = utc_now()

    def __eq__(self, other) -> bool:
        if not isinstance(other, Item):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __str__(self) -> str:
        parts = [f"{self.name} - {self.quantity} (min {self.min_threshold})"]
        if self.category:
            parts.append(f"Category: {self.category}")
        if self.location:
            parts.append(f"Location: {self.location}")
        return " - ".join(parts)

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates an Item from its stored dictionary. Unknown keys are ignored; id and a non-blank name are required.
        Raises ValueError for negative counts or non-string text fields.'''
        if not isinstance(data, dict):
            raise ValueError(f"Item record must be an object, got {type(data).__name__}")
        return Item(
            id=str(data["id"]),
            name=require_text(data["name"], "name", required=True),
            category=require_text(data.get("category"), "category"),
            quantity=require_count(data.get("quantity", 0), "quantity"),
            min_threshold=require_count(data.get("min_threshold", 0), "min_threshold"),
            location=require_text(data.get("location"), "location"),
            reference=require_text(data.get("reference"), "reference"),
            last_updated=parse_timestamp(data["last_updated"]) if data.get("last_updated") else None,
        )

    def to_dict(self):
        '''Converts the Item to a dictionary for JSON persistence.'''
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "quantity": self.quantity,
            "min_threshold": self.min_threshold,
            "location": self.location,
            "reference": self.reference,
            "last_updated": format_timestamp(self.last_updated),
        }
