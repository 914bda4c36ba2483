"""Movement domain entity: one immutable stock ledger entry."""
from datetime import datetime
from enum import Enum
from typing import Optional

from itstock.domain.common import format_timestamp, parse_timestamp, require_int, require_text


class MovementKind(str, Enum):
    ENTRY = "ENTRY"
    EXIT = "EXIT"
    # Reserved for quantity adjustments; no ledger operation emits it today
    CORRECTION = "CORRECTION"


class Movement:
    __slots__ = ("id", "item_id", "item_name", "kind", "signed_quantity", "timestamp", "reason")

    def __init__(self, id: str, item_id: str, item_name: str, kind: MovementKind,
                 signed_quantity: int, timestamp: datetime, reason: Optional[str] = None):
        object.__setattr__(self, "id", id)
        object.__setattr__(self, "item_id", item_id)
        object.__setattr__(self, "item_name", item_name)
        object.__setattr__(self, "kind", MovementKind(kind))
        object.__setattr__(self, "signed_quantity", signed_quantity)
        object.__setattr__(self, "timestamp", timestamp)
        object.__setattr__(self, "reason", reason or "")

    def __setattr__(self, name, value):
        raise AttributeError("Movement records are immutable")

    def __delattr__(self, name):
        raise AttributeError("Movement records are immutable")

    def __eq__(self, other) -> bool:
        if not isinstance(other, Movement):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self):
        return hash(self.id)

    def __str__(self) -> str:
        sign = "+" if self.signed_quantity > 0 else ""
        return f"{self.kind.value} {sign}{self.signed_quantity} {self.item_name} ({format_timestamp(self.timestamp)})"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        if not isinstance(data, dict):
            raise ValueError(f"Movement record must be an object, got {type(data).__name__}")
        return Movement(
            id=str(data["id"]),
            item_id=str(data["item_id"]),
            item_name=require_text(data.get("item_name"), "item_name"),
            kind=MovementKind(data["kind"]),
            signed_quantity=require_int(data["signed_quantity"], "signed_quantity"),
            timestamp=parse_timestamp(data["timestamp"]),
            reason=require_text(data.get("reason"), "reason"),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "item_id": self.item_id,
            "item_name": self.item_name,
            "kind": self.kind.value,
            "signed_quantity": self.signed_quantity,
            "timestamp": format_timestamp(self.timestamp),
            "reason": self.reason,
        }
