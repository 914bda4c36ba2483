"""ManualShoppingItem: a user-entered purchase request, unrelated to stock levels."""
from itstock.domain.common import require_count, require_text


class ManualShoppingItem:
    def __init__(self, id: str, name: str, quantity: int = 1, note: str = ""):
        self.id = id
        self.name = name
        self.quantity = quantity
        self.note = note or ""

    def __eq__(self, other) -> bool:
        if not isinstance(other, ManualShoppingItem):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __str__(self) -> str:
        return f"{self.name} x{self.quantity}" + (f" ({self.note})" if self.note else "")

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        if not isinstance(data, dict):
            raise ValueError(f"Manual shopping record must be an object, got {type(data).__name__}")
        return ManualShoppingItem(
            id=str(data["id"]),
            name=require_text(data["name"], "name", required=True),
            quantity=require_count(data.get("quantity", 1), "quantity", minimum=1),
            note=require_text(data.get("note"), "note"),
        )

    def to_dict(self):
        return {"id": self.id, "name": self.name, "quantity": self.quantity, "note": self.note}
