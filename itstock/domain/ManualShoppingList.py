"""Manual shopping list: ad hoc purchase rows kept apart from the stock items."""
from typing import List, Optional

from itstock.domain.ManualShoppingItem import ManualShoppingItem
from itstock.domain.common import new_id
from itstock.domain.errors import ValidationError


class ManualShoppingList:
    def __init__(self, items: Optional[List[ManualShoppingItem]] = None):
        self._items: List[ManualShoppingItem] = list(items or [])

    def add(self, name: str, quantity: int = 1, note: str = "") -> ManualShoppingItem:
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Shopping item name cannot be empty")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValidationError(f"Shopping item quantity must be at least 1, got {quantity!r}")
        entry = ManualShoppingItem(id=new_id(), name=name.strip(), quantity=quantity, note=note or "")
        self._items.append(entry)
        return entry

    def remove(self, entry_id: str) -> bool:
        before = len(self._items)
        self._items = [i for i in self._items if i.id != entry_id]
        return len(self._items) != before

    def items(self) -> List[ManualShoppingItem]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __str__(self) -> str:
        return "Manual Shopping List:\n\t" + ",\n\t".join(str(i) for i in self._items)

    __repr__ = __str__
