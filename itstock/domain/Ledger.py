"""Stock Ledger aggregate: the item collection and the movement log as one consistency unit.

Every quantity change made through apply_movement (or a create with stock)
appends exactly one Movement in the same step. edit_item is the direct
correction path and never logs. Failed operations leave both collections
unchanged.
"""
import logging
from typing import Dict, List, Optional

from itstock.domain.Item import Item
from itstock.domain.Movement import Movement, MovementKind
from itstock.domain.common import new_id, utc_now
from itstock.domain.errors import InsufficientStockError, NotFoundError, ValidationError
from itstock.events.Event_Bus import GLOBAL_EVENT_BUS
from itstock.events.event_helpers import publish_low_stock, publish_movement
from itstock.utilities.constants import INITIAL_STOCK_REASON

logger = logging.getLogger(__name__)


def _clean_name(name) -> str:
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("Item name cannot be empty")
    return name.strip()


def _non_negative(value, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"'{field}' must be an integer")
    if value < 0:
        raise ValidationError(f"'{field}' cannot be negative: {value}")
    return value


class StockLedger:
    def __init__(self, items: Optional[List[Item]] = None, movements: Optional[List[Movement]] = None):
        self._items: Dict[str, Item] = {item.id: item for item in (items or [])}
        # Append order; readers get most-recent-first through movements()
        self._movements: List[Movement] = list(movements or [])
        self._event_bus = GLOBAL_EVENT_BUS

    # --- Observer helpers -------------------------------------------------
    def set_event_bus(self, bus):
        self._event_bus = bus
        return self

    def _evaluate_item(self, item: Item):
        if item.is_low_stock:
            publish_low_stock(self._event_bus, item)

    def _append(self, item: Item, kind: MovementKind, signed_quantity: int, reason: str) -> Movement:
        movement = Movement(
            id=new_id(),
            item_id=item.id,
            item_name=item.name,
            kind=kind,
            signed_quantity=signed_quantity,
            timestamp=utc_now(),
            reason=reason,
        )
        self._movements.append(movement)
        publish_movement(self._event_bus, movement, item)
        return movement

    # --- Reads --------------------------------------------------------------
    def get_item(self, item_id: str) -> Item:
        try:
            return self._items[item_id]
        except KeyError:
            raise NotFoundError("Item", item_id) from None

    def items(self) -> List[Item]:
        return list(self._items.values())

    def movements(self) -> List[Movement]:
        '''Returns the log most recent first; equal timestamps keep newest-appended first.'''
        return sorted(reversed(self._movements), key=lambda m: m.timestamp, reverse=True)

    def log(self) -> List[Movement]:
        '''Movements in append order, the order they are stored in.'''
        return list(self._movements)

    def movements_for(self, item_id: str) -> List[Movement]:
        return [m for m in self.movements() if m.item_id == item_id]

    def find_by_name(self, name: str) -> Optional[Item]:
        '''Exact, case-insensitive name lookup. The ledger allows duplicates; the first match wins.'''
        if not isinstance(name, str):
            return None
        key = name.strip().lower()
        if not key:
            return None
        for item in self._items.values():
            if item.name.lower() == key:
                return item
        return None

    # --- Commands -------------------------------------------------------------
    def create_item(self, data: dict, initial_reason: Optional[str] = None) -> Item:
        '''
        Creates an item from name, category, quantity, min_threshold, location, reference.
        A positive starting quantity is logged as one ENTRY movement.
        '''
        name = _clean_name(data.get("name"))
        quantity = _non_negative(data.get("quantity", 0), "quantity")
        min_threshold = _non_negative(data.get("min_threshold", 0), "min_threshold")

        item = Item(
            id=new_id(),
            name=name,
            category=data.get("category") or "",
            quantity=quantity,
            min_threshold=min_threshold,
            location=data.get("location") or "",
            reference=data.get("reference") or "",
            last_updated=utc_now(),
        )
        self._items[item.id] = item
        if item.quantity > 0:
            self._append(item, MovementKind.ENTRY, item.quantity, initial_reason or INITIAL_STOCK_REASON)
        logger.info("Created item %s (%s) with quantity %s", item.id, item.name, item.quantity)
        self._evaluate_item(item)
        return item

    def edit_item(self, item_id: str, fields: dict) -> Item:
        '''
        Applies a direct field patch. Quantity changes made here are silent
        overwrites and append no movement.
        '''
        item = self.get_item(item_id)
        unknown = set(fields) - set(Item.EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")

        # Validate everything before touching the item
        patch = dict(fields)
        if "name" in patch:
            patch["name"] = _clean_name(patch["name"])
        for field in ("quantity", "min_threshold"):
            if field in patch:
                patch[field] = _non_negative(patch[field], field)
        for field in ("category", "location", "reference"):
            if field in patch:
                patch[field] = patch[field] or ""

        for field, value in patch.items():
            setattr(item, field, value)
        item.touch()
        logger.info("Edited item %s: %s", item.id, sorted(patch))
        self._evaluate_item(item)
        return item

    def delete_item(self, item_id: str) -> bool:
        '''Removes the item; its historical movements stay in the log. Unknown ids are a no-op.'''
        removed = self._items.pop(item_id, None)
        if removed is not None:
            logger.info("Deleted item %s (%s)", removed.id, removed.name)
        return removed is not None

    def apply_movement(self, item_id: str, kind, quantity: int, reason: str = "") -> Movement:
        '''
        Applies an ENTRY (adds) or EXIT (subtracts) of a positive quantity and logs it.
        Raises InsufficientStockError, leaving item and log untouched, if the
        result would be negative.
        '''
        try:
            kind = MovementKind(kind)
        except ValueError:
            raise ValidationError(f"Unknown movement kind: {kind!r}") from None
        if kind not in (MovementKind.ENTRY, MovementKind.EXIT):
            raise ValidationError(f"Movement kind {kind.value} cannot be applied directly")
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise ValidationError(f"Movement quantity must be a positive integer, got {quantity!r}")

        item = self.get_item(item_id)
        new_quantity = item.quantity + quantity if kind == MovementKind.ENTRY else item.quantity - quantity
        if new_quantity < 0:
            raise InsufficientStockError(item.name, item.quantity, quantity)

        item.quantity = new_quantity
        item.touch()
        signed = -quantity if kind == MovementKind.EXIT else quantity
        movement = self._append(item, kind, signed, reason)
        logger.info("%s of %s for item %s, new quantity %s", kind.value, quantity, item.id, new_quantity)
        self._evaluate_item(item)
        return movement

    def __str__(self) -> str:
        items_str = ",\n\t".join(str(item) for item in self._items.values())
        return f"Items:\n\t{items_str}\nMovements: {len(self._movements)}"

    def __repr__(self) -> str:
        return self.__str__()
