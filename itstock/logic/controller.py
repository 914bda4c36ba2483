"""Inventory controller: owns the application state and persists after each successful command.

Commands run the domain operation first; only when it succeeds (and once the
initial load has finished) is the affected collection saved. Persistence is
fire-and-forget: failures land in `repository.errors`.
"""
import logging
from typing import Dict, List, Optional

from itstock.domain.Categories import CategorySet
from itstock.domain.Item import Item
from itstock.domain.Ledger import StockLedger
from itstock.domain.ManualShoppingItem import ManualShoppingItem
from itstock.domain.ManualShoppingList import ManualShoppingList
from itstock.domain.Movement import Movement, MovementKind
from itstock.domain.errors import NotFoundError, ValidationError
from itstock.events.Event_Bus import EventBus, GLOBAL_EVENT_BUS
from itstock.infra.Stock_Repository import StockRepository
from itstock.logic.shopping.list_builder import build_shopping_list
from itstock.utilities.constants import DEFAULT_MIN_THRESHOLD, DEFAULT_REORDER_BUFFER, NEW_ITEM_ENTRY_REASON

logger = logging.getLogger(__name__)


class InventoryController:
    def __init__(self, repository: StockRepository, event_bus: EventBus = GLOBAL_EVENT_BUS,
                 reorder_buffer: int = DEFAULT_REORDER_BUFFER):
        self.repository = repository
        self.event_bus = event_bus
        self.reorder_buffer = reorder_buffer
        self.ledger = StockLedger().set_event_bus(event_bus)
        self.categories = CategorySet()
        self.manual_list = ManualShoppingList()
        self.loaded = False

    def load(self):
        state = self.repository.load()
        self.ledger = StockLedger(state.items, state.movements).set_event_bus(self.event_bus)
        self.categories = CategorySet(state.categories)
        self.manual_list = ManualShoppingList(state.manual_list)
        self.loaded = True
        return self

    # --- Persistence hooks ----------------------------------------------------
    def _save_items(self):
        if self.loaded:
            self.repository.save_items(self.ledger.items())

    def _save_ledger(self):
        if self.loaded:
            self.repository.save_items(self.ledger.items())
            self.repository.save_movements(self.ledger.log())

    def _save_categories(self):
        if self.loaded:
            self.repository.save_categories(self.categories.names())

    def _save_manual_list(self):
        if self.loaded:
            self.repository.save_manual_list(self.manual_list.items())

    # --- Ledger commands -------------------------------------------------------
    def create_item(self, data: dict, initial_reason: Optional[str] = None) -> Item:
        item = self.ledger.create_item(data, initial_reason)
        self._save_ledger()
        return item

    def edit_item(self, item_id: str, fields: dict) -> Item:
        item = self.ledger.edit_item(item_id, fields)
        self._save_items()
        return item

    def delete_item(self, item_id: str) -> bool:
        removed = self.ledger.delete_item(item_id)
        if removed:
            self._save_items()
        return removed

    def apply_movement(self, item_id: str, kind, quantity: int, reason: str = "") -> Movement:
        movement = self.ledger.apply_movement(item_id, kind, quantity, reason)
        self._save_ledger()
        return movement

    def register_movement_by_name(self, name: str, kind, quantity: int, reason: str = "",
                                  new_item: Optional[dict] = None) -> Dict:
        """Resolve an item by exact case-insensitive name and move stock.

        An ENTRY for an unknown name creates the item with the entry quantity;
        `new_item` supplies category, min_threshold, location and reference.
        Returns {"item": Item, "movement": Movement | None, "created": bool}.
        """
        existing = self.ledger.find_by_name(name)
        if existing is not None:
            movement = self.apply_movement(existing.id, kind, quantity, reason)
            return {"item": existing, "movement": movement, "created": False}

        try:
            kind = MovementKind(kind)
        except ValueError:
            raise ValidationError(f"Unknown movement kind: {kind!r}") from None
        if kind != MovementKind.ENTRY:
            raise NotFoundError("Item", name)
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise ValidationError(f"Movement quantity must be a positive integer, got {quantity!r}")

        extra = new_item or {}
        item = self.create_item({
            "name": name,
            "category": extra.get("category") or (self.categories.names() or [""])[0],
            "quantity": quantity,
            "min_threshold": extra.get("min_threshold", DEFAULT_MIN_THRESHOLD),
            "location": extra.get("location", ""),
            "reference": extra.get("reference", ""),
        }, reason or NEW_ITEM_ENTRY_REASON)
        logger.info("Entry for unknown name '%s' created item %s", name, item.id)
        created_movements = self.ledger.movements_for(item.id)
        return {"item": item, "movement": created_movements[0] if created_movements else None, "created": True}

    # --- Category commands -------------------------------------------------------
    def add_category(self, name: str) -> bool:
        added = self.categories.add(name)
        if added:
            self._save_categories()
        return added

    def remove_category(self, name: str) -> bool:
        removed = self.categories.remove(name)
        if removed:
            self._save_categories()
        return removed

    # --- Manual shopping list commands ----------------------------------------------
    def add_manual_item(self, name: str, quantity: int = 1, note: str = "") -> ManualShoppingItem:
        entry = self.manual_list.add(name, quantity, note)
        self._save_manual_list()
        return entry

    def remove_manual_item(self, entry_id: str) -> bool:
        removed = self.manual_list.remove(entry_id)
        if removed:
            self._save_manual_list()
        return removed

    # --- Reads -----------------------------------------------------------------------
    def shopping_list(self) -> List[Dict]:
        return build_shopping_list(self.ledger.items(), self.reorder_buffer)

    def diagnostics(self) -> List[Dict]:
        return [e.to_dict() for e in self.repository.errors]
