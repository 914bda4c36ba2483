"""Stock repository: best-effort persistence of the four stock collections.

Each collection lives under its own store key and is loaded and saved on its
own. A failure on one key falls back to that key's default, is recorded in
`errors` and logged; it never blocks the other keys and never propagates.
"""
import json
import logging
from pathlib import Path
from typing import Callable, List, NamedTuple

from itstock.domain.Item import Item
from itstock.domain.Movement import Movement
from itstock.domain.ManualShoppingItem import ManualShoppingItem
from itstock.domain.errors import PersistenceError
from itstock.infra.Local_Store import LocalStore
from itstock.infra.paths import DATA_DIR
from itstock.utilities.constants import (
    ITEMS_KEY, MOVEMENTS_KEY, CATEGORIES_KEY, MANUAL_LIST_KEY, DEFAULT_CATEGORIES
)

logger = logging.getLogger(__name__)


class LoadedState(NamedTuple):
    items: List[Item]
    movements: List[Movement]
    categories: List[str]
    manual_list: List[ManualShoppingItem]


def _parse_category(value) -> str:
    if not isinstance(value, str):
        raise ValueError(f"Category must be a string, got {type(value).__name__}")
    return value


class StockRepository:
    def __init__(self, store: LocalStore = None, data_dir: Path = DATA_DIR):
        self.store = store or LocalStore(data_dir)
        self.errors: List[PersistenceError] = []

    def _record(self, key: str, operation: str, cause: Exception) -> PersistenceError:
        error = PersistenceError(key, operation, cause)
        self.errors.append(error)
        logger.error("%s", error)
        return error

    # --- Load -------------------------------------------------------------------
    def _load_list(self, key: str, parse: Callable, default: list) -> list:
        try:
            raw = self.store.get(key)
        except (OSError, UnicodeDecodeError) as e:
            self._record(key, "load", e)
            return list(default)
        if raw is None:
            return list(default)
        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError(f"expected a list, got {type(data).__name__}")
            return [parse(entry) for entry in data]
        except (ValueError, KeyError, TypeError) as e:
            # json.JSONDecodeError is a ValueError
            self._record(key, "load", e)
            return list(default)

    def load_items(self) -> List[Item]:
        return self._load_list(ITEMS_KEY, Item.from_dict, [])

    def load_movements(self) -> List[Movement]:
        return self._load_list(MOVEMENTS_KEY, Movement.from_dict, [])

    def load_categories(self) -> List[str]:
        categories = self._load_list(CATEGORIES_KEY, _parse_category, list(DEFAULT_CATEGORIES))
        # An empty stored list means "never customised"
        return categories or list(DEFAULT_CATEGORIES)

    def load_manual_list(self) -> List[ManualShoppingItem]:
        return self._load_list(MANUAL_LIST_KEY, ManualShoppingItem.from_dict, [])

    def load(self) -> LoadedState:
        """Load every collection; each key falls back independently."""
        state = LoadedState(
            items=self.load_items(),
            movements=self.load_movements(),
            categories=self.load_categories(),
            manual_list=self.load_manual_list(),
        )
        logger.info(
            "Loaded %d items, %d movements, %d categories, %d manual entries",
            len(state.items), len(state.movements), len(state.categories), len(state.manual_list)
        )
        return state

    # --- Save -------------------------------------------------------------------
    def _save_list(self, key: str, records: list) -> bool:
        try:
            self.store.set(key, json.dumps(records, ensure_ascii=False, indent=2))
            return True
        except (OSError, TypeError, ValueError) as e:
            self._record(key, "save", e)
            return False

    def save_items(self, items) -> bool:
        return self._save_list(ITEMS_KEY, [item.to_dict() for item in items])

    def save_movements(self, movements) -> bool:
        return self._save_list(MOVEMENTS_KEY, [m.to_dict() for m in movements])

    def save_categories(self, categories) -> bool:
        return self._save_list(CATEGORIES_KEY, list(categories))

    def save_manual_list(self, manual_items) -> bool:
        return self._save_list(MANUAL_LIST_KEY, [i.to_dict() for i in manual_items])

    def save_all(self, items, movements, categories, manual_items) -> bool:
        results = [
            self.save_items(items),
            self.save_movements(movements),
            self.save_categories(categories),
            self.save_manual_list(manual_items),
        ]
        return all(results)
