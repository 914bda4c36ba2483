from typing import Final

# Storage keys, one JSON blob each
ITEMS_KEY: Final[str] = "it-stock-items"
MOVEMENTS_KEY: Final[str] = "it-stock-logs"
CATEGORIES_KEY: Final[str] = "it-stock-categories"
MANUAL_LIST_KEY: Final[str] = "it-stock-manual-list"

DEFAULT_CATEGORIES: Final[tuple[str, ...]] = (
    "Hardware",
    "Components",
    "Networking",
    "Storage",
    "Peripherals",
    "Software / Licenses",
    "Accessories",
    "Consumables",
    "Security / CCTV",
    "Tools",
)

INITIAL_STOCK_REASON: Final[str] = "Initial Stock"
NEW_ITEM_ENTRY_REASON: Final[str] = "Initial Entry (New Item)"
DEFAULT_REORDER_BUFFER: Final[int] = 5
DEFAULT_MIN_THRESHOLD: Final[int] = 5

SOURCE_LOW_STOCK: Final[str] = "low-stock"
SOURCE_MANUAL: Final[str] = "manual"

ADVICE_PROMPT_TEMPLATE: Final[str] = (
    """
    Act as an experienced IT manager. I prepared this purchase list of IT equipment:

{lines}

    Please:
    1. Check whether the order quantities look adequate.
    2. Point out any notes that need special attention.
    3. Answer concisely and professionally, formatted as simple HTML (use <b>, <ul>, <li>).
    """
)
