"""Shopping list builder.

Provides build_shopping_list(items, buffer) for the low-stock projection,
build_final_list(...) to merge it with the manual list, and
format_shopping_list_text(entries) for a plain-text checklist.
"""
from typing import Dict, List, Any, Iterable, Optional

from itstock.domain.Item import Item
from itstock.domain.ManualShoppingItem import ManualShoppingItem
from itstock.utilities.constants import DEFAULT_REORDER_BUFFER, SOURCE_LOW_STOCK, SOURCE_MANUAL


def suggested_order_quantity(item: Item, buffer: int = DEFAULT_REORDER_BUFFER) -> int:
    """Order enough to cover the deficit plus a buffer, never less than one unit."""
    return max(1, (item.min_threshold - item.quantity) + buffer)


def build_shopping_list(items: Iterable[Item], buffer: int = DEFAULT_REORDER_BUFFER) -> List[Dict[str, Any]]:
    """Compute reorder rows for low-stock items (quantity <= min_threshold).

    Args:
        items: current stock items, in display order.
        buffer: extra units added on top of the deficit.

    Returns:
        List of dicts: { id, name, category, quantity, min_threshold, deficit, suggested_quantity }.
        Order follows `items`. Pure: nothing is stored.
    """
    shopping_list: List[Dict[str, Any]] = []
    for item in items:
        if not item.is_low_stock:
            continue
        shopping_list.append({
            'id': item.id,
            'name': item.name,
            'category': item.category,
            'quantity': item.quantity,
            'min_threshold': item.min_threshold,
            'deficit': item.min_threshold - item.quantity,
            'suggested_quantity': suggested_order_quantity(item, buffer),
        })
    return shopping_list


def build_final_list(low_stock: List[Dict[str, Any]], manual_items: Iterable[ManualShoppingItem],
                     overrides: Optional[Dict[str, int]] = None,
                     notes: Optional[Dict[str, str]] = None) -> List[Dict[str, Any]]:
    """Merge low-stock rows (with caller overrides) and manual rows into one purchase list.

    Low-stock rows whose order quantity ends up <= 0 are dropped; manual rows are
    taken as entered.
    """
    overrides = overrides or {}
    notes = notes or {}
    final: List[Dict[str, Any]] = []
    for row in low_stock:
        qty = overrides.get(row['id'], row['suggested_quantity'])
        if qty is None or qty <= 0:
            continue
        final.append({
            'name': row['name'],
            'quantity': qty,
            'note': notes.get(row['id'], ''),
            'source': SOURCE_LOW_STOCK,
        })
    for entry in manual_items:
        final.append({
            'name': entry.name,
            'quantity': entry.quantity,
            'note': entry.note,
            'source': SOURCE_MANUAL,
        })
    return final


def format_shopping_list_text(entries: Iterable[Dict[str, Any]]) -> str:
    lines = []
    for e in entries:
        note = f" -- Note: {e['note']}" if e.get('note') else ''
        lines.append(f"[ ] {e['name']}: {e['quantity']} units{note}")
    return "\n".join(lines)


__all__ = ['suggested_order_quantity', 'build_shopping_list', 'build_final_list', 'format_shopping_list_text']
