"""Stock analysis helpers: dashboard figures and inventory search."""
from __future__ import annotations
from collections import defaultdict
from typing import List, Dict, Any, Iterable

from itstock.domain.Item import Item

__all__ = ["compute_category_breakdown", "compute_dashboard", "filter_items"]


def compute_category_breakdown(items: Iterable[Item]) -> List[Dict[str, Any]]:
    """Units on hand per category, largest first."""
    totals: Dict[str, int] = defaultdict(int)
    order: List[str] = []
    for item in items:
        if item.category not in totals:
            order.append(item.category)
        totals[item.category] += item.quantity
    breakdown = [{'category': c, 'quantity': totals[c]} for c in order]
    breakdown.sort(key=lambda x: x['quantity'], reverse=True)
    return breakdown


def compute_dashboard(items: Iterable[Item]) -> Dict[str, Any]:
    items = list(items)
    low = [i for i in items if i.is_low_stock]
    return {
        'total_units': sum(i.quantity for i in items),
        'item_count': len(items),
        'low_stock_count': len(low),
        'active_categories': len({i.category for i in items}),
        'zero_stock_count': sum(1 for i in items if i.quantity == 0),
        'categories': compute_category_breakdown(items),
    }


def filter_items(items: Iterable[Item], search: str = "", category: str | None = None) -> List[Item]:
    """Case-insensitive substring search over name, location and reference, optionally within one category."""
    term = (search or '').strip().lower()
    result: List[Item] = []
    for item in items:
        if category and item.category != category:
            continue
        if term and not any(term in (field or '').lower() for field in (item.name, item.location, item.reference)):
            continue
        result.append(item)
    return result
