"""Event helper utilities.

Quick import:
    from itstock.events.event_helpers import publish_low_stock, publish_movement
"""
from __future__ import annotations
from typing import Any
from .Event_Bus import EventBus, STOCK_LOW_STOCK, STOCK_MOVEMENT

__all__ = ['publish_low_stock', 'publish_movement', 'STOCK_LOW_STOCK', 'STOCK_MOVEMENT']


def publish_low_stock(bus: EventBus, item: Any):
    """Publish a stock.low_stock event for an item at or below its threshold."""
    bus.publish(STOCK_LOW_STOCK, {
        'item': item,
        'remaining': item.quantity,
        'threshold': item.min_threshold
    })


def publish_movement(bus: EventBus, movement: Any, item: Any):
    """Publish a stock.movement event after a ledger entry was appended."""
    bus.publish(STOCK_MOVEMENT, {
        'movement': movement,
        'item': item
    })
