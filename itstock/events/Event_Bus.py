"""Simple Event Bus / Observer implementation for stock notifications.

Event names:
  stock.low_stock -> payload {"item": Item, "remaining": int, "threshold": int}
  stock.movement  -> payload {"movement": Movement, "item": Item}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
STOCK_LOW_STOCK = "stock.low_stock"
STOCK_MOVEMENT = "stock.movement"


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def publish(self, event_name: str, payload: Any):
		# A failing subscriber must not undo a mutation that already happened
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				logger.exception("Error delivering %s to %r", event_name, cb)


# Process-wide default bus; ledgers accept their own for tests
GLOBAL_EVENT_BUS = EventBus()


__all__ = ['EventBus', 'GLOBAL_EVENT_BUS', 'STOCK_LOW_STOCK', 'STOCK_MOVEMENT']
