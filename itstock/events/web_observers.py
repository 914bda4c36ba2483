"""Web-facing observers for stock events.

Subscribes to the GLOBAL_EVENT_BUS for stock.low_stock and stock.movement and
keeps a small in-memory ring buffer of recent events that the web layer serves
to pollers.

Each event carries an auto-increment id (cursor) so clients can ask only for
newer events (since=<last_id_seen>). MAX_EVENTS caps memory use.
"""
from __future__ import annotations
import logging
from typing import List, Dict, Any
from threading import Lock
from datetime import datetime, timezone

from .Event_Bus import (
    GLOBAL_EVENT_BUS, EventBus, STOCK_LOW_STOCK, STOCK_MOVEMENT
)

logger = logging.getLogger(__name__)

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
MAX_EVENTS = 300
_started = False


def _record(event_name: str, payload: Any):  # signature expected by EventBus
    global _next_id
    with _lock:
        evt = {
            'id': _next_id,
            'type': event_name,
            'ts': datetime.now(timezone.utc).isoformat()
        }
        if isinstance(payload, dict):
            item = payload.get('item')
            if item is not None:
                evt['item_id'] = getattr(item, 'id', '')
                evt['name'] = getattr(item, 'name', '')
                evt['quantity'] = getattr(item, 'quantity', '')
            for k in ('remaining', 'threshold'):
                if k in payload:
                    evt[k] = payload[k]
            movement = payload.get('movement')
            if movement is not None:
                evt['kind'] = movement.kind.value
                evt['signed_quantity'] = movement.signed_quantity
        _events.append(evt)
        _next_id += 1
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]


def start(bus: EventBus = GLOBAL_EVENT_BUS):
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    bus.subscribe(STOCK_LOW_STOCK, _record)
    bus.subscribe(STOCK_MOVEMENT, _record)
    _started = True
    logger.debug("Web observers subscribed to stock events")


def reset():
    """Drop buffered events (used between tests)."""
    global _next_id
    with _lock:
        _events.clear()
        _next_id = 1


def get_events(since: int | None = None) -> Dict[str, Any]:
    """Return events newer than 'since' (exclusive).

    If since is None, returns every buffered event. next_cursor is the largest
    id so the client can poll with since=next_cursor.
    """
    with _lock:
        if since is None:
            data = list(_events)
        else:
            data = [e for e in _events if e['id'] > since]
        next_cursor = _events[-1]['id'] if _events else since or 0
    return {'events': data, 'next_cursor': next_cursor}


__all__ = ['start', 'reset', 'get_events']
