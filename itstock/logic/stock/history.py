"""Movement history queries."""
from typing import Iterable, List, Optional

from itstock.domain.Movement import Movement, MovementKind


def filter_movements(movements: Iterable[Movement], kind: Optional[MovementKind] = None,
                     item_id: Optional[str] = None) -> List[Movement]:
    """Return matching movements, most recent first (ties keep the input order)."""
    selected = [
        m for m in movements
        if (kind is None or m.kind == MovementKind(kind)) and (item_id is None or m.item_id == item_id)
    ]
    return sorted(selected, key=lambda m: m.timestamp, reverse=True)
