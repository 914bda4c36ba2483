"""Shared FastAPI dependencies."""
import logging
from threading import Lock

from itstock.infra.Stock_Repository import StockRepository
from itstock.logic.controller import InventoryController
from itstock.utilities.config import DATA_DIR, REORDER_BUFFER

logger = logging.getLogger(__name__)

_lock = Lock()
_controller = None


def get_controller() -> InventoryController:
    """Return the process controller, loading stored state on first use.

    Sync routes run in a threadpool, so the first load happens under a lock.
    """
    global _controller
    if _controller is None:
        with _lock:
            if _controller is None:
                _controller = InventoryController(StockRepository(data_dir=DATA_DIR),
                                                  reorder_buffer=REORDER_BUFFER).load()
                logger.info("Inventory state loaded from %s", DATA_DIR)
    return _controller
