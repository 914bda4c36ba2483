from fastapi import (
    FastAPI,
    Request,
    Query,
    Depends,
)
from fastapi.responses import JSONResponse

from typing import Optional
import logging

from itstock.api.deps import get_controller
from itstock.api.api_ai import AdviceUnavailableError, router as ai_router
from itstock.api.routes import categories, shopping
from itstock.domain.Movement import MovementKind
from itstock.domain.errors import InsufficientStockError, NotFoundError, ValidationError
from itstock.events.web_observers import start as start_event_observers, get_events as get_web_events
from itstock.logic.controller import InventoryController
from itstock.logic.stock.analysis import compute_dashboard, filter_items
from itstock.logic.stock.history import filter_movements
from itstock.utilities.validators import ItemInput, ItemPatch, MovementInput, NamedMovementInput

# Logging
logger = logging.getLogger("itstock_app")

# Initialize FastAPI app
app = FastAPI(title="IT Stock API")

# Include routers
app.include_router(categories.router)
app.include_router(shopping.router)
app.include_router(ai_router)


@app.on_event("startup")
def _startup_web_observers():
    """Register event bus subscribers for web alerts when the app starts."""
    start_event_observers()
    logger.info("Web observers for stock events started")


# -------------------- Error mapping --------------------
@app.exception_handler(ValidationError)
async def _validation_error(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(NotFoundError)
async def _not_found(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(InsufficientStockError)
async def _insufficient_stock(request: Request, exc: InsufficientStockError):
    logger.info("Rejected movement: %s", exc)
    return JSONResponse(status_code=409, content={
        "detail": str(exc),
        "available": exc.available,
        "requested": exc.requested,
    })


@app.exception_handler(AdviceUnavailableError)
async def _advice_unavailable(request: Request, exc: AdviceUnavailableError):
    return JSONResponse(status_code=503, content={"detail": str(exc)})


# -------------------- API: Items --------------------
@app.get('/api/items')
def api_items(search: str = Query(default=""),
              category: Optional[str] = Query(default=None),
              controller: InventoryController = Depends(get_controller)):
    items = filter_items(controller.ledger.items(), search=search, category=category)
    return {"items": [i.to_dict() for i in items], "count": len(items)}


@app.post('/api/items', status_code=201)
def api_create_item(payload: ItemInput, controller: InventoryController = Depends(get_controller)):
    data = payload.model_dump(exclude={"initial_reason"})
    item = controller.create_item(data, payload.initial_reason)
    return item.to_dict()


@app.get('/api/items/{item_id}')
def api_get_item(item_id: str, controller: InventoryController = Depends(get_controller)):
    return controller.ledger.get_item(item_id).to_dict()


@app.patch('/api/items/{item_id}')
def api_edit_item(item_id: str, payload: ItemPatch, controller: InventoryController = Depends(get_controller)):
    """Direct edit, quantity included. Does not record a movement."""
    item = controller.edit_item(item_id, payload.model_dump(exclude_unset=True))
    return item.to_dict()


@app.delete('/api/items/{item_id}')
def api_delete_item(item_id: str, controller: InventoryController = Depends(get_controller)):
    return {"deleted": controller.delete_item(item_id)}


@app.get('/api/items/{item_id}/movements')
def api_item_movements(item_id: str, controller: InventoryController = Depends(get_controller)):
    # History survives deletion, so no existence check on the item
    movements = controller.ledger.movements_for(item_id)
    return {"movements": [m.to_dict() for m in movements], "count": len(movements)}


# -------------------- API: Movements --------------------
@app.post('/api/movements', status_code=201)
def api_apply_movement(payload: MovementInput, controller: InventoryController = Depends(get_controller)):
    movement = controller.apply_movement(payload.item_id, payload.kind, payload.quantity, payload.reason)
    item = controller.ledger.get_item(payload.item_id)
    return {"movement": movement.to_dict(), "item": item.to_dict()}


@app.post('/api/movements/by-name', status_code=201)
def api_movement_by_name(payload: NamedMovementInput, controller: InventoryController = Depends(get_controller)):
    """Stock entry/exit typed by item name; an entry for a new name creates the item."""
    new_item = payload.new_item.model_dump() if payload.new_item else None
    result = controller.register_movement_by_name(payload.name, payload.kind, payload.quantity,
                                                  payload.reason, new_item)
    movement = result["movement"]
    return {
        "created": result["created"],
        "item": result["item"].to_dict(),
        "movement": movement.to_dict() if movement else None,
    }


@app.get('/api/movements')
def api_movements(kind: Optional[MovementKind] = Query(default=None),
                  item_id: Optional[str] = Query(default=None),
                  controller: InventoryController = Depends(get_controller)):
    movements = filter_movements(controller.ledger.movements(), kind=kind, item_id=item_id)
    return {"movements": [m.to_dict() for m in movements], "count": len(movements)}


# -------------------- API: Dashboard & alerts --------------------
@app.get('/api/dashboard')
def api_dashboard(controller: InventoryController = Depends(get_controller)):
    return compute_dashboard(controller.ledger.items())


@app.get('/api/stock/alerts')
def api_stock_alerts(
    since: Optional[int] = Query(default=None, description="Return events with id greater than this value")
):
    """
    Return recent stock events (low stock, movements).

    Client polling strategy:
        1. First call without 'since' to load the current backlog.
        2. Store 'next_cursor' from response.
        3. Subsequent polls: /api/stock/alerts?since=<next_cursor>
    """
    return get_web_events(since)


@app.get('/api/diagnostics')
def api_diagnostics(controller: InventoryController = Depends(get_controller)):
    """Persistence errors recorded since startup (load fallbacks, failed saves)."""
    errors = controller.diagnostics()
    return {"loaded": controller.loaded, "errors": errors, "count": len(errors)}
