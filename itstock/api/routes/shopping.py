from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from itstock.api.deps import get_controller
from itstock.logic.controller import InventoryController
from itstock.logic.shopping.list_builder import build_final_list, format_shopping_list_text
from itstock.utilities.validators import FinalListRequest, ManualShoppingItemInput

router = APIRouter(prefix="/api/shopping-list")


@router.get("")
def shopping_list(controller: InventoryController = Depends(get_controller)):
    """Low-stock rows with suggested order quantities, plus the manual list."""
    items = controller.shopping_list()
    manual = [m.to_dict() for m in controller.manual_list.items()]
    return {"items": items, "count": len(items), "manual": manual, "buffer": controller.reorder_buffer}


@router.post("/final")
def final_list(payload: Optional[FinalListRequest] = None,
               controller: InventoryController = Depends(get_controller)):
    payload = payload or FinalListRequest()
    entries = build_final_list(controller.shopping_list(), controller.manual_list.items(),
                               payload.overrides, payload.notes)
    return {"entries": entries, "count": len(entries)}


@router.post("/export", response_class=PlainTextResponse)
def export_list(payload: Optional[FinalListRequest] = None,
                controller: InventoryController = Depends(get_controller)):
    """Plain-text checklist of the final purchase list."""
    payload = payload or FinalListRequest()
    entries = build_final_list(controller.shopping_list(), controller.manual_list.items(),
                               payload.overrides, payload.notes)
    return format_shopping_list_text(entries)


# -------------------- Manual list --------------------
@router.get("/manual")
def manual_list(controller: InventoryController = Depends(get_controller)):
    entries = [m.to_dict() for m in controller.manual_list.items()]
    return {"items": entries, "count": len(entries)}


@router.post("/manual")
def add_manual_item(payload: ManualShoppingItemInput, controller: InventoryController = Depends(get_controller)):
    entry = controller.add_manual_item(payload.name, payload.quantity, payload.note)
    return entry.to_dict()


@router.delete("/manual/{entry_id}")
def remove_manual_item(entry_id: str, controller: InventoryController = Depends(get_controller)):
    if not controller.remove_manual_item(entry_id):
        raise HTTPException(status_code=404, detail="Shopping list entry not found")
    return {"success": True}
