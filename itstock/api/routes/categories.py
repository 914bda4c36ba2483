from fastapi import APIRouter, Depends

from itstock.api.deps import get_controller
from itstock.logic.controller import InventoryController
from itstock.utilities.validators import CategoryInput

router = APIRouter(prefix="/api/categories")


@router.get("")
def list_categories(controller: InventoryController = Depends(get_controller)):
    names = controller.categories.names()
    return {"categories": names, "count": len(names)}


@router.post("")
def add_category(payload: CategoryInput, controller: InventoryController = Depends(get_controller)):
    added = controller.add_category(payload.name)
    return {"added": added, "categories": controller.categories.names()}


@router.delete("/{name}")
def remove_category(name: str, controller: InventoryController = Depends(get_controller)):
    """Remove a category. Items keep their category string; confirming is the caller's job."""
    removed = controller.remove_category(name)
    return {"removed": removed, "categories": controller.categories.names()}
