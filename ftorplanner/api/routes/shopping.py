from fastapi import APIRouter, Depends

from ftorplanner.api.services import AppServices, get_services
from ftorplanner.utilities.validators import ShoppingItemInput

router = APIRouter(prefix="/api/shopping-list", tags=["shopping"])


@router.get("")
async def shopping_list(services: AppServices = Depends(get_services)):
    """Items in display order: open items first, newest first."""
    items = await services.shopping.list_sorted()
    return {
        "items": [i.to_dict() for i in items],
        "count": len(items),
        "completed": sum(1 for i in items if i.completed),
    }


@router.post("", status_code=201)
async def add_item(payload: ShoppingItemInput, services: AppServices = Depends(get_services)):
    item = await services.shopping.add(payload.text)
    return item.to_dict()


@router.post("/clear-completed")
async def clear_completed(services: AppServices = Depends(get_services)):
    removed = await services.shopping.clear_completed()
    return {"removed": removed}


@router.post("/{item_id}/toggle")
async def toggle_item(item_id: str, services: AppServices = Depends(get_services)):
    item = await services.shopping.toggle(item_id)
    return item.to_dict()


@router.put("/{item_id}")
async def update_item(item_id: str, payload: ShoppingItemInput, services: AppServices = Depends(get_services)):
    item = await services.shopping.update_text(item_id, payload.text)
    return item.to_dict()


@router.delete("/{item_id}")
async def delete_item(item_id: str, services: AppServices = Depends(get_services)):
    await services.shopping.remove(item_id)
    return {"status": "deleted", "id": item_id}
