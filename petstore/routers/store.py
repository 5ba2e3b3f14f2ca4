# petstore/routers/store.py
from fastapi import APIRouter, Depends, HTTPException, status

from ..db import PetstoreDb, get_db
from ..schemas.order import Order, OrderCreated
from ..schemas.pet import Inventory

router = APIRouter()

@router.get("/inventory", response_model=Inventory)
async def get_inventory(db: PetstoreDb = Depends(get_db)):
    return await db.get_inventory()

@router.post("/order", response_model=OrderCreated, status_code=status.HTTP_201_CREATED)
async def place_order(payload: Order, db: PetstoreDb = Depends(get_db)):
    order_id = await db.add_order(payload)
    return {"id": order_id}

@router.get("/order/{order_id}", response_model=Order)
async def find_order(order_id: int, db: PetstoreDb = Depends(get_db)):
    return await db.find_order(order_id)

@router.delete("/order/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_order(order_id: int, db: PetstoreDb = Depends(get_db)):
    # delete_order no lanza: devuelve False si no existía
    if not await db.delete_order(order_id):
        raise HTTPException(status_code=404, detail="Pedido no encontrado")
    return None
