# petstore/routers/users.py
from fastapi import APIRouter, Depends, HTTPException, Request, status
from typing import List

from ..db import PetstoreDb, get_db
from ..config import get_settings
from ..middleware.rate_limit import apply_rate_limit
from ..schemas.user import User, UserCreated

router = APIRouter()
settings = get_settings()

@router.post("", response_model=UserCreated, status_code=status.HTTP_201_CREATED)
async def create_user(request: Request, payload: User, db: PetstoreDb = Depends(get_db)):
    apply_rate_limit(request, settings.signup_rate_limit, "signup")
    username = await db.add_user(payload)
    return {"username": username}

@router.post("/createWithList", response_model=List[UserCreated], status_code=status.HTTP_201_CREATED)
async def create_users(request: Request, payload: List[User], db: PetstoreDb = Depends(get_db)):
    apply_rate_limit(request, settings.signup_rate_limit, "signup")
    usernames = await db.add_users(payload)
    return [{"username": u} for u in usernames]

@router.get("/{username}", response_model=User)
async def get_user(username: str, db: PetstoreDb = Depends(get_db)):
    return await db.get_user(username)

@router.put("/{username}", response_model=User)
async def update_user(username: str, payload: User, db: PetstoreDb = Depends(get_db)):
    # el username es la clave: no se puede cambiar
    if payload.username != username:
        raise HTTPException(status_code=400, detail="El username no se puede cambiar")
    return await db.update_user(payload)

@router.delete("/{username}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(username: str, db: PetstoreDb = Depends(get_db)):
    await db.delete_user(username)
    return None
