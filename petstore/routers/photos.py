from fastapi import APIRouter, Depends, Response

from ..db import PetstoreDb, get_db

router = APIRouter()

@router.get("/{photo_id}")
async def get_photo(photo_id: int, db: PetstoreDb = Depends(get_db)):
    data = await db.get_photo(photo_id)
    return Response(content=data, media_type="application/octet-stream")
