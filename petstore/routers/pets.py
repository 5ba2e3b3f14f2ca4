from fastapi import APIRouter, Depends, HTTPException, Request, status, UploadFile, File, Form, Query
from typing import List, Optional
import logging

from ..db import PetstoreDb, get_db
from ..config import get_settings
from ..middleware.rate_limit import apply_rate_limit
from ..schemas.pet import Pet, PetCreated, Status

logger = logging.getLogger(__name__)

router = APIRouter()
settings = get_settings()

def _split_csv(values: List[str]) -> List[str]:
    # admite ?status=a,b y también ?status=a&status=b
    return [v.strip() for raw in values for v in raw.split(",") if v.strip()]

@router.post("", response_model=PetCreated, status_code=status.HTTP_201_CREATED)
async def add_pet(payload: Pet, db: PetstoreDb = Depends(get_db)):
    pet_id = await db.add_pet(payload)
    return {"id": pet_id}

@router.put("", response_model=Pet)
async def update_pet(payload: Pet, db: PetstoreDb = Depends(get_db)):
    return await db.update_pet(payload)

# las rutas fijas van antes de /{pet_id}
@router.get("/findByStatus", response_model=List[Pet])
async def find_by_status(
    status_: List[str] = Query(..., alias="status"),
    db: PetstoreDb = Depends(get_db),
):
    return await db.get_pets_by_status(_split_csv(status_))

@router.get("/findByTags", response_model=List[Pet])
async def find_by_tags(
    tags: List[str] = Query(...),
    db: PetstoreDb = Depends(get_db),
):
    return await db.find_pets_by_tag(_split_csv(tags))

@router.get("/{pet_id}", response_model=Pet)
async def get_pet(pet_id: int, db: PetstoreDb = Depends(get_db)):
    return await db.get_pet(pet_id)

@router.post("/{pet_id}", response_model=Pet)
async def update_pet_via_form(
    pet_id: int,
    name: Optional[str] = Form(None),
    status_: Optional[Status] = Form(None, alias="status"),
    db: PetstoreDb = Depends(get_db),
):
    return await db.update_pet_via_form(pet_id, name, status_)

@router.delete("/{pet_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_pet(pet_id: int, db: PetstoreDb = Depends(get_db)):
    await db.delete_pet(pet_id)
    return None

@router.post("/{pet_id}/uploadImage", status_code=status.HTTP_201_CREATED)
async def upload_image(
    request: Request,
    pet_id: int,
    file: UploadFile = File(...),
    db: PetstoreDb = Depends(get_db),
):
    apply_rate_limit(request, settings.upload_rate_limit, "upload")

    # valida tipo/size básico
    if not (file.content_type or "").startswith("image/"):
        raise HTTPException(status_code=415, detail="Solo imágenes")
    data = await file.read()
    if len(data) > settings.max_photo_bytes:
        raise HTTPException(status_code=413, detail="Imagen demasiado grande")

    url = await db.add_image(pet_id, data)
    logger.info("Imagen subida para la mascota %s: %s", pet_id, url)
    return {"url": url}
