from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from enum import Enum

class Status(str, Enum):
    available = "available"
    pending   = "pending"
    adopted   = "adopted"

class Tag(BaseModel):
    id: Optional[int] = None   # lo genera el servidor
    name: str

class Category(BaseModel):
    id: Optional[int] = None   # lo genera el servidor
    name: str

class Pet(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = None
    name: str = Field(..., min_length=1, max_length=80)
    # None = sin lista de etiquetas (distinto de lista vacía)
    tags: Optional[List[Tag]] = None
    category: Optional[Category] = None
    status: Optional[Status] = None
    photo_urls: List[str] = Field(default_factory=list, alias="photoUrls")

class Inventory(BaseModel):
    available: int = 0
    pending: int = 0
    adopted: int = 0

class PetCreated(BaseModel):
    id: int
