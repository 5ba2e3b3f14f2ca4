from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

class User(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[int] = None
    # clave de negocio: única y sensible a mayúsculas
    username: str = Field(..., min_length=1, max_length=80)
    first_name: Optional[str] = Field(None, alias="firstName")
    last_name: Optional[str] = Field(None, alias="lastName")
    email: Optional[str] = None
    password: Optional[str] = None
    phone: Optional[str] = None
    user_status: Optional[int] = Field(None, alias="userStatus")

class UserCreated(BaseModel):
    username: str
