from typing import Optional

from pydantic import BaseModel

from schemas.common import CamelModel


# Login Data Model
class LoginSchema(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class AdminOut(CamelModel):
    id: str
    username: str
    role: str
