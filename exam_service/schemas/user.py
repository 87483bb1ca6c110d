from pydantic import BaseModel
from typing import Optional

from exam_service.core.constants import RoleEnum

class UserContext(BaseModel):
    """Caller identity taken from a verified bearer token."""
    user_id: int
    role: RoleEnum
    email: Optional[str] = None
