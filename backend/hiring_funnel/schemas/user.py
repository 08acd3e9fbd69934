from typing import List, Optional

from pydantic import BaseModel, EmailStr

from hiring_funnel.core.roles import Role


class UserContext(BaseModel):
    user_id: int
    email: Optional[EmailStr] = None
    roles: List[Role]
    full_name: Optional[str] = None
