# employee-directory-api/app/schemas/user.py
from pydantic import BaseModel, ConfigDict
from typing import Literal

class SessionUser(BaseModel):
    """The identity a session carries into every request context."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    role: Literal["admin", "employee"]

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
