from typing import Any, List, Optional

from pydantic import BaseModel

from app.core.constants import MSG_RECEIVED


class ContactMessageIn(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    message: Optional[str] = None

    def is_complete(self) -> bool:
        return bool(self.name and self.email and self.message)


class ContactOkOut(BaseModel):
    message: str = MSG_RECEIVED
    category: str


class ErrorOut(BaseModel):
    error: str


class ValidationErrorOut(ErrorOut):
    errors: List[Any]
