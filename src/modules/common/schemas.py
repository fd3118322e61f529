from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class MessageResponse(BaseModel):
    message: str


def blank_to_none(value):
    """Un string vacío en un campo fecha significa "borrar"."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


OptionalDate = Optional[datetime]
