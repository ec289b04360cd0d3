from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CustomerIn(BaseModel):
    """Customer as supplied by a caller. ``id == 0`` means not created yet."""

    id: int = 0
    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    active: bool = True
    created: Optional[datetime] = None


class CustomerRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    phone: str
    active: bool
    created: datetime
