from pydantic import BaseModel, field_validator
from datetime import datetime
from typing import Optional


class DivisionCreate(BaseModel):
    name: str
    color: Optional[str] = None

    @field_validator('name')
    @classmethod
    def strip_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Название обязательно")
        return v


class Division(DivisionCreate):
    id: int
    station_id: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
