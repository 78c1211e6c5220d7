from pydantic import BaseModel, field_validator
from datetime import datetime
from typing import Optional


class StationUpdate(BaseModel):
    name: str
    crest_url: Optional[str] = None  # null = оставить текущий герб

    @field_validator('name')
    @classmethod
    def strip_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Название обязательно")
        return v


class Station(BaseModel):
    id: int
    name: str
    crest_url: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
