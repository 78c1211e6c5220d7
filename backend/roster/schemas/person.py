from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class PersonCreate(BaseModel):
    name: str
    rank: Optional[str] = None
    photo_url: Optional[str] = None


class PersonUpdate(PersonCreate):
    pass


class Person(PersonCreate):
    id: int
    station_id: int
    active: bool = True
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
