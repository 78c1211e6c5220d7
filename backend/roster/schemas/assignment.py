from pydantic import BaseModel, field_validator
from typing import Optional


class AssignmentCreate(BaseModel):
    vehicle_key: str
    slot_key: str
    person_id: Optional[int] = None  # null = место свободно
    placeholder: Optional[str] = None

    @field_validator('vehicle_key', 'slot_key')
    @classmethod
    def not_blank(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Ключ машины и позиции обязателен")
        return v


class AssignmentInfo(BaseModel):
    id: int
    vehicle_key: str
    slot_key: str
    person_id: Optional[int] = None
    person_name: Optional[str] = None
    placeholder: Optional[str] = None
