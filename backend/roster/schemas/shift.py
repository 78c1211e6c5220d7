from pydantic import BaseModel, field_validator
from datetime import date, datetime
from typing import Optional, List
from roster.models.shift import ShiftStatus
from roster.schemas.assignment import AssignmentCreate, AssignmentInfo
from roster.schemas.shift_template import normalize_time


class ShiftCreate(BaseModel):
    """Ручное создание смены"""
    date: date
    start_time: str  # HH:MM
    end_time: str  # HH:MM
    division_id: int
    assignments: List[AssignmentCreate] = []

    @field_validator('start_time', 'end_time')
    @classmethod
    def check_time(cls, v):
        return normalize_time(v)


class ShiftUpdate(BaseModel):
    division_id: Optional[int] = None
    starts_at: Optional[datetime] = None
    ends_at: Optional[datetime] = None
    status: Optional[ShiftStatus] = None


class ShiftDuplicate(BaseModel):
    date: date  # Новая дата начала
    division_id: Optional[int] = None  # По умолчанию тот же караул


class Shift(BaseModel):
    id: int
    station_id: int
    division_id: int
    starts_at: datetime
    ends_at: datetime
    label: str
    status: ShiftStatus

    class Config:
        from_attributes = True


class ShiftWithAssignments(Shift):
    division_name: Optional[str] = None
    assignments: List[AssignmentInfo] = []


class GenerationResult(BaseModel):
    message: str
    window_start: date
    window_days: int
    candidates: int  # Сколько смен построено
    inserted: int  # Сколько новых смен записано
    skipped: int  # Сколько уже существовало


class RotationPreviewDay(BaseModel):
    date: date
    day_division_id: Optional[int] = None
    night_division_id: Optional[int] = None
