from pydantic import BaseModel, field_validator
from typing import Optional
from roster.services.rotation import parse_time_of_day, format_time_of_day


def normalize_time(value: str) -> str:
    """Привести время к виду HH:MM (секунды отбрасываются)"""
    return format_time_of_day(parse_time_of_day(value))


class ShiftTemplateBase(BaseModel):
    label: str  # Генератор использует шаблоны DAY и NIGHT
    start_time: str  # HH:MM
    end_time: str  # HH:MM

    @field_validator('label')
    @classmethod
    def strip_label(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Метка шаблона обязательна")
        return v

    @field_validator('start_time', 'end_time')
    @classmethod
    def check_time(cls, v):
        return normalize_time(v)


class ShiftTemplateCreate(ShiftTemplateBase):
    pass


class ShiftTemplateUpdate(BaseModel):
    label: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None

    @field_validator('label')
    @classmethod
    def strip_label(cls, v):
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Метка шаблона не может быть пустой")
        return v

    @field_validator('start_time', 'end_time')
    @classmethod
    def check_time(cls, v):
        return normalize_time(v) if v is not None else v


class ShiftTemplate(BaseModel):
    id: int
    station_id: int
    label: str
    start_time: str
    end_time: str

    class Config:
        from_attributes = True
