from pydantic import BaseModel
from datetime import date, datetime
from typing import Optional, List


class ScheduleCycleUpdate(BaseModel):
    start_date: Optional[date] = None  # По умолчанию сегодня
    order_division_ids: List[int] = []  # Пустой список сохраняет текущий порядок
    switch_hours: Optional[int] = None  # По умолчанию 12


class ScheduleCycle(BaseModel):
    id: int
    station_id: int
    start_date: date
    order_division_ids: List[int]
    switch_hours: int
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
