from pydantic import BaseModel
from datetime import datetime
from typing import Optional, List
from roster.schemas.shift import ShiftWithAssignments


class DisplayBoard(BaseModel):
    """Публичное табло: текущие и ближайшие смены части"""
    station_id: int
    station_name: str
    crest_url: Optional[str] = None
    generated_at: datetime
    current: List[ShiftWithAssignments]
    upcoming: List[ShiftWithAssignments]
