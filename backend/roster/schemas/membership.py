from pydantic import BaseModel
from datetime import datetime
from typing import Optional, List
from roster.models.membership import UserRole


class MembershipUpdate(BaseModel):
    role: UserRole
    division_ids: Optional[List[int]] = None  # null = не менять, [] = все караулы части


class Membership(BaseModel):
    id: int
    user_id: str
    station_id: int
    role: UserRole
    division_ids: Optional[List[int]] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
