from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, JSON, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from roster.database import Base
import enum


class UserRole(str, enum.Enum):
    """Роль пользователя в части"""
    ADMIN = "ADMIN"
    EDITOR = "EDITOR"
    VIEWER = "VIEWER"


# ADMIN > EDITOR > VIEWER
ROLE_HIERARCHY = {
    UserRole.ADMIN: 3,
    UserRole.EDITOR: 2,
    UserRole.VIEWER: 1,
}


class Membership(Base):
    """Членство пользователя внешнего провайдера идентификации в части"""
    __tablename__ = "memberships"
    
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, unique=True, index=True)  # Непрозрачный ID от провайдера
    station_id = Column(Integer, ForeignKey("stations.id", ondelete="CASCADE"), nullable=False)
    role = Column(SQLEnum(UserRole), nullable=False, default=UserRole.VIEWER)
    division_ids = Column(JSON, nullable=True)  # null = доступ ко всем караулам части
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    
    # Relationships
    station = relationship("Station", back_populates="memberships")
    
    def has_minimum_role(self, minimum_role: UserRole) -> bool:
        return ROLE_HIERARCHY[UserRole(self.role)] >= ROLE_HIERARCHY[minimum_role]
    
    def can_access_division(self, division_id: int) -> bool:
        if self.role == UserRole.ADMIN or not self.division_ids:
            return True
        return division_id in self.division_ids
