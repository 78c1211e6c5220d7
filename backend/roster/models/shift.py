from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, UniqueConstraint, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from roster.database import Base
import enum


class ShiftStatus(str, enum.Enum):
    """Статус смены"""
    DRAFT = "DRAFT"  # Создана генератором
    PUBLISHED = "PUBLISHED"  # Создана вручную


class ShiftLabel(str, enum.Enum):
    DAY = "DAY"
    NIGHT = "NIGHT"


class Shift(Base):
    """Смена караула. Время хранится как наивное местное время, без часового пояса"""
    __tablename__ = "shifts"
    
    id = Column(Integer, primary_key=True, index=True)
    station_id = Column(Integer, ForeignKey("stations.id", ondelete="CASCADE"), nullable=False, index=True)
    division_id = Column(Integer, ForeignKey("divisions.id"), nullable=False)
    starts_at = Column(DateTime, nullable=False, index=True)
    ends_at = Column(DateTime, nullable=False)
    label = Column(String, nullable=False)
    status = Column(SQLEnum(ShiftStatus), nullable=False, default=ShiftStatus.DRAFT)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    
    # Relationships
    division = relationship("Division")
    assignments = relationship("Assignment", back_populates="shift", cascade="all, delete-orphan")
    
    # Естественный ключ: генератор пропускает конфликтующие строки
    __table_args__ = (UniqueConstraint("division_id", "starts_at", name="uq_shift_division_starts_at"),)
