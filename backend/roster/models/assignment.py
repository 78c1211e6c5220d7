from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from roster.database import Base


class Assignment(Base):
    """Назначение сотрудника на место (машина + позиция) в смене"""
    __tablename__ = "assignments"
    
    id = Column(Integer, primary_key=True, index=True)
    shift_id = Column(Integer, ForeignKey("shifts.id", ondelete="CASCADE"), nullable=False)
    vehicle_key = Column(String, nullable=False)
    slot_key = Column(String, nullable=False)
    person_id = Column(Integer, ForeignKey("people.id", ondelete="SET NULL"), nullable=True)  # null = место свободно
    placeholder = Column(String, nullable=True)  # Текстовая заглушка вместо сотрудника
    updated_by = Column(String, nullable=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    
    # Relationships
    shift = relationship("Shift", back_populates="assignments")
    person = relationship("Person")
    
    __table_args__ = (
        UniqueConstraint("shift_id", "vehicle_key", "slot_key", name="uq_assignment_slot"),
    )
