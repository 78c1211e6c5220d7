from sqlalchemy import Column, Integer, Date, ForeignKey, DateTime, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from roster.database import Base


class ScheduleCycle(Base):
    """Цикл ротации караулов (не более одного на часть)"""
    __tablename__ = "schedule_cycles"
    
    id = Column(Integer, primary_key=True, index=True)
    station_id = Column(Integer, ForeignKey("stations.id", ondelete="CASCADE"), nullable=False, unique=True)
    start_date = Column(Date, nullable=False)  # Точка отсчёта ротации
    order_division_ids = Column(JSON, nullable=False, default=list)  # Порядок караулов в ротации
    switch_hours = Column(Integer, nullable=False, default=12)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    
    # Relationships
    station = relationship("Station", back_populates="schedule_cycle")
