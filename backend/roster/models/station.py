from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from roster.database import Base


class Station(Base):
    """Пожарно-спасательная часть"""
    __tablename__ = "stations"
    
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    crest_url = Column(String, nullable=True)  # Публичный URL герба из внешнего хранилища
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    
    # Relationships
    divisions = relationship("Division", back_populates="station", cascade="all, delete-orphan")
    memberships = relationship("Membership", back_populates="station", cascade="all, delete-orphan")
    schedule_cycle = relationship("ScheduleCycle", back_populates="station", uselist=False, cascade="all, delete-orphan")
