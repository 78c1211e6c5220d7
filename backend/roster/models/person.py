from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, DateTime
from sqlalchemy.sql import func
from roster.database import Base


class Person(Base):
    """Сотрудник, которого можно поставить на место в расчёте"""
    __tablename__ = "people"
    
    id = Column(Integer, primary_key=True, index=True)
    station_id = Column(Integer, ForeignKey("stations.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    rank = Column(String, nullable=True)
    photo_url = Column(String, nullable=True)
    active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
