from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint
from roster.database import Base


class ShiftTemplate(Base):
    """Шаблон смены: метка и время начала/окончания (HH:MM, местное время)"""
    __tablename__ = "shift_templates"
    
    id = Column(Integer, primary_key=True, index=True)
    station_id = Column(Integer, ForeignKey("stations.id", ondelete="CASCADE"), nullable=False, index=True)
    label = Column(String, nullable=False)  # Генератор требует DAY и NIGHT
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)
    
    __table_args__ = (UniqueConstraint("station_id", "label", name="uq_shift_template_label"),)
