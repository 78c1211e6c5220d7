from sqlalchemy.orm import Session
from roster.models import Station
from roster.schemas.station import StationUpdate
from roster.services.display_cache import display_cache
from roster.services.exceptions import NotFoundError
import logging

logger = logging.getLogger(__name__)


class StationService:
    """Настройки части: название и герб"""

    def __init__(self, db: Session):
        self.db = db

    def get_station(self, station_id: int) -> Station:
        station = self.db.query(Station).filter(Station.id == station_id).first()
        if not station:
            raise NotFoundError("Часть не найдена")
        return station

    def update_station(self, station_id: int, data: StationUpdate) -> Station:
        """Герб меняется только если передан новый URL"""
        station = self.get_station(station_id)
        station.name = data.name
        if data.crest_url:
            station.crest_url = data.crest_url.strip()

        self.db.commit()
        self.db.refresh(station)
        display_cache.invalidate(station_id)
        logger.info(f"Обновлены настройки части {station_id}")
        return station
