from sqlalchemy.orm import Session
from roster.models import Station, Shift
from roster.schemas.display import DisplayBoard
from roster.services.clock import Clock
from roster.services.display_cache import DisplayCache, display_cache
from roster.services.exceptions import NotFoundError
from roster.services.shift_service import shift_to_schema
import logging

logger = logging.getLogger(__name__)

# Текущая смена и две следующие
BOARD_SHIFT_LIMIT = 3


class DisplayService:
    """Данные публичного табло части"""

    def __init__(self, db: Session, clock: Clock, cache: DisplayCache = display_cache):
        self.db = db
        self.clock = clock
        self.cache = cache

    def get_board(self, station_id: int) -> DisplayBoard:
        cached = self.cache.get(station_id)
        if cached is not None:
            return cached

        station = self.db.query(Station).filter(Station.id == station_id).first()
        if not station:
            raise NotFoundError("Часть не найдена")

        now = self.clock.now()
        shifts = self.db.query(Shift).filter(
            Shift.station_id == station_id,
            Shift.ends_at > now
        ).order_by(Shift.starts_at, Shift.division_id).limit(BOARD_SHIFT_LIMIT).all()

        board = DisplayBoard(
            station_id=station.id,
            station_name=station.name,
            crest_url=station.crest_url,
            generated_at=now,
            current=[shift_to_schema(s) for s in shifts if s.starts_at <= now],
            upcoming=[shift_to_schema(s) for s in shifts if s.starts_at > now],
        )
        self.cache.set(station_id, board)
        logger.debug(f"Табло части {station_id} обновлено")
        return board
