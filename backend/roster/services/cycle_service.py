from sqlalchemy.orm import Session
from datetime import datetime
from roster.config import settings
from roster.models import ScheduleCycle, Division
from roster.schemas.schedule_cycle import ScheduleCycleUpdate
from roster.services.clock import Clock
from roster.services.exceptions import NotFoundError
import logging

logger = logging.getLogger(__name__)


class CycleService:
    """Сервис для работы с циклом ротации части"""

    def __init__(self, db: Session, clock: Clock):
        self.db = db
        self.clock = clock

    def get_cycle(self, station_id: int) -> ScheduleCycle:
        cycle = self.db.query(ScheduleCycle).filter(
            ScheduleCycle.station_id == station_id
        ).first()
        if not cycle:
            raise NotFoundError("Цикл ротации не настроен")
        return cycle

    def upsert_cycle(self, station_id: int, data: ScheduleCycleUpdate) -> ScheduleCycle:
        """
        Создать или обновить цикл ротации (один на часть)

        Караулы чужих частей и несуществующие ID из порядка отбрасываются.
        Если после этого порядок пуст, сохраняется прежний порядок.
        """
        station_division_ids = {
            d.id for d in self.db.query(Division.id).filter(Division.station_id == station_id).all()
        }
        clean_order = [d for d in data.order_division_ids if d in station_division_ids]
        dropped = len(data.order_division_ids) - len(clean_order)
        if dropped:
            logger.warning(f"Часть {station_id}: из порядка ротации отброшено {dropped} неизвестных караулов")

        switch_hours = data.switch_hours if data.switch_hours and data.switch_hours > 0 else settings.default_switch_hours
        start_date = data.start_date or self.clock.today()

        cycle = self.db.query(ScheduleCycle).filter(
            ScheduleCycle.station_id == station_id
        ).first()

        if cycle:
            cycle.start_date = start_date
            cycle.switch_hours = switch_hours
            if clean_order:
                cycle.order_division_ids = clean_order
            cycle.updated_at = datetime.now()
            logger.info(f"Обновлен цикл ротации части {station_id}")
        else:
            cycle = ScheduleCycle(
                station_id=station_id,
                start_date=start_date,
                order_division_ids=clean_order,
                switch_hours=switch_hours,
            )
            self.db.add(cycle)
            logger.info(f"Создан цикл ротации части {station_id}")

        self.db.commit()
        self.db.refresh(cycle)
        return cycle
