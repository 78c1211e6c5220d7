from sqlalchemy.orm import Session
from datetime import date
from typing import Dict, List, Optional
from roster.config import settings
from roster.models import ScheduleCycle, ShiftTemplate, ShiftLabel
from roster.services.clock import Clock
from roster.services.display_cache import display_cache
from roster.services.exceptions import ShiftGenerationError
from roster.services.rotation import (
    RotationConfig,
    TemplateTimes,
    DutyAssignment,
    build_candidate_shifts,
    rotation_plan,
)
from roster.services.shift_service import ShiftService, ConflictPolicy
import logging

logger = logging.getLogger(__name__)


class ShiftGenerationService:
    """Генерация смен по циклу ротации на скользящее окно дат"""

    def __init__(self, db: Session, clock: Clock):
        self.db = db
        self.clock = clock

    def load_rotation_config(self, station_id: int) -> RotationConfig:
        """
        Прочитать цикл ротации части

        Raises:
            ShiftGenerationError: цикл не настроен или порядок караулов пуст
        """
        cycle = self.db.query(ScheduleCycle).filter(
            ScheduleCycle.station_id == station_id
        ).first()
        if not cycle:
            raise ShiftGenerationError("Цикл ротации не настроен для этой части")

        order = tuple(cycle.order_division_ids or ())
        if not order:
            raise ShiftGenerationError("Цикл ротации должен содержать хотя бы один караул")

        switch_hours = cycle.switch_hours if cycle.switch_hours else settings.default_switch_hours
        return RotationConfig(
            start_date=cycle.start_date,
            order_division_ids=order,
            switch_hours=switch_hours,
        )

    def load_templates(self, station_id: int) -> Dict[str, TemplateTimes]:
        """
        Прочитать шаблоны DAY и NIGHT

        Raises:
            ShiftGenerationError: шаблонов нет, нет DAY/NIGHT или время некорректно
        """
        templates = self.db.query(ShiftTemplate).filter(
            ShiftTemplate.station_id == station_id
        ).all()
        if not templates:
            raise ShiftGenerationError("Шаблоны смен не настроены для этой части")

        by_label = {t.label: t for t in templates}
        day_template = by_label.get(ShiftLabel.DAY.value)
        night_template = by_label.get(ShiftLabel.NIGHT.value)
        if not day_template or not night_template:
            raise ShiftGenerationError("Должны существовать шаблоны смен DAY и NIGHT")

        try:
            return {
                ShiftLabel.DAY.value: TemplateTimes.from_strings(day_template.start_time, day_template.end_time),
                ShiftLabel.NIGHT.value: TemplateTimes.from_strings(night_template.start_time, night_template.end_time),
            }
        except ValueError as e:
            raise ShiftGenerationError(f"Некорректное время в шаблоне смены: {e}") from e

    def generate(
        self,
        station_id: int,
        window_days: Optional[int] = None,
        window_start: Optional[date] = None
    ) -> dict:
        """
        Сгенерировать смены DAY/NIGHT на окно дат начиная с сегодняшнего дня

        Все предусловия проверяются до записи; при ошибке ничего не
        записывается. Уже существующие смены (тот же караул и начало)
        пропускаются, поэтому повторный запуск безопасен.

        Args:
            station_id: ID части
            window_days: Размер окна (по умолчанию из настроек, 30)
            window_start: Первая дата окна (по умолчанию сегодня)

        Returns:
            Словарь с окном и количеством построенных/вставленных смен

        Raises:
            ShiftGenerationError: не выполнено предусловие
            ShiftPersistenceError: ошибка хранилища
        """
        window_days = window_days or settings.generation_window_days
        window_start = window_start or self.clock.today()

        config = self.load_rotation_config(station_id)
        templates = self.load_templates(station_id)

        candidates = build_candidate_shifts(
            station_id=station_id,
            config=config,
            day_template=templates[ShiftLabel.DAY.value],
            night_template=templates[ShiftLabel.NIGHT.value],
            window_start=window_start,
            window_days=window_days,
        )
        logger.info(
            f"Часть {station_id}: построено {len(candidates)} смен на {window_days} дн. "
            f"начиная с {window_start}"
        )

        inserted = ShiftService(self.db).insert_shifts(
            [c.as_row() for c in candidates],
            conflict_policy=ConflictPolicy.SKIP,
        )
        display_cache.invalidate(station_id)

        logger.info(
            f"Часть {station_id}: вставлено {inserted} новых смен, "
            f"пропущено существующих {len(candidates) - inserted}"
        )
        return {
            "window_start": window_start,
            "window_days": window_days,
            "candidates": len(candidates),
            "inserted": inserted,
            "skipped": len(candidates) - inserted,
        }

    def preview(
        self,
        station_id: int,
        window_days: Optional[int] = None,
        window_start: Optional[date] = None
    ) -> List[DutyAssignment]:
        """Караулы на каждую дату окна без записи в базу"""
        window_days = window_days or settings.generation_window_days
        window_start = window_start or self.clock.today()
        config = self.load_rotation_config(station_id)
        return rotation_plan(config, window_start, window_days)
