from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import List
from roster.models import ShiftTemplate
from roster.schemas.shift_template import ShiftTemplateCreate, ShiftTemplateUpdate
from roster.services.exceptions import NotFoundError, ShiftConflictError
import logging

logger = logging.getLogger(__name__)


class TemplateService:
    """Сервис для работы с шаблонами смен"""

    def __init__(self, db: Session):
        self.db = db

    def list_templates(self, station_id: int) -> List[ShiftTemplate]:
        return self.db.query(ShiftTemplate).filter(
            ShiftTemplate.station_id == station_id
        ).order_by(ShiftTemplate.start_time).all()

    def get_template(self, station_id: int, template_id: int) -> ShiftTemplate:
        template = self.db.query(ShiftTemplate).filter(
            ShiftTemplate.id == template_id,
            ShiftTemplate.station_id == station_id
        ).first()
        if not template:
            raise NotFoundError("Шаблон смены не найден")
        return template

    def create_template(self, station_id: int, data: ShiftTemplateCreate) -> ShiftTemplate:
        template = ShiftTemplate(
            station_id=station_id,
            label=data.label,
            start_time=data.start_time,
            end_time=data.end_time,
        )
        self.db.add(template)
        self._commit()
        self.db.refresh(template)
        logger.info(f"Создан шаблон смены {template.label} ({template.start_time}–{template.end_time})")
        return template

    def update_template(self, station_id: int, template_id: int, data: ShiftTemplateUpdate) -> ShiftTemplate:
        template = self.get_template(station_id, template_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(template, field, value)
        self._commit()
        self.db.refresh(template)
        logger.info(f"Обновлен шаблон смены {template.id}")
        return template

    def delete_template(self, station_id: int, template_id: int) -> None:
        """Удаление не проверяет будущие смены"""
        template = self.get_template(station_id, template_id)
        self.db.delete(template)
        self.db.commit()
        logger.info(f"Удален шаблон смены {template_id}")

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ShiftConflictError("Шаблон с такой меткой уже существует") from e
