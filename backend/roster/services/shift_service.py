from sqlalchemy.orm import Session
from sqlalchemy import insert as sa_insert, and_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, List, Optional
from roster.models import Shift, ShiftStatus, Division, Assignment
from roster.schemas.shift import ShiftCreate, ShiftUpdate, ShiftWithAssignments
from roster.schemas.assignment import AssignmentInfo
from roster.services.rotation import TemplateTimes, manual_shift_window, label_for_start
from roster.services.exceptions import (
    NotFoundError,
    ValidationError,
    ShiftConflictError,
    ShiftPersistenceError,
)
from roster.services.display_cache import display_cache
from roster.services.people_service import get_station_person
import enum
import logging

logger = logging.getLogger(__name__)

# Естественный ключ смены
SHIFT_NATURAL_KEY = ["division_id", "starts_at"]


class ConflictPolicy(str, enum.Enum):
    """Поведение массовой вставки при конфликте естественного ключа"""
    SKIP = "skip"  # Конфликтующие строки молча пропускаются, существующие не меняются
    ERROR = "error"  # Конфликт отменяет всю вставку


def shift_to_schema(shift: Shift) -> ShiftWithAssignments:
    """Смена с караулом и назначениями для ответа API"""
    assignments = [
        AssignmentInfo(
            id=a.id,
            vehicle_key=a.vehicle_key,
            slot_key=a.slot_key,
            person_id=a.person_id,
            person_name=a.person.name if a.person else None,
            placeholder=a.placeholder,
        )
        for a in sorted(shift.assignments, key=lambda a: (a.vehicle_key, a.slot_key))
    ]
    return ShiftWithAssignments(
        id=shift.id,
        station_id=shift.station_id,
        division_id=shift.division_id,
        starts_at=shift.starts_at,
        ends_at=shift.ends_at,
        label=shift.label,
        status=shift.status,
        division_name=shift.division.name if shift.division else None,
        assignments=assignments,
    )


class ShiftService:
    """Сервис для работы со сменами части"""

    def __init__(self, db: Session):
        self.db = db

    def insert_shifts(
        self,
        rows: List[Dict[str, Any]],
        conflict_policy: ConflictPolicy = ConflictPolicy.SKIP
    ) -> int:
        """
        Вставить смены одним запросом

        При ConflictPolicy.SKIP строки с уже существующим (division_id, starts_at)
        пропускаются базой данных (INSERT ... ON CONFLICT DO NOTHING), остальные
        поля существующих смен не изменяются.

        Args:
            rows: Строки смен
            conflict_policy: Поведение при конфликте ключа

        Returns:
            Количество фактически вставленных смен

        Raises:
            ShiftConflictError: конфликт ключа при ConflictPolicy.ERROR
            ShiftPersistenceError: любая другая ошибка хранилища; ничего не записано
        """
        if not rows:
            return 0

        if conflict_policy == ConflictPolicy.SKIP:
            stmt = self._dialect_insert().values(rows).on_conflict_do_nothing(
                index_elements=SHIFT_NATURAL_KEY
            )
        else:
            stmt = sa_insert(Shift).values(rows)

        try:
            result = self.db.execute(stmt)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if conflict_policy == ConflictPolicy.ERROR:
                raise ShiftConflictError("Смена для этого караула с таким началом уже существует") from e
            logger.error(f"Ошибка целостности при вставке смен: {e}")
            raise ShiftPersistenceError(str(e.orig) if e.orig is not None else str(e)) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Ошибка при вставке смен: {e}")
            raise ShiftPersistenceError(str(e)) from e

        inserted = result.rowcount if result.rowcount is not None and result.rowcount >= 0 else 0
        logger.info(f"Вставлено смен: {inserted} из {len(rows)}")
        return inserted

    def _dialect_insert(self):
        dialect = self.db.get_bind().dialect.name
        if dialect == "postgresql":
            from sqlalchemy.dialects.postgresql import insert
        elif dialect == "sqlite":
            from sqlalchemy.dialects.sqlite import insert
        else:
            raise ShiftPersistenceError(f"Вставка с пропуском конфликтов не поддерживается для {dialect}")
        return insert(Shift)

    def list_shifts(
        self,
        station_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        division_id: Optional[int] = None
    ) -> List[Shift]:
        """
        Получить смены части с фильтрацией по дате начала

        Args:
            station_id: ID части
            start_date: Начальная дата (включительно)
            end_date: Конечная дата (включительно)
            division_id: Только смены караула
        """
        query = self.db.query(Shift).filter(Shift.station_id == station_id)

        if start_date:
            query = query.filter(Shift.starts_at >= datetime.combine(start_date, time.min))
        if end_date:
            query = query.filter(Shift.starts_at < datetime.combine(end_date + timedelta(days=1), time.min))
        if division_id:
            query = query.filter(Shift.division_id == division_id)

        return query.order_by(Shift.starts_at, Shift.division_id).all()

    def get_shift(self, station_id: int, shift_id: int) -> Shift:
        shift = self.db.query(Shift).filter(
            and_(Shift.id == shift_id, Shift.station_id == station_id)
        ).first()
        if not shift:
            raise NotFoundError("Смена не найдена")
        return shift

    def _check_division(self, station_id: int, division_id: int) -> Division:
        division = self.db.query(Division).filter(Division.id == division_id).first()
        if not division or division.station_id != station_id:
            raise ValidationError("Неверный караул")
        return division

    def create_manual_shift(self, station_id: int, data: ShiftCreate, user_id: Optional[str] = None) -> Shift:
        """
        Создать смену вручную (статус PUBLISHED) с начальными назначениями

        Конец переносится на следующие сутки, если время окончания не позже
        времени начала. Метка определяется по часу начала.
        """
        self._check_division(station_id, data.division_id)

        seen_people = set()
        for item in data.assignments:
            if item.person_id is None:
                continue
            get_station_person(self.db, station_id, item.person_id)
            if item.person_id in seen_people:
                raise ValidationError("Сотрудник назначен в смене более одного раза")
            seen_people.add(item.person_id)

        times = TemplateTimes.from_strings(data.start_time, data.end_time)
        starts_at, ends_at = manual_shift_window(data.date, times)

        shift = Shift(
            station_id=station_id,
            division_id=data.division_id,
            starts_at=starts_at,
            ends_at=ends_at,
            label=label_for_start(times.start_time),
            status=ShiftStatus.PUBLISHED,
        )
        self.db.add(shift)
        try:
            self.db.flush()
        except IntegrityError as e:
            self.db.rollback()
            raise ShiftConflictError(
                "Смена для этого караула с таким началом уже существует"
            ) from e

        for item in data.assignments:
            if item.person_id is None and not item.placeholder:
                continue
            self.db.add(Assignment(
                shift_id=shift.id,
                vehicle_key=item.vehicle_key,
                slot_key=item.slot_key,
                person_id=item.person_id,
                placeholder=item.placeholder,
                updated_by=user_id,
            ))

        self._commit("Ошибка при создании смены", "Смена уже существует или место назначено дважды")
        self.db.refresh(shift)
        display_cache.invalidate(station_id)
        logger.info(f"Создана смена {shift.id}: караул {shift.division_id}, {shift.starts_at} – {shift.ends_at}")
        return shift

    def update_shift(self, station_id: int, shift_id: int, data: ShiftUpdate) -> Shift:
        """Изменить караул, время или статус смены"""
        shift = self.get_shift(station_id, shift_id)

        if data.division_id is not None:
            self._check_division(station_id, data.division_id)
            shift.division_id = data.division_id
        if data.starts_at is not None:
            shift.starts_at = data.starts_at.replace(tzinfo=None)
            shift.label = label_for_start(shift.starts_at.time())
        if data.ends_at is not None:
            shift.ends_at = data.ends_at.replace(tzinfo=None)
        if data.status is not None:
            shift.status = data.status

        if shift.ends_at <= shift.starts_at:
            self.db.rollback()
            raise ValidationError("Окончание смены должно быть позже начала")

        self._commit("Ошибка при обновлении смены")
        self.db.refresh(shift)
        display_cache.invalidate(station_id)
        logger.info(f"Обновлена смена {shift.id}")
        return shift

    def duplicate_shift(
        self,
        station_id: int,
        shift_id: int,
        target_date: date,
        division_id: Optional[int] = None,
        user_id: Optional[str] = None
    ) -> Shift:
        """Скопировать смену на другую дату (и/или караул) вместе с назначениями"""
        source = self.get_shift(station_id, shift_id)
        if division_id is not None:
            self._check_division(station_id, division_id)

        offset = target_date - source.starts_at.date()
        copy = Shift(
            station_id=station_id,
            division_id=division_id if division_id is not None else source.division_id,
            starts_at=source.starts_at + offset,
            ends_at=source.ends_at + offset,
            label=source.label,
            status=source.status,
        )
        self.db.add(copy)
        try:
            self.db.flush()
        except IntegrityError as e:
            self.db.rollback()
            raise ShiftConflictError(
                "Смена для этого караула с таким началом уже существует"
            ) from e

        for a in source.assignments:
            self.db.add(Assignment(
                shift_id=copy.id,
                vehicle_key=a.vehicle_key,
                slot_key=a.slot_key,
                person_id=a.person_id,
                placeholder=a.placeholder,
                updated_by=user_id,
            ))

        self._commit("Ошибка при копировании смены")
        self.db.refresh(copy)
        display_cache.invalidate(station_id)
        logger.info(f"Смена {source.id} скопирована в {copy.id} ({copy.starts_at})")
        return copy

    def delete_shift(self, station_id: int, shift_id: int) -> None:
        """Удалить смену вместе с назначениями"""
        shift = self.get_shift(station_id, shift_id)
        self.db.delete(shift)
        self._commit("Ошибка при удалении смены", "Смену нельзя удалить")
        display_cache.invalidate(station_id)
        logger.info(f"Удалена смена с ID {shift_id}")

    def _commit(self, error_message: str, conflict_message: str = "Смена для этого караула с таким началом уже существует") -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ShiftConflictError(conflict_message) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"{error_message}: {e}")
            raise ShiftPersistenceError(f"{error_message}: {e}") from e
