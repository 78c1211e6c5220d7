from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from roster.models import Assignment, Membership
from roster.schemas.assignment import AssignmentCreate
from roster.services.display_cache import display_cache
from roster.services.exceptions import AccessDeniedError, ShiftConflictError
from roster.services.people_service import get_station_person
from roster.services.shift_service import ShiftService
import logging

logger = logging.getLogger(__name__)


class AssignmentService:
    """Назначение сотрудников на места в смене"""

    def __init__(self, db: Session):
        self.db = db

    def assign(self, membership: Membership, shift_id: int, data: AssignmentCreate) -> Assignment:
        """
        Назначить сотрудника (или заглушку) на место; пустое место означает освобождение

        Raises:
            NotFoundError: смена не найдена
            AccessDeniedError: нет доступа к караулу смены
            ValidationError: сотрудник не из этой части
            ShiftConflictError: сотрудник уже занимает другое место в смене
        """
        shift = ShiftService(self.db).get_shift(membership.station_id, shift_id)
        if not membership.can_access_division(shift.division_id):
            raise AccessDeniedError("Нет доступа к этому караулу")

        if data.person_id is not None:
            get_station_person(self.db, membership.station_id, data.person_id)

            existing = self.db.query(Assignment).filter(
                Assignment.shift_id == shift_id,
                Assignment.person_id == data.person_id,
            ).filter(
                (Assignment.vehicle_key != data.vehicle_key) | (Assignment.slot_key != data.slot_key)
            ).first()
            if existing:
                raise ShiftConflictError("Сотрудник уже назначен в этой смене")

        assignment = self.db.query(Assignment).filter(
            Assignment.shift_id == shift_id,
            Assignment.vehicle_key == data.vehicle_key,
            Assignment.slot_key == data.slot_key,
        ).first()

        if assignment is None:
            assignment = Assignment(
                shift_id=shift_id,
                vehicle_key=data.vehicle_key,
                slot_key=data.slot_key,
            )
            self.db.add(assignment)

        assignment.person_id = data.person_id
        assignment.placeholder = data.placeholder if data.person_id is None else None
        assignment.updated_by = membership.user_id

        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ShiftConflictError("Место или сотрудник в этой смене уже заняты") from e
        self.db.refresh(assignment)
        display_cache.invalidate(membership.station_id)
        logger.info(
            f"Смена {shift_id}: место {data.vehicle_key}/{data.slot_key} -> "
            f"{data.person_id if data.person_id is not None else (data.placeholder or 'свободно')}"
        )
        return assignment
