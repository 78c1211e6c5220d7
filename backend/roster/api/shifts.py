from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date
from roster.database import get_db
from roster.models import Membership
from roster.schemas.shift import (
    ShiftCreate,
    ShiftUpdate,
    ShiftDuplicate,
    ShiftWithAssignments,
    GenerationResult,
    RotationPreviewDay
)
from roster.schemas.assignment import AssignmentCreate, AssignmentInfo
from roster.services.clock import Clock, get_clock
from roster.services.shift_service import ShiftService, shift_to_schema
from roster.services.shift_generator import ShiftGenerationService
from roster.services.assignment_service import AssignmentService
from roster.services.exceptions import RosterError, AccessDeniedError
from roster.auth.permissions import get_current_membership, require_admin, require_editor
from roster.api.errors import to_http_exception
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/shifts", tags=["shifts"])


@router.get("", response_model=List[ShiftWithAssignments])
def get_shifts(
    start_date: Optional[date] = Query(None, description="Начальная дата (включительно)"),
    end_date: Optional[date] = Query(None, description="Конечная дата (включительно)"),
    division_id: Optional[int] = Query(None, description="ID караула"),
    db: Session = Depends(get_db),
    membership: Membership = Depends(get_current_membership)
):
    """Получить смены части с фильтрацией по датам"""
    service = ShiftService(db)
    shifts = service.list_shifts(membership.station_id, start_date, end_date, division_id)
    return [shift_to_schema(s) for s in shifts]


@router.post("/generate", response_model=GenerationResult)
def generate_shifts(
    window_days: Optional[int] = Query(None, ge=1, le=366, description="Размер окна в днях (по умолчанию 30)"),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    membership: Membership = Depends(require_admin)
):
    """Сгенерировать смены DAY/NIGHT по циклу ротации; повторный запуск безопасен"""
    try:
        service = ShiftGenerationService(db, clock)
        result = service.generate(membership.station_id, window_days=window_days)
    except RosterError as e:
        logger.warning(f"Генерация смен для части {membership.station_id} не выполнена: {e}")
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Ошибка генерации смен для части {membership.station_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Ошибка генерации смен: {str(e)}")

    return GenerationResult(
        message=f"Смены сгенерированы на {result['window_days']} дн.",
        **result
    )


@router.get("/rotation-preview", response_model=List[RotationPreviewDay])
def get_rotation_preview(
    start_date: Optional[date] = Query(None, description="Первая дата (по умолчанию сегодня)"),
    days: int = Query(14, ge=1, le=366, description="Количество дней"),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    membership: Membership = Depends(get_current_membership)
):
    """Предпросмотр ротации: караулы на дневную и ночную смену по датам, без записи"""
    try:
        plan = ShiftGenerationService(db, clock).preview(
            membership.station_id, window_days=days, window_start=start_date
        )
    except RosterError as e:
        raise to_http_exception(e)

    return [
        RotationPreviewDay(
            date=duty.date,
            day_division_id=duty.day_division_id,
            night_division_id=duty.night_division_id
        )
        for duty in plan
    ]


@router.get("/{shift_id}", response_model=ShiftWithAssignments)
def get_shift(
    shift_id: int,
    db: Session = Depends(get_db),
    membership: Membership = Depends(get_current_membership)
):
    """Получить смену с назначениями"""
    try:
        return shift_to_schema(ShiftService(db).get_shift(membership.station_id, shift_id))
    except RosterError as e:
        raise to_http_exception(e)


@router.post("", response_model=ShiftWithAssignments)
def create_shift(
    data: ShiftCreate,
    db: Session = Depends(get_db),
    membership: Membership = Depends(require_admin)
):
    """Создать смену вручную"""
    try:
        shift = ShiftService(db).create_manual_shift(membership.station_id, data, membership.user_id)
    except RosterError as e:
        raise to_http_exception(e)
    return shift_to_schema(shift)


@router.put("/{shift_id}", response_model=ShiftWithAssignments)
def update_shift(
    shift_id: int,
    data: ShiftUpdate,
    db: Session = Depends(get_db),
    membership: Membership = Depends(require_editor)
):
    """Обновить караул, время или статус смены"""
    service = ShiftService(db)
    try:
        shift = service.get_shift(membership.station_id, shift_id)
        target_division = data.division_id if data.division_id is not None else shift.division_id
        if not (membership.can_access_division(shift.division_id) and membership.can_access_division(target_division)):
            raise AccessDeniedError("Нет доступа к этому караулу")
        shift = service.update_shift(membership.station_id, shift_id, data)
    except RosterError as e:
        raise to_http_exception(e)
    return shift_to_schema(shift)


@router.post("/{shift_id}/duplicate", response_model=ShiftWithAssignments)
def duplicate_shift(
    shift_id: int,
    data: ShiftDuplicate,
    db: Session = Depends(get_db),
    membership: Membership = Depends(require_admin)
):
    """Скопировать смену вместе с назначениями на другую дату"""
    try:
        shift = ShiftService(db).duplicate_shift(
            membership.station_id, shift_id, data.date, data.division_id, membership.user_id
        )
    except RosterError as e:
        raise to_http_exception(e)
    return shift_to_schema(shift)


@router.delete("/{shift_id}")
def delete_shift(
    shift_id: int,
    db: Session = Depends(get_db),
    membership: Membership = Depends(require_admin)
):
    """Удалить смену вместе с назначениями"""
    try:
        ShiftService(db).delete_shift(membership.station_id, shift_id)
    except RosterError as e:
        raise to_http_exception(e)
    return {"message": "Смена удалена"}


@router.put("/{shift_id}/assignments", response_model=AssignmentInfo)
def assign_slot(
    shift_id: int,
    data: AssignmentCreate,
    db: Session = Depends(get_db),
    membership: Membership = Depends(require_editor)
):
    """Назначить сотрудника на место в смене (person_id = null освобождает место)"""
    try:
        assignment = AssignmentService(db).assign(membership, shift_id, data)
    except RosterError as e:
        raise to_http_exception(e)

    return AssignmentInfo(
        id=assignment.id,
        vehicle_key=assignment.vehicle_key,
        slot_key=assignment.slot_key,
        person_id=assignment.person_id,
        person_name=assignment.person.name if assignment.person else None,
        placeholder=assignment.placeholder
    )
