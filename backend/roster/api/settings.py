from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from roster.database import get_db
from roster.models import Membership
from roster.schemas.schedule_cycle import ScheduleCycle as ScheduleCycleSchema, ScheduleCycleUpdate
from roster.schemas.shift_template import (
    ShiftTemplate as ShiftTemplateSchema,
    ShiftTemplateCreate,
    ShiftTemplateUpdate
)
from roster.services.clock import Clock, get_clock
from roster.services.cycle_service import CycleService
from roster.schemas.station import Station as StationSchema, StationUpdate
from roster.services.template_service import TemplateService
from roster.services.station_service import StationService
from roster.services.exceptions import RosterError
from roster.auth.permissions import get_current_membership, require_admin
from roster.api.errors import to_http_exception

router = APIRouter(prefix="/api/settings", tags=["settings"])


# Часть
@router.get("/station", response_model=StationSchema)
def get_station_settings(
    db: Session = Depends(get_db),
    membership: Membership = Depends(get_current_membership)
):
    """Получить название и герб части"""
    try:
        return StationService(db).get_station(membership.station_id)
    except RosterError as e:
        raise to_http_exception(e)


@router.put("/station", response_model=StationSchema)
def update_station_settings(
    data: StationUpdate,
    db: Session = Depends(get_db),
    membership: Membership = Depends(require_admin)
):
    """Изменить название и герб части"""
    try:
        return StationService(db).update_station(membership.station_id, data)
    except RosterError as e:
        raise to_http_exception(e)


# Цикл ротации
@router.get("/schedule-cycle", response_model=ScheduleCycleSchema)
def get_schedule_cycle(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    membership: Membership = Depends(get_current_membership)
):
    """Получить цикл ротации части"""
    try:
        return CycleService(db, clock).get_cycle(membership.station_id)
    except RosterError as e:
        raise to_http_exception(e)


@router.put("/schedule-cycle", response_model=ScheduleCycleSchema)
def update_schedule_cycle(
    data: ScheduleCycleUpdate,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    membership: Membership = Depends(require_admin)
):
    """Создать или обновить цикл ротации части"""
    return CycleService(db, clock).upsert_cycle(membership.station_id, data)


# Шаблоны смен
@router.get("/shift-templates", response_model=List[ShiftTemplateSchema])
def get_shift_templates(
    db: Session = Depends(get_db),
    membership: Membership = Depends(get_current_membership)
):
    """Получить шаблоны смен части"""
    return TemplateService(db).list_templates(membership.station_id)


@router.post("/shift-templates", response_model=ShiftTemplateSchema)
def create_shift_template(
    data: ShiftTemplateCreate,
    db: Session = Depends(get_db),
    membership: Membership = Depends(require_admin)
):
    """Создать шаблон смены"""
    try:
        return TemplateService(db).create_template(membership.station_id, data)
    except RosterError as e:
        raise to_http_exception(e)


@router.put("/shift-templates/{template_id}", response_model=ShiftTemplateSchema)
def update_shift_template(
    template_id: int,
    data: ShiftTemplateUpdate,
    db: Session = Depends(get_db),
    membership: Membership = Depends(require_admin)
):
    """Обновить шаблон смены"""
    try:
        return TemplateService(db).update_template(membership.station_id, template_id, data)
    except RosterError as e:
        raise to_http_exception(e)


@router.delete("/shift-templates/{template_id}")
def delete_shift_template(
    template_id: int,
    db: Session = Depends(get_db),
    membership: Membership = Depends(require_admin)
):
    """Удалить шаблон смены"""
    try:
        TemplateService(db).delete_template(membership.station_id, template_id)
    except RosterError as e:
        raise to_http_exception(e)
    return {"message": "Шаблон удален"}
