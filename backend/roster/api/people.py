from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List
from roster.database import get_db
from roster.models import Membership
from roster.schemas.person import Person as PersonSchema, PersonCreate, PersonUpdate
from roster.services.people_service import PeopleService
from roster.services.exceptions import RosterError
from roster.auth.permissions import get_current_membership, require_admin
from roster.api.errors import to_http_exception

router = APIRouter(prefix="/api/people", tags=["people"])


@router.get("", response_model=List[PersonSchema])
def get_people(
    active_only: bool = Query(False, description="Только активные"),
    db: Session = Depends(get_db),
    membership: Membership = Depends(get_current_membership)
):
    """Получить сотрудников части"""
    return PeopleService(db).list_people(membership.station_id, active_only)


@router.post("", response_model=PersonSchema)
def create_person(
    data: PersonCreate,
    db: Session = Depends(get_db),
    membership: Membership = Depends(require_admin)
):
    """Добавить сотрудника"""
    try:
        return PeopleService(db).create_person(membership.station_id, data)
    except RosterError as e:
        raise to_http_exception(e)


@router.put("/{person_id}", response_model=PersonSchema)
def update_person(
    person_id: int,
    data: PersonUpdate,
    db: Session = Depends(get_db),
    membership: Membership = Depends(require_admin)
):
    """Обновить данные сотрудника"""
    try:
        return PeopleService(db).update_person(membership.station_id, person_id, data)
    except RosterError as e:
        raise to_http_exception(e)


@router.put("/{person_id}/toggle-active", response_model=PersonSchema)
def toggle_person_active(
    person_id: int,
    db: Session = Depends(get_db),
    membership: Membership = Depends(require_admin)
):
    """Переключить статус активности сотрудника"""
    try:
        return PeopleService(db).toggle_active(membership.station_id, person_id)
    except RosterError as e:
        raise to_http_exception(e)


@router.delete("/{person_id}")
def delete_person(
    person_id: int,
    db: Session = Depends(get_db),
    membership: Membership = Depends(require_admin)
):
    """Удалить сотрудника (места в сменах освобождаются)"""
    try:
        PeopleService(db).delete_person(membership.station_id, person_id)
    except RosterError as e:
        raise to_http_exception(e)
    return {"message": "Сотрудник удален"}
