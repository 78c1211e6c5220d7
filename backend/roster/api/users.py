from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from roster.database import get_db
from roster.models import Membership
from roster.schemas.membership import Membership as MembershipSchema, MembershipUpdate
from roster.services.membership_service import MembershipService
from roster.services.exceptions import RosterError
from roster.auth.permissions import get_current_membership, require_admin
from roster.api.errors import to_http_exception

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/me", response_model=MembershipSchema)
def get_my_membership(membership: Membership = Depends(get_current_membership)):
    """Членство текущего пользователя"""
    return membership


@router.get("/memberships", response_model=List[MembershipSchema])
def get_memberships(
    db: Session = Depends(get_db),
    membership: Membership = Depends(require_admin)
):
    """Получить пользователей части с ролями"""
    return MembershipService(db).list_memberships(membership.station_id)


@router.get("/memberships/{membership_id}", response_model=MembershipSchema)
def get_membership(
    membership_id: int,
    db: Session = Depends(get_db),
    membership: Membership = Depends(require_admin)
):
    """Получить членство пользователя части"""
    try:
        return MembershipService(db).get_membership(membership.station_id, membership_id)
    except RosterError as e:
        raise to_http_exception(e)


@router.put("/memberships/{membership_id}", response_model=MembershipSchema)
def update_membership(
    membership_id: int,
    data: MembershipUpdate,
    db: Session = Depends(get_db),
    membership: Membership = Depends(require_admin)
):
    """Изменить роль пользователя (свою роль изменить нельзя)"""
    try:
        return MembershipService(db).update_membership(membership, membership_id, data)
    except RosterError as e:
        raise to_http_exception(e)


@router.delete("/memberships/{membership_id}")
def remove_membership(
    membership_id: int,
    db: Session = Depends(get_db),
    membership: Membership = Depends(require_admin)
):
    """Удалить пользователя из части (себя удалить нельзя)"""
    try:
        MembershipService(db).remove_membership(membership, membership_id)
    except RosterError as e:
        raise to_http_exception(e)
    return {"message": "Пользователь удален из части"}
