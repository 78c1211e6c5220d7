from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import List
from roster.database import get_db
from roster.models import Division, Membership, Shift, ScheduleCycle
from roster.services.display_cache import display_cache
from roster.schemas.division import Division as DivisionSchema, DivisionCreate
from roster.auth.permissions import get_current_membership, require_admin
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/divisions", tags=["divisions"])


@router.get("", response_model=List[DivisionSchema])
def get_divisions(
    db: Session = Depends(get_db),
    membership: Membership = Depends(get_current_membership)
):
    """Получить караулы части"""
    return db.query(Division).filter(
        Division.station_id == membership.station_id
    ).order_by(Division.name).all()


@router.post("", response_model=DivisionSchema)
def create_division(
    data: DivisionCreate,
    db: Session = Depends(get_db),
    membership: Membership = Depends(require_admin)
):
    """Создать караул"""
    division = Division(
        station_id=membership.station_id,
        name=data.name,
        color=data.color or None
    )
    db.add(division)
    db.commit()
    db.refresh(division)
    logger.info(f"Создан караул {division.name} в части {membership.station_id}")
    return division


@router.delete("/{division_id}")
def delete_division(
    division_id: int,
    db: Session = Depends(get_db),
    membership: Membership = Depends(require_admin)
):
    """Удалить караул (только если на него не ссылаются смены)"""
    division = db.query(Division).filter(Division.id == division_id).first()
    if not division or division.station_id != membership.station_id:
        raise HTTPException(status_code=404, detail="Караул не найден")
    
    if db.query(Shift).filter(Shift.division_id == division_id).first():
        raise HTTPException(status_code=409, detail="Караул используется в сменах и не может быть удален")
    
    # Караул убирается из порядка ротации в той же транзакции
    cycle = db.query(ScheduleCycle).filter(ScheduleCycle.station_id == membership.station_id).first()
    if cycle and division_id in (cycle.order_division_ids or []):
        cycle.order_division_ids = [d for d in cycle.order_division_ids if d != division_id]
        logger.info(f"Караул {division_id} удален из порядка ротации части {membership.station_id}")

    try:
        db.delete(division)
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Ошибка при удалении караула {division_id}: {e}")
        raise HTTPException(status_code=409, detail="Караул используется и не может быть удален")
    
    display_cache.invalidate(membership.station_id)
    logger.info(f"Удален караул с ID {division_id}")
    return {"message": "Караул удален"}
