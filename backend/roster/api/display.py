from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from roster.database import get_db
from roster.schemas.display import DisplayBoard
from roster.services.clock import Clock, get_clock
from roster.services.display_service import DisplayService
from roster.services.exceptions import RosterError
from roster.api.errors import to_http_exception

router = APIRouter(prefix="/api/display", tags=["display"])


@router.get("/{station_id}", response_model=DisplayBoard)
def get_display_board(
    station_id: int,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock)
):
    """Публичное табло: текущие и ближайшие смены части (без авторизации)"""
    try:
        return DisplayService(db, clock).get_board(station_id)
    except RosterError as e:
        raise to_http_exception(e)
