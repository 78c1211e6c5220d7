from sqlalchemy.orm import Session
from typing import List
from roster.models import Division, Membership
from roster.schemas.membership import MembershipUpdate
from roster.services.exceptions import NotFoundError, ValidationError
import logging

logger = logging.getLogger(__name__)


class MembershipService:
    """Управление ролями пользователей части"""

    def __init__(self, db: Session):
        self.db = db

    def list_memberships(self, station_id: int) -> List[Membership]:
        return self.db.query(Membership).filter(
            Membership.station_id == station_id
        ).order_by(Membership.id).all()

    def get_membership(self, station_id: int, membership_id: int) -> Membership:
        target = self.db.query(Membership).filter(Membership.id == membership_id).first()
        if not target or target.station_id != station_id:
            raise NotFoundError("Членство не найдено")
        return target

    def update_membership(self, admin: Membership, membership_id: int, data: MembershipUpdate) -> Membership:
        """
        Изменить роль (и караулы редактора) пользователя своей части

        Raises:
            NotFoundError: членство из другой части или не существует
            ValidationError: попытка изменить собственную роль или неизвестный караул
        """
        target = self.get_membership(admin.station_id, membership_id)
        if target.user_id == admin.user_id:
            raise ValidationError("Нельзя изменить собственную роль")

        target.role = data.role
        if data.division_ids is not None:
            target.division_ids = self._check_divisions(admin.station_id, data.division_ids)

        self.db.commit()
        self.db.refresh(target)
        logger.info(f"Пользователь {target.user_id}: роль изменена на {data.role.value}")
        return target

    def remove_membership(self, admin: Membership, membership_id: int) -> None:
        target = self.get_membership(admin.station_id, membership_id)
        if target.user_id == admin.user_id:
            raise ValidationError("Нельзя удалить себя из части")

        self.db.delete(target)
        self.db.commit()
        logger.info(f"Пользователь {target.user_id} удален из части {admin.station_id}")

    def _check_divisions(self, station_id: int, division_ids: List[int]) -> List[int]:
        station_division_ids = {
            d.id for d in self.db.query(Division.id).filter(Division.station_id == station_id).all()
        }
        unknown = [d for d in division_ids if d not in station_division_ids]
        if unknown:
            raise ValidationError("Неверный караул")
        return list(dict.fromkeys(division_ids))
