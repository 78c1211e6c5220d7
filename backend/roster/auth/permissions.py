from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session
from roster.database import get_db
from roster.models import Membership, UserRole
from roster.auth.dependencies import get_current_user
import logging

logger = logging.getLogger(__name__)


def get_current_membership(
    db: Session = Depends(get_db),
    current_user: dict = Depends(get_current_user)
) -> Membership:
    """Членство текущего пользователя в части"""
    membership = db.query(Membership).filter(
        Membership.user_id == current_user["user_id"]
    ).first()
    
    if not membership:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Пользователь не состоит ни в одной части"
        )
    return membership


def require_role(minimum_role: UserRole):
    """Фабрика dependency: пропускает пользователей с ролью не ниже minimum_role"""
    
    def dependency(membership: Membership = Depends(get_current_membership)) -> Membership:
        if not membership.has_minimum_role(minimum_role):
            logger.warning(
                f"Отказ в доступе: пользователь {membership.user_id} "
                f"с ролью {membership.role} (требуется {minimum_role.value})"
            )
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Нет прав")
        return membership
    
    return dependency


require_admin = require_role(UserRole.ADMIN)
require_editor = require_role(UserRole.EDITOR)
