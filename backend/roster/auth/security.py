from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from roster.config import settings
import jwt
import logging

logger = logging.getLogger(__name__)


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """Создать JWT токен; в sub хранится ID пользователя провайдера идентификации"""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> Optional[Dict[str, Any]]:
    """Проверить токен и вернуть payload или None"""
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        logger.info("Токен просрочен")
        return None
    except jwt.InvalidTokenError as e:
        logger.warning(f"Неверный токен: {e}")
        return None
