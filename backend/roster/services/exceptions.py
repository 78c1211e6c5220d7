class RosterError(Exception):
    """Базовая ошибка сервисов графика"""


class NotFoundError(RosterError, LookupError):
    """Запись не найдена или принадлежит другой части"""


class AccessDeniedError(RosterError, PermissionError):
    """Недостаточно прав"""


class ValidationError(RosterError, ValueError):
    """Некорректные входные данные"""


class ShiftGenerationError(ValidationError):
    """Не выполнено предусловие генерации смен; ничего не записано"""


class ShiftConflictError(RosterError):
    """Смена или назначение с таким ключом уже существует"""


class ShiftPersistenceError(RosterError):
    """Ошибка хранилища, не связанная с ожидаемым конфликтом ключа"""
