from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo
from roster.config import settings


class Clock(ABC):
    """Источник текущей даты и времени (местное время части, без часового пояса)"""

    @abstractmethod
    def now(self) -> datetime:
        ...

    def today(self) -> date:
        return self.now().date()


class SystemClock(Clock):
    """Системные часы; если задан часовой пояс части, "сегодня" определяется в нём"""

    def __init__(self, timezone_name: Optional[str] = None):
        self.tz = ZoneInfo(timezone_name) if timezone_name else None

    def now(self) -> datetime:
        if self.tz is None:
            return datetime.now()
        return datetime.now(self.tz).replace(tzinfo=None)


class FixedClock(Clock):
    """Часы с фиксированным моментом"""

    def __init__(self, moment: datetime):
        self.moment = moment

    def now(self) -> datetime:
        return self.moment


def get_clock() -> Clock:
    """Dependency для получения часов"""
    return SystemClock(settings.station_timezone)
