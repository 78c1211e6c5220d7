"""
Ротация караулов: чистые вычисления без обращения к базе данных.

Караул на дневную и ночную смену любой даты однозначно определяется
датой, точкой отсчёта цикла, порядком караулов и интервалом пересменки.
"""
from dataclasses import dataclass, asdict
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, List, Optional, Sequence, Tuple
from roster.models.shift import ShiftLabel, ShiftStatus
import logging

logger = logging.getLogger(__name__)

# Границы дневной смены для ручного создания: 07:00 <= начало < 19:00
MANUAL_DAY_START_HOUR = 7
MANUAL_NIGHT_START_HOUR = 19


@dataclass(frozen=True)
class RotationConfig:
    """Параметры цикла ротации части"""
    start_date: date
    order_division_ids: Tuple[Any, ...]
    switch_hours: int = 12


@dataclass(frozen=True)
class TemplateTimes:
    """Время начала и окончания из шаблона смены"""
    start_time: time
    end_time: time

    @classmethod
    def from_strings(cls, start_time: str, end_time: str) -> "TemplateTimes":
        return cls(parse_time_of_day(start_time), parse_time_of_day(end_time))


@dataclass(frozen=True)
class CandidateShift:
    """Смена-кандидат для вставки"""
    station_id: int
    division_id: Any
    starts_at: datetime
    ends_at: datetime
    label: str
    status: str = ShiftStatus.DRAFT.value

    def as_row(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DutyAssignment:
    """Караулы на дневную и ночную смену одной даты"""
    date: date
    day_division_id: Optional[Any]
    night_division_id: Optional[Any]


def parse_time_of_day(value: str) -> time:
    """
    Разобрать время суток "HH:MM" (секунды, если есть, отбрасываются)

    Raises:
        ValueError: если строка не является временем суток
    """
    if not isinstance(value, str):
        raise ValueError(f"Некорректное время: {value!r}")
    parts = value.strip().split(":")
    if len(parts) < 2:
        raise ValueError(f"Некорректное время: {value!r}")
    try:
        hour = int(parts[0])
        minute = int(parts[1])
    except ValueError:
        raise ValueError(f"Некорректное время: {value!r}") from None
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ValueError(f"Некорректное время: {value!r}")
    return time(hour, minute)


def format_time_of_day(value: time) -> str:
    return value.strftime("%H:%M")


def wrap_index(value: int, modulus: int) -> int:
    """Неотрицательный остаток от деления (математический модуль, а не остаток)"""
    if modulus <= 0:
        raise ValueError("Модуль ротации должен быть положительным")
    # В Python % с положительным модулем всегда возвращает значение в [0, modulus)
    return value % modulus


def days_since_start(current_date: date, start_date: date) -> int:
    """Знаковое число дней от точки отсчёта цикла (отрицательно до неё)"""
    return (current_date - start_date).days


def division_indices(
    current_date: date,
    start_date: date,
    division_count: int,
    switch_hours: int
) -> Tuple[int, int]:
    """
    Индексы караулов в порядке ротации для дневной и ночной смены даты

    Ночной индекс считается от несвёрнутого смещения дней, а не от уже
    свёрнутого дневного индекса.

    Returns:
        (индекс дневного караула, индекс ночного караула)
    """
    diff_days = days_since_start(current_date, start_date)
    day_index = wrap_index(diff_days, division_count)
    night_index = wrap_index(diff_days + switch_hours // 24, division_count)
    return day_index, night_index


def divisions_on_duty(current_date: date, config: RotationConfig) -> DutyAssignment:
    """Определить караулы на дневную и ночную смену указанной даты"""
    order = config.order_division_ids
    if not order:
        raise ValueError("Порядок ротации должен содержать хотя бы один караул")
    day_index, night_index = division_indices(
        current_date, config.start_date, len(order), config.switch_hours
    )
    return DutyAssignment(
        date=current_date,
        day_division_id=_resolve_division(order, day_index),
        night_division_id=_resolve_division(order, night_index),
    )


def _resolve_division(order: Sequence[Any], index: int) -> Optional[Any]:
    if 0 <= index < len(order):
        return order[index]
    return None


def combine(day: date, at: time) -> datetime:
    """Наивная местная метка времени: дата + время суток, без часового пояса"""
    return datetime.combine(day, at)


def day_shift_window(day: date, times: TemplateTimes) -> Tuple[datetime, datetime]:
    """Дневная смена переходит на следующие сутки, только если конец <= начала"""
    starts_at = combine(day, times.start_time)
    ends_at = combine(day, times.end_time)
    if ends_at <= starts_at:
        ends_at += timedelta(days=1)
    return starts_at, ends_at


def night_shift_window(day: date, times: TemplateTimes) -> Tuple[datetime, datetime]:
    """Ночная смена всегда заканчивается на следующие сутки"""
    starts_at = combine(day, times.start_time)
    ends_at = combine(day + timedelta(days=1), times.end_time)
    return starts_at, ends_at


def manual_shift_window(day: date, times: TemplateTimes) -> Tuple[datetime, datetime]:
    """
    Окно смены, созданной вручную: конец переносится на следующие сутки,
    если время окончания не позже времени начала.

    Правило отличается от правила генератора для ночных смен.
    """
    starts_at = combine(day, times.start_time)
    ends_at = combine(day, times.end_time)
    if times.end_time <= times.start_time:
        ends_at += timedelta(days=1)
    return starts_at, ends_at


def label_for_start(start_time: time) -> str:
    """Метка смены по часу начала: с 07 до 19 DAY, иначе NIGHT"""
    if MANUAL_DAY_START_HOUR <= start_time.hour < MANUAL_NIGHT_START_HOUR:
        return ShiftLabel.DAY.value
    return ShiftLabel.NIGHT.value


def rotation_plan(config: RotationConfig, window_start: date, window_days: int) -> List[DutyAssignment]:
    """Караулы на каждую дату окна без построения смен"""
    return [
        divisions_on_duty(window_start + timedelta(days=offset), config)
        for offset in range(window_days)
    ]


def build_candidate_shifts(
    station_id: int,
    config: RotationConfig,
    day_template: TemplateTimes,
    night_template: TemplateTimes,
    window_start: date,
    window_days: int
) -> List[CandidateShift]:
    """
    Построить смены-кандидаты на окно дат

    Для каждой даты окна создаются дневная и ночная смена. Если индекс
    указывает на отсутствующий караул, эта смена пропускается с
    предупреждением, генерация продолжается.

    Args:
        station_id: ID части
        config: Параметры цикла ротации
        day_template: Время дневной смены
        night_template: Время ночной смены
        window_start: Первая дата окна ("сегодня")
        window_days: Количество дней в окне

    Returns:
        Список кандидатов (2 × window_days при отсутствии пропусков)
    """
    candidates: List[CandidateShift] = []

    for duty in rotation_plan(config, window_start, window_days):
        if duty.day_division_id is None:
            logger.warning(
                f"Пропуск дневной смены {duty.date}: караул не найден "
                f"(смещение {days_since_start(duty.date, config.start_date)} дн.)"
            )
        else:
            starts_at, ends_at = day_shift_window(duty.date, day_template)
            candidates.append(CandidateShift(
                station_id=station_id,
                division_id=duty.day_division_id,
                starts_at=starts_at,
                ends_at=ends_at,
                label=ShiftLabel.DAY.value,
            ))

        if duty.night_division_id is None:
            logger.warning(
                f"Пропуск ночной смены {duty.date}: караул не найден "
                f"(смещение {days_since_start(duty.date, config.start_date)} дн.)"
            )
        else:
            starts_at, ends_at = night_shift_window(duty.date, night_template)
            candidates.append(CandidateShift(
                station_id=station_id,
                division_id=duty.night_division_id,
                starts_at=starts_at,
                ends_at=ends_at,
                label=ShiftLabel.NIGHT.value,
            ))

    return candidates
