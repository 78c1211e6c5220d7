from sqlalchemy.orm import Session
from typing import List
from roster.models import Person
from roster.schemas.person import PersonCreate, PersonUpdate
from roster.services.display_cache import display_cache
from roster.services.exceptions import NotFoundError, ValidationError
import logging

logger = logging.getLogger(__name__)


def get_station_person(db: Session, station_id: int, person_id: int) -> Person:
    """
    Сотрудник, которого можно назначить в смену части

    Raises:
        ValidationError: сотрудника нет или он из другой части
    """
    person = db.query(Person).filter(Person.id == person_id).first()
    if not person or person.station_id != station_id:
        raise ValidationError("Сотрудник не найден")
    return person


class PeopleService:
    """Сервис для работы с сотрудниками части"""

    def __init__(self, db: Session):
        self.db = db

    def list_people(self, station_id: int, active_only: bool = False) -> List[Person]:
        query = self.db.query(Person).filter(Person.station_id == station_id)
        if active_only:
            query = query.filter(Person.active == True)
        return query.order_by(Person.name).all()

    def get_person(self, station_id: int, person_id: int) -> Person:
        person = self.db.query(Person).filter(Person.id == person_id).first()
        if not person or person.station_id != station_id:
            raise NotFoundError("Сотрудник не найден")
        return person

    def create_person(self, station_id: int, data: PersonCreate) -> Person:
        person = Person(
            station_id=station_id,
            name=self._clean_name(data.name),
            rank=data.rank or None,
            photo_url=data.photo_url or None,
            active=True
        )
        self.db.add(person)
        self.db.commit()
        self.db.refresh(person)
        logger.info(f"Добавлен сотрудник {person.name} в часть {station_id}")
        return person

    def update_person(self, station_id: int, person_id: int, data: PersonUpdate) -> Person:
        """Обновить имя, звание и фото сотрудника"""
        person = self.get_person(station_id, person_id)
        person.name = self._clean_name(data.name)
        person.rank = data.rank.strip() if data.rank and data.rank.strip() else None
        person.photo_url = data.photo_url.strip() if data.photo_url and data.photo_url.strip() else None
        self.db.commit()
        self.db.refresh(person)
        display_cache.invalidate(station_id)
        logger.info(f"Обновлен сотрудник {person_id}")
        return person

    def toggle_active(self, station_id: int, person_id: int) -> Person:
        person = self.get_person(station_id, person_id)
        person.active = not person.active
        self.db.commit()
        self.db.refresh(person)
        logger.info(f"Статус сотрудника {person_id} изменен на {'активен' if person.active else 'неактивен'}")
        return person

    def delete_person(self, station_id: int, person_id: int) -> None:
        """Удалить сотрудника; его места в сменах становятся свободными"""
        person = self.get_person(station_id, person_id)
        self.db.delete(person)
        self.db.commit()
        display_cache.invalidate(station_id)
        logger.info(f"Удален сотрудник с ID {person_id}")

    @staticmethod
    def _clean_name(name: str) -> str:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Имя обязательно")
        return name
