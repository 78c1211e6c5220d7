from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker
from roster.config import settings
import os

# Создаем директорию для базы данных, если её нет
db_dir = os.path.dirname(settings.database_url.replace("sqlite:///", ""))
if "sqlite" in settings.database_url and db_dir and not os.path.exists(db_dir):
    os.makedirs(db_dir, exist_ok=True)

engine = create_engine(
    settings.database_url,
    connect_args={"check_same_thread": False} if "sqlite" in settings.database_url else {}
)


def enable_sqlite_foreign_keys(target_engine):
    """SQLite не проверяет внешние ключи и ON DELETE CASCADE без PRAGMA"""
    if target_engine.dialect.name != "sqlite":
        return

    @event.listens_for(target_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


enable_sqlite_foreign_keys(engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Dependency для получения сессии базы данных"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
