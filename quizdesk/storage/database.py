"""SQLite/SQLAlchemy storage backend."""
from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import sqlalchemy as sa
from sqlalchemy import String, Text, create_engine, delete, make_url, select
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, sessionmaker


class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


class StoredValue(Base):
    """One key/value pair (progress snapshot, token, user payload)."""

    __tablename__ = "stored_values"

    key: Mapped[str] = mapped_column(String(200), primary_key=True, index=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )


class DatabaseStorage:
    def __init__(self, database_url: str) -> None:
        url = make_url(database_url)
        if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        self.engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False} if database_url.startswith("sqlite") else {},
        )
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        Base.metadata.create_all(bind=self.engine)

    def get(self, key: str) -> str | None:
        with self.SessionLocal() as db:
            row = db.get(StoredValue, key)
            return row.value if row else None

    def set(self, key: str, value: str) -> None:
        with self.SessionLocal() as db:
            row = db.get(StoredValue, key)
            if row:
                row.value = value
            else:
                db.add(StoredValue(key=key, value=value))
            db.commit()

    def clear(self, key: str) -> None:
        with self.SessionLocal() as db:
            db.execute(delete(StoredValue).where(StoredValue.key == key))
            db.commit()

    def keys(self, prefix: str = "") -> list[str]:
        with self.SessionLocal() as db:
            query = select(StoredValue.key).order_by(StoredValue.key)
            if prefix:
                query = query.where(StoredValue.key.startswith(prefix, autoescape=True))
            return list(db.execute(query).scalars().all())

    def dispose(self) -> None:
        self.engine.dispose()
