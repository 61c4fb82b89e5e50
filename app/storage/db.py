# app/storage/db.py
from __future__ import annotations
import os
from contextlib import contextmanager
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

# === CONFIGURACIÓN: medio durable local (SQLite por defecto) ===
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./cart.db")


def make_engine(url: str = DATABASE_URL, **kwargs):
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(
        url,
        echo=False,          # Cambia a True para ver el SQL en consola
        future=True,
        pool_pre_ping=True,  # Verifica conexiones antes de usarlas
        **kwargs,
    )


# === BASE ORM ===
class Base(DeclarativeBase):
    """Clase base para los modelos ORM."""
    pass


def make_session_factory(engine):
    return sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        future=True,
    )


# === CONTEXTO TRANSACCIONAL ===
@contextmanager
def session_scope(factory):
    """Contexto transaccional: commit al salir, rollback si algo falla."""
    db = factory()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
