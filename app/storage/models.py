# app/storage/models.py
# ======================================================
# Modelos ORM: snapshots clave/valor del carrito
# ======================================================

from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.sql import func

from .db import Base


class Snapshot(Base):
    """
    Un valor serializado por llave. El carrito usa una sola fila,
    reemplazada completa en cada escritura.
    """
    __tablename__ = "snapshots"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def __repr__(self):
        return f"<Snapshot key={self.key} size={len(self.value or '')}>"
