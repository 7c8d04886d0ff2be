"""Modelo SQLAlchemy para la tabla de usuarios.

Los nombres de tabla y columnas se mantienen en español porque la tabla
``usuarios`` es compartida con otros sistemas.
"""

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Index,
    Integer,
    SmallInteger,
    String,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.common.database import Base

ROLES = ("cliente", "admin")
ROL_POR_DEFECTO = "cliente"
ACTIVO_POR_DEFECTO = 1


class Usuario(Base):
    """Usuario del sistema.

    ``password`` guarda únicamente el hash; nunca forma parte de las
    proyecciones de lectura.
    """

    __tablename__ = "usuarios"
    __table_args__ = (
        CheckConstraint("rol IN ('cliente', 'admin')", name="rol_valido"),
        CheckConstraint("activo IN (0, 1)", name="activo_valido"),
        {"comment": "Usuarios de la aplicación"},
    )

    id: Mapped[int] = mapped_column(
        "idusuario", Integer, primary_key=True, autoincrement=True
    )
    nombre: Mapped[str] = mapped_column(
        String(100), nullable=False, comment="Nombre del usuario"
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Correo electrónico, único sin distinguir mayúsculas",
    )
    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Hash bcrypt de la contraseña (nunca texto plano)",
    )
    rol: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ROL_POR_DEFECTO, server_default=ROL_POR_DEFECTO
    )
    fechacreacion: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
        comment="Fecha y hora de creación del usuario",
    )
    activo: Mapped[int] = mapped_column(
        SmallInteger,
        nullable=False,
        default=ACTIVO_POR_DEFECTO,
        server_default="1",
        comment="1 si la cuenta está activa, 0 en caso contrario",
    )

    def __repr__(self) -> str:
        return f"<Usuario {self.id} {self.email}>"


# Unicidad del email sin distinguir mayúsculas
Index("uq_usuarios_email_lower", func.lower(Usuario.email), unique=True)


# Columnas que pueden salir en una respuesta (sin la contraseña).
# La columna física es idusuario; en las respuestas se llama id.
PUBLIC_COLUMNS = (
    Usuario.id.label("id"),
    Usuario.nombre,
    Usuario.email,
    Usuario.rol,
    Usuario.fechacreacion,
    Usuario.activo,
)
