"""ORM model for application users (auth, RBAC and delegated access tokens)."""

from sqlalchemy import Column, DateTime, Integer, String, Text, func

from app.models.base import Base


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    role: 'admin', 'vendedor' or 'usuario'

    access_token / token_expiration mirror the last delegated token issued by an
    admin. Clearing them revokes that token even though its signature still verifies.
    """

    __tablename__ = "usuarios"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(50), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column("password", String(255), nullable=False)
    nombre = Column(String(100), nullable=True)
    apellido = Column(String(100), nullable=True)
    telefono = Column(String(20), nullable=True)
    role = Column("rol", String(16), nullable=False, default="usuario")
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    last_login = Column(DateTime(timezone=True), nullable=True)
    access_token = Column("token_acceso", Text, nullable=True)
    token_expiration = Column("token_expiracion", DateTime(timezone=True), nullable=True)
