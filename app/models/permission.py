"""ORM models for the permission catalog and per-user permission assignments."""

from sqlalchemy import Column, ForeignKey, Integer, String

from app.models.base import Base


class Permission(Base):
    """A named capability from the fixed catalog (see app.core.permissions)."""

    __tablename__ = "permisos"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column("nombre", String(100), nullable=False, unique=True, index=True)
    description = Column("descripcion", String(255), nullable=True)


class UserPermission(Base):
    """Grants one permission to one user, independently of the user's role."""

    __tablename__ = "usuario_permisos"

    user_id = Column(
        "usuario_id",
        Integer,
        ForeignKey("usuarios.id", ondelete="CASCADE"),
        primary_key=True,
    )
    permission_id = Column(
        "permiso_id",
        Integer,
        ForeignKey("permisos.id", ondelete="CASCADE"),
        primary_key=True,
    )
