"""Pydantic schemas for product catalog endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class ProductCreate(BaseModel):
    """nombre, precio and categoria are required; checked by the route so a miss is a 400."""

    nombre: str | None = Field(default=None, max_length=255)
    descripcion: str | None = None
    precio: float | None = Field(default=None, ge=0)
    stock: int | None = Field(default=0, ge=0)
    categoria: str | None = Field(default=None, max_length=100)
    imagen: str | None = Field(default=None, max_length=1024)


class ProductUpdate(BaseModel):
    """Partial update: only fields present in the body are written."""

    nombre: str | None = Field(default=None, min_length=1, max_length=255)
    descripcion: str | None = None
    precio: float | None = Field(default=None, ge=0)
    stock: int | None = Field(default=None, ge=0)
    categoria: str | None = Field(default=None, min_length=1, max_length=100)
    imagen: str | None = Field(default=None, max_length=1024)


class ProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    nombre: str
    descripcion: str | None = None
    precio: float
    stock: int | None = None
    categoria: str
    imagen: str | None = None
