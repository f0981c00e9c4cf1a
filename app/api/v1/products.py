"""Product catalog CRUD. Reads are public; writes need a role or an assigned permission."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.v1.auth import require_permissions, require_vendor_or_admin
from app.core.database import get_db
from app.core.permissions import DELETE_PRODUCTS, EDIT_PRODUCTS
from app.models import Product
from app.schemas.access import MessageResponse
from app.schemas.auth import CurrentUser
from app.schemas.product import ProductCreate, ProductResponse, ProductUpdate

router = APIRouter()


def _get_or_404(db: Session, product_id: int) -> Product:
    product = db.query(Product).filter(Product.id == product_id).first()
    if product is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found.")
    return product


@router.get("", response_model=list[ProductResponse])
def list_products(
    db: Annotated[Session, Depends(get_db)],
) -> list[ProductResponse]:
    products = db.query(Product).order_by(Product.id).all()
    return [ProductResponse.model_validate(p) for p in products]


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> ProductResponse:
    return ProductResponse.model_validate(_get_or_404(db, product_id))


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    body: ProductCreate,
    _user: Annotated[CurrentUser, Depends(require_vendor_or_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> ProductResponse:
    if not body.nombre or body.precio is None or not body.categoria:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please provide at least nombre, precio and categoria.",
        )
    product = Product(**body.model_dump())
    db.add(product)
    db.commit()
    db.refresh(product)
    return ProductResponse.model_validate(product)


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: int,
    body: ProductUpdate,
    _user: Annotated[CurrentUser, Depends(require_permissions(EDIT_PRODUCTS))],
    db: Annotated[Session, Depends(get_db)],
) -> ProductResponse:
    """Update only the fields present in the body."""
    product = _get_or_404(db, product_id)
    for field, value in body.model_dump(exclude_unset=True).items():
        setattr(product, field, value)
    db.commit()
    db.refresh(product)
    return ProductResponse.model_validate(product)


@router.delete("/{product_id}", response_model=MessageResponse)
def delete_product(
    product_id: int,
    _user: Annotated[CurrentUser, Depends(require_permissions(DELETE_PRODUCTS))],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    product = _get_or_404(db, product_id)
    db.delete(product)
    db.commit()
    return MessageResponse(message="Product deleted successfully")
