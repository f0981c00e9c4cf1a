"""Sales and ranking reports.

Open to admins and to holders of a delegated token whose embedded claims include
``view_reports`` while that token is still the one stored for its user.
"""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api.v1.auth import require_token_permission
from app.core.database import get_db
from app.core.permissions import VIEW_REPORTS
from app.schemas.report import SalesReport, TopCustomersReport, TopProductsReport
from app.services import reports

router = APIRouter(dependencies=[Depends(require_token_permission(VIEW_REPORTS))])


@router.get("/sales", response_model=SalesReport)
def get_sales_report(
    db: Annotated[Session, Depends(get_db)],
    start_date: Annotated[date | None, Query(alias="startDate")] = None,
    end_date: Annotated[date | None, Query(alias="endDate")] = None,
) -> SalesReport:
    """Daily sales between startDate and endDate (YYYY-MM-DD, both inclusive)."""
    if start_date is None or end_date is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="startDate and endDate are required for the report.",
        )
    if end_date < start_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="endDate must not be before startDate.",
        )
    return reports.sales_report(db, start_date, end_date)


@router.get("/top-products", response_model=TopProductsReport)
def get_top_products_report(
    db: Annotated[Session, Depends(get_db)],
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
) -> TopProductsReport:
    return reports.top_products(db, limit)


@router.get("/top-customers", response_model=TopCustomersReport)
def get_top_customers_report(
    db: Annotated[Session, Depends(get_db)],
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
) -> TopCustomersReport:
    return reports.top_customers(db, limit)
