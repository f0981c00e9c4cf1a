"""Pydantic schemas for sales and ranking reports."""

from datetime import date, datetime

from pydantic import Field

from app.schemas.base import CamelModel


class DailySales(CamelModel):
    day: date
    total_sales: float
    order_count: int


class SalesSummary(CamelModel):
    total_sales: float
    total_orders: int
    average_order_value: float = Field(description="total_sales / total_orders, 2 decimals")


class SalesReport(CamelModel):
    period_start: date
    period_end: date
    daily_sales: list[DailySales]
    summary: SalesSummary


class TopProduct(CamelModel):
    id: int
    nombre: str
    categoria: str
    units_sold: int
    total_sales: float


class TopProductsReport(CamelModel):
    top_products: list[TopProduct]
    generated_at: datetime


class TopCustomer(CamelModel):
    id: int
    username: str
    nombre: str | None = None
    apellido: str | None = None
    total_orders: int
    total_spent: float


class TopCustomersReport(CamelModel):
    top_customers: list[TopCustomer]
    generated_at: datetime
