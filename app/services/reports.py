"""Sales aggregation over pedidos / detalles_pedido for the admin reports and dashboard."""

from datetime import UTC, date, datetime, time, timedelta

from sqlalchemy import desc, func
from sqlalchemy.orm import Session

from app.models import Category, Order, OrderItem, Product, User
from app.schemas.report import (
    DailySales,
    SalesReport,
    SalesSummary,
    TopCustomer,
    TopCustomersReport,
    TopProduct,
    TopProductsReport,
)

RECENT_SALES_DAYS = 30


def _day_bounds(start: date, end: date) -> tuple[datetime, datetime]:
    """[start 00:00, day after end 00:00) so the end day is included in full."""
    lower = datetime.combine(start, time.min, tzinfo=UTC)
    upper = datetime.combine(end + timedelta(days=1), time.min, tzinfo=UTC)
    return lower, upper


def sales_report(db: Session, start: date, end: date) -> SalesReport:
    """Daily totals and order counts between start and end (both inclusive)."""
    lower, upper = _day_bounds(start, end)
    day = func.date(Order.fecha)
    rows = (
        db.query(
            day.label("day"),
            func.sum(Order.total).label("total_sales"),
            func.count(Order.id).label("order_count"),
        )
        .filter(Order.fecha >= lower, Order.fecha < upper)
        .group_by(day)
        .order_by(day)
        .all()
    )
    daily = [
        DailySales(day=r.day, total_sales=float(r.total_sales or 0), order_count=r.order_count)
        for r in rows
    ]
    total_sales = sum(d.total_sales for d in daily)
    total_orders = sum(d.order_count for d in daily)
    average = round(total_sales / total_orders, 2) if total_orders else 0.0
    return SalesReport(
        period_start=start,
        period_end=end,
        daily_sales=daily,
        summary=SalesSummary(
            total_sales=round(total_sales, 2),
            total_orders=total_orders,
            average_order_value=average,
        ),
    )


def top_products(db: Session, limit: int) -> TopProductsReport:
    units = func.sum(OrderItem.cantidad)
    rows = (
        db.query(
            Product.id,
            Product.nombre,
            Product.categoria,
            units.label("units_sold"),
            func.sum(OrderItem.precio * OrderItem.cantidad).label("total_sales"),
        )
        .select_from(OrderItem)
        .join(Product, OrderItem.producto_id == Product.id)
        .group_by(Product.id, Product.nombre, Product.categoria)
        .order_by(desc(units), Product.id)
        .limit(limit)
        .all()
    )
    return TopProductsReport(
        top_products=[
            TopProduct(
                id=r.id,
                nombre=r.nombre,
                categoria=r.categoria,
                units_sold=int(r.units_sold or 0),
                total_sales=float(r.total_sales or 0),
            )
            for r in rows
        ],
        generated_at=datetime.now(UTC),
    )


def top_customers(db: Session, limit: int) -> TopCustomersReport:
    spent = func.sum(Order.total)
    rows = (
        db.query(
            User.id,
            User.username,
            User.nombre,
            User.apellido,
            func.count(Order.id).label("total_orders"),
            spent.label("total_spent"),
        )
        .select_from(Order)
        .join(User, Order.usuario_id == User.id)
        .group_by(User.id, User.username, User.nombre, User.apellido)
        .order_by(desc(spent), User.id)
        .limit(limit)
        .all()
    )
    return TopCustomersReport(
        top_customers=[
            TopCustomer(
                id=r.id,
                username=r.username,
                nombre=r.nombre,
                apellido=r.apellido,
                total_orders=r.total_orders,
                total_spent=float(r.total_spent or 0),
            )
            for r in rows
        ],
        generated_at=datetime.now(UTC),
    )


def dashboard_counts(db: Session, now: datetime | None = None) -> dict[str, float | int]:
    """Row counts per table plus the order total of the last RECENT_SALES_DAYS days."""
    cutoff = (now or datetime.now(UTC)) - timedelta(days=RECENT_SALES_DAYS)
    recent = db.query(func.sum(Order.total)).filter(Order.fecha > cutoff).scalar()
    return {
        "users": db.query(func.count(User.id)).scalar() or 0,
        "products": db.query(func.count(Product.id)).scalar() or 0,
        "categories": db.query(func.count(Category.id)).scalar() or 0,
        "orders": db.query(func.count(Order.id)).scalar() or 0,
        "recent_sales": float(recent or 0),
    }
