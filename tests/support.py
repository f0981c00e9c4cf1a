"""Shared helpers for tests: in-memory SQLite database, users, bearer headers, API client."""

import unittest
from datetime import UTC, datetime

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.security import create_access_token
from app.main import create_app
from app.models import Base, Order, OrderItem, Product, User
from app.services.permissions import seed_permission_catalog

# Placeholder hash for users that never log in (real bcrypt hashing is slow).
UNUSABLE_PASSWORD_HASH = "!unusable"


def make_engine() -> Engine:
    """Fresh in-memory SQLite database with every table created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


def make_session(engine: Engine) -> Session:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)()


def add_user(
    db: Session,
    username: str,
    role: str = "usuario",
    user_id: int | None = None,
    password_hash: str = UNUSABLE_PASSWORD_HASH,
) -> User:
    user = User(
        id=user_id,
        username=username,
        email=f"{username}@example.com",
        password_hash=password_hash,
        role=role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def add_product(
    db: Session,
    nombre: str = "Papa nativa",
    precio: float = 3.5,
    categoria: str = "tuberculos",
    stock: int = 10,
) -> Product:
    product = Product(nombre=nombre, precio=precio, categoria=categoria, stock=stock)
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


def add_order(
    db: Session,
    user: User,
    fecha: datetime,
    items: list[tuple[Product, int]],
) -> Order:
    """Order whose total is the sum of product price * quantity over items."""
    total = sum(float(p.precio) * qty for p, qty in items)
    order = Order(usuario_id=user.id, fecha=fecha, total=total)
    db.add(order)
    db.flush()
    for product, qty in items:
        db.add(OrderItem(pedido_id=order.id, producto_id=product.id, cantidad=qty, precio=product.precio))
    db.commit()
    return order


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def auth_headers(user: User) -> dict[str, str]:
    return bearer(create_access_token(user))


def utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=UTC)


class DatabaseTestCase(unittest.TestCase):
    """Gives each test a fresh database (with the permission catalog) and a session."""

    def setUp(self) -> None:
        self.engine = make_engine()
        self.db = make_session(self.engine)
        seed_permission_catalog(self.db)

    def tearDown(self) -> None:
        self.db.close()
        self.engine.dispose()


class ApiTestCase(DatabaseTestCase):
    """DatabaseTestCase plus an app bound to the same database and a TestClient."""

    def setUp(self) -> None:
        super().setUp()
        self.app = create_app(engine=self.engine)
        self.client = TestClient(self.app)
        self.admin = add_user(self.db, "admin", role="admin")
        self.admin_headers = auth_headers(self.admin)

    def tearDown(self) -> None:
        self.client.close()
        super().tearDown()
