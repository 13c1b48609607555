import os

os.environ["ENV"] = "testing"
os.environ.setdefault("LOG_DIR", "logs")

import pytest
from datetime import datetime, timedelta
from decimal import Decimal
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from core.database import Base
from services.app_controller import AppController
from services.auth_service import AuthService
from services.auth_session import AuthSession
from services.collection_client import SqlCollectionClient, USERS, PRODUCTS, CATEGORIES
from utils.deps import get_controller

# In-memory SQLite shared by every session of a test
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool
)

TestingSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)

PASSWORD = "TestPassword123!"
BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


@pytest.fixture
def session_factory():
    """
    Fresh, empty schema for each test.
    """
    Base.metadata.create_all(bind=engine)
    yield TestingSessionLocal
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def collection_client(session_factory):
    return SqlCollectionClient(session_factory)


async def create_user(client, user_id: str, email: str):
    await client.create(USERS, {
        "id": user_id,
        "email": email,
        "display_name": email.split("@")[0],
        "hashed_password": AuthService.get_password_hash(PASSWORD),
        "created_at": BASE_TIME,
    })


@pytest.fixture
async def shopper(collection_client):
    await create_user(collection_client, "user_1", "shopper@example.com")
    return {"id": "user_1", "email": "shopper@example.com", "password": PASSWORD}


@pytest.fixture
async def other_shopper(collection_client):
    await create_user(collection_client, "user_2", "other@example.com")
    return {"id": "user_2", "email": "other@example.com", "password": PASSWORD}


def product_record(product_id: str, title: str, price: str, **fields) -> dict:
    record = {
        "id": product_id,
        "title": title,
        "description": fields.pop("description", f"{title} description"),
        "brand": fields.pop("brand", "Acme"),
        "category": fields.pop("category", "cat_electronics"),
        "price": Decimal(price),
        "rating": fields.pop("rating", 4.0),
        "review_count": 10,
        "in_stock": True,
        "stock_quantity": 5,
        "created_at": fields.pop("created_at", BASE_TIME),
        "updated_at": BASE_TIME,
    }
    record.update(fields)
    return record


@pytest.fixture
async def catalog(collection_client):
    """
    p1..p4 with increasing created_at, so the newest-first fetch order is p4, p3, p2, p1.
    """
    products = [
        product_record("p1", "Laptop", "19.99", brand="Zenbook", rating=4.5,
                       created_at=BASE_TIME),
        product_record("p2", "Lamp", "35.00", brand="Lumina", category="cat_homegarden",
                       rating=3.0, created_at=BASE_TIME + timedelta(days=1)),
        product_record("p3", "Phone", "250.00", brand="Pixel", rating=4.8,
                       created_at=BASE_TIME + timedelta(days=2)),
        product_record("p4", "Novel", "12.50", brand="Penguin", category="cat_books",
                       description="A lap-time thriller", rating=4.5,
                       created_at=BASE_TIME + timedelta(days=3)),
    ]
    for record in products:
        await collection_client.create(PRODUCTS, record)

    for category_id, name, slug in [("c2", "Electronics", "electronics"),
                                    ("c1", "Books", "books"),
                                    ("c3", "Home & Garden", "home-garden")]:
        await collection_client.create(CATEGORIES, {
            "id": category_id, "name": name, "slug": slug, "created_at": BASE_TIME
        })

    return products


@pytest.fixture
async def controller(collection_client, catalog):
    """Started controller with an anonymous session."""
    controller = AppController(AuthSession(collection_client), collection_client)
    await controller.start()
    yield controller
    controller.close()


@pytest.fixture
async def signed_in_controller(controller, shopper):
    await controller.session.login(shopper["email"], shopper["password"])
    return controller


@pytest.fixture
async def client(controller):
    """
    Async HTTP client against the app, wired to the test controller.
    """
    app.dependency_overrides[get_controller] = lambda: controller
    app.state.controller = controller

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
    del app.state.controller
