"""
Pytest configuration - shared fixtures
"""
import sys
import os
from typing import Generator
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

# Add backend directory to sys.path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../backend"))

# Import models
from kanaku.database import Base, get_db
from kanaku.core.limiter import limiter
from kanaku.core.security import get_password_hash
from kanaku.dependencies import get_current_user
from kanaku.main import app
from kanaku.models import (
    User,
    ShopEmployee,
    Category,
    Brand,
    PriceType,
    Supplier,
)
from kanaku.models.enums import EmployeeStatus, UserRole
from kanaku.schemas import ProductCreate, ProductPriceIn, ShopCreate
from kanaku.services.product_service import product_service
from kanaku.services.shop_service import shop_service

TEST_PASSWORD = "secret-pass-123"


@pytest.fixture
def test_db() -> Generator[Session, None, None]:
    """Create in-memory SQLite database for testing"""
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine, autoflush=False)
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)
        engine.dispose()


@pytest.fixture
def db_session(test_db):
    """Alias for test_db for clarity"""
    return test_db


def make_user(session: Session, email: str, full_name: str = None) -> User:
    user = User(
        email=email,
        full_name=full_name,
        hashed_password=get_password_hash(TEST_PASSWORD),
        is_active=True,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def owner(test_db) -> User:
    return make_user(test_db, "owner@kadai.in", "Selvi Raman")


@pytest.fixture
def cashier(test_db) -> User:
    return make_user(test_db, "cashier@kadai.in", "Arun")


@pytest.fixture
def stranger(test_db) -> User:
    return make_user(test_db, "stranger@example.com")


@pytest.fixture
def shop(test_db, owner):
    """Shop owned by `owner` (comes with the default Retail price type)."""
    return shop_service.create_shop(
        test_db,
        owner,
        ShopCreate(
            name="Murugan Stores",
            name_tamil="முருகன் ஸ்டோர்ஸ்",
            address="12 Car Street, Madurai",
            phone="9876543210",
            gstin="33ABCDE1234F1Z5",
        ),
    )


@pytest.fixture
def shop_with_cashier(test_db, shop, cashier):
    test_db.add(ShopEmployee(
        shop_id=shop.id,
        user_id=cashier.id,
        invited_email=cashier.email,
        role=UserRole.CASHIER,
        status=EmployeeStatus.ACTIVE,
    ))
    test_db.commit()
    return shop


@pytest.fixture
def retail_price_type(test_db, shop) -> PriceType:
    return test_db.query(PriceType).filter_by(shop_id=shop.id, is_default=True).one()


@pytest.fixture
def wholesale_price_type(test_db, shop) -> PriceType:
    price_type = PriceType(shop_id=shop.id, name="Wholesale", is_default=False)
    test_db.add(price_type)
    test_db.commit()
    test_db.refresh(price_type)
    return price_type


@pytest.fixture
def populated_shop(test_db, shop, owner, wholesale_price_type):
    """Shop with a category, a brand, a supplier and three products."""
    groceries = Category(shop_id=shop.id, name="Groceries", name_tamil="மளிகை")
    brand = Brand(shop_id=shop.id, name="Aachi")
    supplier = Supplier(shop_id=shop.id, name="Meenakshi Traders", contact_person="Kumar", phone="9443012345")
    test_db.add_all([groceries, brand, supplier])
    test_db.commit()

    rice = product_service.create_product(test_db, shop.id, ProductCreate(
        name="Ponni Rice",
        name_tamil="பொன்னி அரிசி",
        category_id=groceries.id,
        sku="RICE-5",
        barcode="8901234567890",
        mrp=70,
        cost_price=55,
        default_selling_price=65,
        gst_percent=5,
        hsn_code="1006",
        unit="kg",
        track_inventory=True,
        stock_quantity=50,
        low_stock_threshold=10,
        prices=[ProductPriceIn(price_type_id=wholesale_price_type.id, selling_price=60)],
    ), owner.id)
    masala = product_service.create_product(test_db, shop.id, ProductCreate(
        name="Sambar Powder",
        brand_id=brand.id,
        category_id=groceries.id,
        sku="AACHI-SP",
        mrp=45,
        cost_price=30,
        default_selling_price=40,
        gst_percent=12,
        unit="pcs",
        track_inventory=True,
        stock_quantity=5,
    ), owner.id)
    bag = product_service.create_product(test_db, shop.id, ProductCreate(
        name="Carry Bag",
        default_selling_price=5,
        unit="pcs",
        track_inventory=False,
    ), owner.id)

    return {
        "shop": shop,
        "category": groceries,
        "brand": brand,
        "supplier": supplier,
        "rice": rice,
        "masala": masala,
        "bag": bag,
        "wholesale": wholesale_price_type,
    }


@pytest.fixture
def client(test_db) -> Generator[TestClient, None, None]:
    """TestClient bound to the in-memory database."""
    def _get_db():
        yield test_db

    app.dependency_overrides[get_db] = _get_db
    limiter.reset()
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def act_as(client, test_db):
    """Make API requests as the given user without going through login."""
    def _act_as(user: User):
        def _get_current_user():
            return test_db.get(User, user.id)
        app.dependency_overrides[get_current_user] = _get_current_user
        return client
    return _act_as
