import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RATE_LIMIT_MAX_CALLS", "10000")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.session import Base
from app.models import user as _user_models, catalog as _catalog_models, activity as _activity_models  # noqa: F401
from app.models.user import User
from app.models.catalog import Material, MaterialCategory
from app.main import app
from app.auth.deps import get_db
from app.utils.security import TokenClaims, create_access_token, hash_password

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSession = sessionmaker(bind=engine, autoflush=False, autocommit=False)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def make_user(db, email="someone@example.com", role="customer", password="secret-pass", name="Some One", **extra):
    user = User(name=name, email=email, password_hash=hash_password(password), role=role, **extra)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_category(db, name, parent=None, sort_order=0, is_active=True, slug=None):
    from app.categories.tree import slugify
    category = MaterialCategory(
        name=name,
        slug=slug or slugify(name),
        parent_id=parent.id if parent is not None else None,
        sort_order=sort_order,
        is_active=is_active,
    )
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


def make_material(db, name, category, unit_cost="10.00", unit="sqft", description=None, is_active=True, **extra):
    from decimal import Decimal
    material = Material(
        name=name,
        category_id=category.id,
        unit=unit,
        unit_cost=Decimal(unit_cost),
        description=description,
        is_active=is_active,
        **extra,
    )
    db.add(material)
    db.commit()
    db.refresh(material)
    return material


def auth_headers(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(TokenClaims.for_user(user))}"}


@pytest.fixture
def admin(db):
    return make_user(db, email="admin@example.com", role="admin", name="Admin")


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def customer_headers(db):
    return auth_headers(make_user(db, email="customer@example.com", role="customer", name="Customer"))


@pytest.fixture
def flooring_tree(db):
    """Flooring > (Hardwood, Tile, Laminate) and a separate Paint root."""
    flooring = make_category(db, "Flooring", sort_order=1)
    hardwood = make_category(db, "Hardwood", parent=flooring, sort_order=1)
    tile = make_category(db, "Tile", parent=flooring, sort_order=2)
    laminate = make_category(db, "Laminate", parent=flooring, sort_order=3)
    paint = make_category(db, "Paint", sort_order=2)
    return {"flooring": flooring, "hardwood": hardwood, "tile": tile, "laminate": laminate, "paint": paint}
