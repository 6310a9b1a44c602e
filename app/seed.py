"""Populate a fresh database with demo users, the category tree and sample materials.

Run with ``python -m app.seed``. Rows that already exist (matched by email,
slug or material name) are left untouched, so the script can be re-run.
"""

import logging
from decimal import Decimal
from sqlalchemy.orm import Session
from app.db.session import SessionLocal, init_db
from app.models.user import User
from app.models.activity import Expert
from app.models.catalog import Material, MaterialCategory
from app.utils.security import hash_password

logger = logging.getLogger(__name__)

USERS = [
    # (name, email, password, role)
    ("Admin User", "admin@dm-building.com", "admin123", "admin"),
    ("CM Team Member", "cm@dm-building.com", "cm123456", "cm_team"),
    ("Expert Consultant", "expert@dm-building.com", "expert123", "expert"),
    ("John Customer", "customer@example.com", "customer123", "customer"),
]

# (root name, slug, [(child name, child slug), ...])
CATEGORIES = [
    ("Flooring", "flooring", [("Hardwood", "hardwood"), ("Tile", "tile"), ("Laminate", "laminate")]),
    ("Paint", "paint", [("Interior", "interior-paint"), ("Exterior", "exterior-paint")]),
    ("Lighting", "lighting", [("Indoor", "indoor-lighting"), ("Outdoor", "outdoor-lighting")]),
    ("Furniture", "furniture", [("Kitchen", "kitchen-furniture"), ("Living Room", "living-room-furniture")]),
    ("Windows & Doors", "windows-doors", []),
]

# (category slug, name, unit, unit cost, description)
MATERIALS = [
    ("hardwood", "Oak Hardwood Flooring", "sqft", "8.50", "Premium oak hardwood flooring, 3/4 inch thick"),
    ("hardwood", "Maple Hardwood Flooring", "sqft", "9.25", "High-quality maple hardwood flooring, 3/4 inch thick"),
    ("hardwood", "Cherry Hardwood Flooring", "sqft", "10.50", "Premium cherry hardwood flooring, 3/4 inch thick"),
    ("tile", "Ceramic Tile", "sqft", "3.25", "High-quality ceramic tile, 12x12 inches"),
    ("tile", "Porcelain Tile", "sqft", "4.50", "Durable porcelain tile, 12x24 inches"),
    ("tile", "Natural Stone Tile", "sqft", "12.00", "Premium natural stone tile, various sizes"),
    ("laminate", "Luxury Vinyl Plank", "sqft", "2.75", "Waterproof luxury vinyl plank flooring"),
    ("interior-paint", "White Interior Paint", "gallon", "35.00", "Premium interior white paint, 1 gallon"),
    ("interior-paint", "Eggshell Interior Paint", "gallon", "38.00", "Premium interior eggshell finish paint, 1 gallon"),
    ("exterior-paint", "Exterior Paint - White", "gallon", "42.00", "Weather-resistant exterior white paint, 1 gallon"),
    ("exterior-paint", "Exterior Paint - Gray", "gallon", "42.00", "Weather-resistant exterior gray paint, 1 gallon"),
    ("indoor-lighting", "LED Recessed Light", "piece", "45.00", "Energy-efficient 6-inch LED recessed light"),
    ("indoor-lighting", "Pendant Light", "piece", "85.00", "Modern pendant light fixture"),
    ("indoor-lighting", "Chandelier", "piece", "350.00", "Elegant crystal chandelier"),
    ("outdoor-lighting", "LED Outdoor Wall Light", "piece", "65.00", "Weather-resistant LED outdoor wall light"),
    ("outdoor-lighting", "Garden Path Light", "piece", "25.00", "Solar-powered garden path light"),
    ("kitchen-furniture", "Modern Kitchen Cabinet", "unit", "250.00", "Modern style kitchen cabinet, per unit"),
    ("kitchen-furniture", "Kitchen Island", "unit", "850.00", "Premium kitchen island with storage"),
    ("living-room-furniture", "Modern Sofa", "unit", "1200.00", "Comfortable modern 3-seater sofa"),
    ("living-room-furniture", "Coffee Table", "unit", "350.00", "Contemporary wooden coffee table"),
    ("windows-doors", "Double Pane Window", "unit", "450.00", "Energy-efficient double pane window"),
    ("windows-doors", "Entry Door", "unit", "650.00", "Solid wood entry door with hardware"),
]


def seed_users(db: Session) -> dict[str, User]:
    users = {}
    for name, email, password, role in USERS:
        user = db.query(User).filter(User.email == email).first()
        if user is None:
            user = User(name=name, email=email, password_hash=hash_password(password),
                        role=role, email_verified=True)
            db.add(user)
            db.flush()
            logger.info("created %s user %s", role, email)
        users[role] = user

    expert_user = users["expert"]
    if db.query(Expert).filter(Expert.user_id == expert_user.id).first() is None:
        db.add(Expert(
            user_id=expert_user.id,
            specialization="Interior Design",
            rate_per_hour=Decimal("75.00"),
            bio="Experienced interior designer with 10+ years in home renovation and design.",
            rating_avg=Decimal("4.8"),
            rating_count=25,
            is_active=True,
            is_verified=True,
        ))
    return users

def _category(db: Session, name: str, slug: str, sort_order: int, parent_id: str | None = None) -> MaterialCategory:
    category = db.query(MaterialCategory).filter(MaterialCategory.slug == slug).first()
    if category is None:
        category = MaterialCategory(name=name, slug=slug, parent_id=parent_id, sort_order=sort_order, is_active=True)
        db.add(category)
        db.flush()
    return category

def seed_categories(db: Session) -> dict[str, MaterialCategory]:
    by_slug = {}
    for root_order, (name, slug, children) in enumerate(CATEGORIES, start=1):
        root = _category(db, name, slug, root_order)
        by_slug[slug] = root
        for child_order, (child_name, child_slug) in enumerate(children, start=1):
            by_slug[child_slug] = _category(db, child_name, child_slug, child_order, root.id)
    return by_slug

def seed_materials(db: Session, categories: dict[str, MaterialCategory]) -> int:
    created = 0
    for slug, name, unit, cost, description in MATERIALS:
        if db.query(Material.id).filter(Material.name == name).first() is not None:
            continue
        db.add(Material(
            name=name,
            category_id=categories[slug].id,
            unit=unit,
            unit_cost=Decimal(cost),
            description=description,
            is_active=True,
        ))
        created += 1
    return created

def run(db: Session) -> None:
    seed_users(db)
    categories = seed_categories(db)
    created = seed_materials(db, categories)
    db.commit()
    logger.info("seed complete: %d categories, %d new materials", len(categories), created)

def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    init_db()
    db = SessionLocal()
    try:
        run(db)
    except Exception:
        db.rollback()
        logger.exception("seed failed")
        raise
    finally:
        db.close()

if __name__ == "__main__":
    main()
