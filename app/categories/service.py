
import logging
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.errors import ConflictError, NotFoundError, ValidationError
from app.models.catalog import Material, MaterialCategory
from app.categories.tree import build_tree, slugify, would_create_cycle

logger = logging.getLogger(__name__)


def _ordered(query):
    # nulls first so roots lead, the same on SQLite and PostgreSQL
    return query.order_by(
        MaterialCategory.parent_id.is_(None).desc(),
        MaterialCategory.parent_id.asc(),
        MaterialCategory.sort_order.asc(),
        MaterialCategory.name.asc(),
    )

def all_categories(db: Session, active_only: bool = False) -> list[MaterialCategory]:
    q = db.query(MaterialCategory)
    if active_only:
        q = q.filter(MaterialCategory.is_active.is_(True))
    return _ordered(q).all()

def list_categories(db: Session, render=None) -> dict:
    categories = all_categories(db)
    return {"list": categories, "tree": build_tree(categories, render)}

def get_category(db: Session, category_id: str) -> MaterialCategory:
    category = db.get(MaterialCategory, category_id)
    if category is None:
        raise NotFoundError("Category not found")
    return category

def _slug_for(name: str | None) -> str:
    if name is None or not name.strip():
        raise ValidationError("name is required")
    slug = slugify(name)
    if not slug:
        raise ValidationError("name must contain at least one letter or digit")
    return slug

def _ensure_slug_free(db: Session, slug: str, exclude_id: str | None = None) -> None:
    q = db.query(MaterialCategory.id).filter(MaterialCategory.slug == slug)
    if exclude_id is not None:
        q = q.filter(MaterialCategory.id != exclude_id)
    if q.first() is not None:
        raise ConflictError(f"A category with slug '{slug}' already exists")

def _ensure_parent(db: Session, parent_id: str | None, category_id: str | None = None) -> None:
    if parent_id is None:
        return
    if category_id is not None and parent_id == category_id:
        raise ValidationError("A category cannot be its own parent")
    if db.get(MaterialCategory, parent_id) is None:
        raise ValidationError("Parent category not found")
    if category_id is not None and would_create_cycle(all_categories(db), category_id, parent_id):
        raise ValidationError("Parent category cannot be one of its own descendants")

def _commit(db: Session, category: MaterialCategory) -> MaterialCategory:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"A category with slug '{category.slug}' already exists")
    db.refresh(category)
    return category

def create_category(db: Session, name: str | None, parent_id: str | None = None,
                    sort_order: int | None = None, is_active: bool | None = None) -> MaterialCategory:
    slug = _slug_for(name)
    parent_id = parent_id or None
    _ensure_parent(db, parent_id)
    _ensure_slug_free(db, slug)

    category = MaterialCategory(
        name=name.strip(),
        slug=slug,
        parent_id=parent_id,
        sort_order=sort_order if sort_order is not None else 0,
        is_active=is_active if is_active is not None else True,
    )
    db.add(category)
    category = _commit(db, category)
    logger.info("created category %s (%s)", category.id, category.slug)
    return category

def update_category(db: Session, category_id: str, fields: dict) -> MaterialCategory:
    """Apply a partial update; only keys present in ``fields`` are touched."""
    category = get_category(db, category_id)

    if "name" in fields:
        slug = _slug_for(fields["name"])
        _ensure_slug_free(db, slug, exclude_id=category.id)
        category.name = fields["name"].strip()
        category.slug = slug
    if "parent_id" in fields:
        parent_id = fields["parent_id"] or None
        _ensure_parent(db, parent_id, category.id)
        category.parent_id = parent_id
    if fields.get("sort_order") is not None:
        category.sort_order = fields["sort_order"]
    if fields.get("is_active") is not None:
        category.is_active = fields["is_active"]

    category = _commit(db, category)
    logger.info("updated category %s", category.id)
    return category

def delete_category(db: Session, category_id: str) -> tuple[MaterialCategory | None, bool]:
    """Soft delete when anything still hangs off the category, hard delete otherwise.

    Returns ``(category, soft_deleted)``; ``category`` is ``None`` after a hard delete.
    """
    category = get_category(db, category_id)
    children = db.query(func.count(MaterialCategory.id)).filter(MaterialCategory.parent_id == category_id).scalar()
    materials = db.query(func.count(Material.id)).filter(Material.category_id == category_id).scalar()

    if children or materials:
        category.is_active = False
        db.commit()
        db.refresh(category)
        logger.info("soft deleted category %s (%d children, %d materials)", category_id, children, materials)
        return category, True

    db.delete(category)
    db.commit()
    logger.info("deleted category %s", category_id)
    return None, False
