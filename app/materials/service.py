
import logging
from decimal import Decimal
from sqlalchemy import or_
from sqlalchemy.orm import Session
from app.errors import NotFoundError, ValidationError
from app.models.catalog import Material, MaterialCategory
from app.categories.service import all_categories
from app.categories.tree import descendant_ids
from app.utils import pagination
from app.utils.pagination import Page

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "category_id", "unit", "unit_cost")
EDITABLE_FIELDS = ("name", "category_id", "unit", "unit_cost", "texture_url", "model_url", "description", "is_active")


def clean_search(raw: str | None) -> str | None:
    if raw is None:
        return None
    search = raw.replace("+", " ").strip()
    return search or None

def list_materials(db: Session, page: int | str | None = None, limit: int | str | None = None,
                   category_id: str | None = None, is_active: bool | None = None,
                   search: str | None = None) -> Page:
    page, limit = pagination.normalize(page, limit)
    search = clean_search(search)

    q = db.query(Material)
    if category_id:
        scope = descendant_ids(all_categories(db, active_only=True), category_id)
        q = q.filter(Material.category_id.in_(scope))
    if is_active is not None:
        q = q.filter(Material.is_active.is_(is_active))
    if search:
        q = q.filter(or_(
            Material.name.icontains(search, autoescape=True),
            Material.description.icontains(search, autoescape=True),
        ))

    total = q.count()
    result = Page(items=[], page=page, limit=limit, total=total)
    result.items = (
        q.order_by(Material.created_at.desc(), Material.id.desc())
         .offset(result.offset)
         .limit(limit)
         .all()
    )
    return result

def get_material(db: Session, material_id: str) -> Material:
    material = db.get(Material, material_id)
    if material is None:
        raise NotFoundError("Material not found", code="MATERIAL_NOT_FOUND")
    return material

def _check_unit_cost(value) -> Decimal:
    cost = Decimal(str(value))
    if cost < 0:
        raise ValidationError("unitCost must be a non-negative number")
    return cost

def _check_category(db: Session, category_id: str) -> None:
    if db.get(MaterialCategory, category_id) is None:
        raise ValidationError("Category not found")

def create_material(db: Session, fields: dict) -> Material:
    missing = [f for f in REQUIRED_FIELDS if fields.get(f) in (None, "")]
    if missing:
        raise ValidationError("Name, categoryId, unit, and unitCost are required")
    _check_category(db, fields["category_id"])

    data = {k: fields.get(k) for k in EDITABLE_FIELDS}
    data["unit_cost"] = _check_unit_cost(fields["unit_cost"])
    if data["is_active"] is None:
        data["is_active"] = True

    material = Material(**data)
    db.add(material)
    db.commit()
    db.refresh(material)
    logger.info("created material %s in category %s", material.id, material.category_id)
    return material

def update_material(db: Session, material_id: str, fields: dict) -> Material:
    material = get_material(db, material_id)
    for key in EDITABLE_FIELDS:
        if key not in fields:
            continue
        value = fields[key]
        if key in REQUIRED_FIELDS or key == "is_active":
            # these columns are not nullable, an explicit null leaves them alone
            if value in (None, ""):
                continue
            if key == "category_id":
                _check_category(db, value)
            elif key == "unit_cost":
                value = _check_unit_cost(value)
        setattr(material, key, value)

    db.commit()
    db.refresh(material)
    logger.info("updated material %s", material.id)
    return material

def delete_material(db: Session, material_id: str) -> Material:
    material = get_material(db, material_id)
    material.is_active = False
    db.commit()
    db.refresh(material)
    logger.info("deactivated material %s", material.id)
    return material
