from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.auth.deps import get_db
from app.schemas.catalog import MaterialIn, MaterialOut, CategoryOut
from app.categories.service import all_categories
from app.materials import service
from app.utils.pagination import parse_flag
from app.utils.responses import ok

router = APIRouter(prefix="/materials", tags=["admin: materials"])

@router.get("")
def list_materials(
    page: str | None = Query(None),
    limit: str | None = Query(None),
    category_id: str | None = Query(None, alias="categoryId"),
    is_active: str | None = Query(None, alias="isActive"),
    search: str | None = Query(None),
    db: Session = Depends(get_db),
):
    result = service.list_materials(db, page, limit, category_id, parse_flag(is_active), search)
    categories = all_categories(db, active_only=True)
    return ok(
        [MaterialOut.model_validate(m) for m in result.items],
        categories=[CategoryOut.model_validate(c) for c in categories],
        pagination=result.meta(),
    )

@router.get("/{material_id}")
def get_material(material_id: str, db: Session = Depends(get_db)):
    return ok(MaterialOut.model_validate(service.get_material(db, material_id)))

@router.post("", status_code=201)
def create_material(body: MaterialIn, db: Session = Depends(get_db)):
    material = service.create_material(db, body.model_dump())
    return ok(MaterialOut.model_validate(material), status_code=201)

@router.put("/{material_id}")
def update_material(material_id: str, body: MaterialIn, db: Session = Depends(get_db)):
    material = service.update_material(db, material_id, body.model_dump(exclude_unset=True))
    return ok(MaterialOut.model_validate(material))

@router.delete("/{material_id}")
def delete_material(material_id: str, db: Session = Depends(get_db)):
    return ok(MaterialOut.model_validate(service.delete_material(db, material_id)))
