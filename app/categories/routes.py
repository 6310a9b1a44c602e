from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.auth.deps import get_db
from app.schemas.catalog import CategoryIn, CategoryOut
from app.categories import service
from app.utils.responses import ok

router = APIRouter(prefix="/categories", tags=["admin: categories"])

def _render(category) -> dict:
    return CategoryOut.model_validate(category).model_dump(by_alias=True)

@router.get("")
def list_categories(db: Session = Depends(get_db)):
    result = service.list_categories(db, render=_render)
    return ok({"list": [_render(c) for c in result["list"]], "tree": result["tree"]})

@router.post("", status_code=201)
def create_category(body: CategoryIn, db: Session = Depends(get_db)):
    category = service.create_category(db, body.name, body.parent_id, body.sort_order, body.is_active)
    return ok(CategoryOut.model_validate(category), status_code=201)

@router.put("/{category_id}")
def update_category(category_id: str, body: CategoryIn, db: Session = Depends(get_db)):
    category = service.update_category(db, category_id, body.model_dump(exclude_unset=True))
    return ok(CategoryOut.model_validate(category))

@router.delete("/{category_id}")
def delete_category(category_id: str, db: Session = Depends(get_db)):
    category, soft_deleted = service.delete_category(db, category_id)
    if soft_deleted:
        return ok(CategoryOut.model_validate(category), meta={"softDeleted": True})
    return ok({"id": category_id})
