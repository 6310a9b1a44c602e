from fastapi import APIRouter, Depends
from app.auth.deps import require_role
from app.categories.routes import router as categories_router
from app.materials.routes import router as materials_router
from app.users.routes import router as users_router

router = APIRouter(prefix="/api/admin", dependencies=[Depends(require_role("admin"))])

router.include_router(categories_router)
router.include_router(materials_router)
router.include_router(users_router)
