from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.auth.deps import get_db
from app.schemas.user import (
    CustomerRow, UserDetail, UserStats, OrderSummary,
    ProjectSummary, ChatSummary, ConsultationSummary,
)
from app.users import service
from app.utils.responses import ok

router = APIRouter(prefix="/users", tags=["admin: users"])

def _row(entry: dict) -> CustomerRow:
    user = entry["user"]
    return CustomerRow(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        email_verified=user.email_verified,
        avatar_url=user.avatar_url,
        created_at=user.created_at,
        stats=UserStats(**entry["stats"]),
        recent_orders=[OrderSummary.model_validate(o) for o in entry["recent_orders"]],
    )

@router.get("")
def list_users(
    page: str | None = Query(None),
    limit: str | None = Query(None),
    db: Session = Depends(get_db),
):
    result = service.list_customers(db, page, limit)
    return ok([_row(e) for e in result.items], pagination=result.meta())

@router.get("/{user_id}")
def get_user(user_id: str, db: Session = Depends(get_db)):
    detail = service.get_user_detail(db, user_id)
    user = detail["user"]
    return ok(UserDetail(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role,
        email_verified=user.email_verified,
        avatar_url=user.avatar_url,
        created_at=user.created_at,
        updated_at=user.updated_at,
        projects=[ProjectSummary.model_validate(p) for p in detail["projects"]],
        orders=[OrderSummary.model_validate(o) for o in detail["orders"]],
        chat_sessions=[ChatSummary.model_validate(c) for c in detail["chat_sessions"]],
        consultations=[ConsultationSummary(**c) for c in detail["consultations"]],
    ))
