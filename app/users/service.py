"""Read-only admin views over customers and their activity."""

from collections import defaultdict
from sqlalchemy import func
from sqlalchemy.orm import Session
from app.errors import NotFoundError
from app.models.user import User
from app.models.activity import ChatSession, Consultation, Expert, Order, Project
from app.utils import pagination
from app.utils.pagination import Page

RECENT_ORDER_STATUSES = ("paid", "in_progress")
RECENT_ORDERS_PER_ROW = 5


def _count_by_user(db: Session, column, user_ids: list, *criteria) -> dict:
    rows = (
        db.query(column, func.count())
          .filter(column.in_(user_ids), *criteria)
          .group_by(column)
          .all()
    )
    return {user_id: count for user_id, count in rows}

def _recent_orders_by_user(db: Session, user_ids: list) -> dict:
    orders = (
        db.query(Order)
          .filter(Order.user_id.in_(user_ids), Order.status.in_(RECENT_ORDER_STATUSES))
          .order_by(Order.created_at.desc())
          .all()
    )
    grouped = defaultdict(list)
    for order in orders:
        if len(grouped[order.user_id]) < RECENT_ORDERS_PER_ROW:
            grouped[order.user_id].append(order)
    return grouped

def list_customers(db: Session, page: int | str | None = None, limit: int | str | None = None) -> Page:
    """One page of customers with per-user activity stats.

    The page of users is fetched first; every aggregate is then a single
    grouped query over that page's ids, joined back in memory.
    """
    page, limit = pagination.normalize(page, limit)
    q = db.query(User).filter(User.role == "customer", User.deleted_at.is_(None))

    result = Page(items=[], page=page, limit=limit, total=q.count())
    users = (
        q.order_by(User.created_at.desc(), User.id.desc())
         .offset(result.offset)
         .limit(limit)
         .all()
    )
    if not users:
        return result

    ids = [u.id for u in users]
    projects = _count_by_user(db, Project.user_id, ids)
    orders = _count_by_user(db, Order.user_id, ids)
    open_chats = _count_by_user(db, ChatSession.user_id, ids, ChatSession.status == "open")
    recent = _recent_orders_by_user(db, ids)

    for user in users:
        recent_orders = recent.get(user.id, [])
        result.items.append({
            "user": user,
            "stats": {
                "total_projects": projects.get(user.id, 0),
                "total_orders": orders.get(user.id, 0),
                "active_orders": sum(1 for o in recent_orders if o.status == "in_progress"),
                "pending_orders": sum(1 for o in recent_orders if o.status == "paid"),
                "active_chats": open_chats.get(user.id, 0),
            },
            "recent_orders": recent_orders,
        })
    return result

def get_user_detail(db: Session, user_id: str) -> dict:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found", code="USER_NOT_FOUND")

    projects = (
        db.query(Project).filter(Project.user_id == user_id)
          .order_by(Project.created_at.desc()).limit(5).all()
    )
    orders = (
        db.query(Order).filter(Order.user_id == user_id)
          .order_by(Order.created_at.desc()).limit(10).all()
    )
    chats = (
        db.query(ChatSession)
          .filter(ChatSession.user_id == user_id, ChatSession.status == "open")
          .order_by(ChatSession.created_at.desc()).all()
    )
    consultations = (
        db.query(Consultation.id, Consultation.meeting_time, User.name)
          .join(Expert, Expert.id == Consultation.expert_id)
          .join(User, User.id == Expert.user_id)
          .filter(Consultation.user_id == user_id, Consultation.status == "scheduled")
          .order_by(Consultation.meeting_time.asc())
          .all()
    )
    return {
        "user": user,
        "projects": projects,
        "orders": orders,
        "chat_sessions": chats,
        "consultations": [
            {"id": cid, "meeting_time": meeting_time, "expert_name": expert_name}
            for cid, meeting_time, expert_name in consultations
        ],
    }
