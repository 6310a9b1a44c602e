from datetime import datetime
from app.schemas.common import CamelModel

class OrderSummary(CamelModel):
    id: str
    status: str
    total_price: float
    created_at: datetime | None = None

class UserStats(CamelModel):
    total_projects: int = 0
    total_orders: int = 0
    active_orders: int = 0
    active_chats: int = 0
    pending_orders: int = 0

class CustomerRow(CamelModel):
    id: str
    name: str
    email: str
    role: str
    email_verified: bool
    avatar_url: str | None = None
    created_at: datetime
    stats: UserStats
    recent_orders: list[OrderSummary] = []

class ProjectSummary(CamelModel):
    id: str
    name: str
    estimated_cost: float | None = None
    created_at: datetime

class ChatSummary(CamelModel):
    id: str
    mode: str
    chat_type: str
    created_at: datetime

class ConsultationSummary(CamelModel):
    id: str
    meeting_time: datetime | None = None
    expert_name: str | None = None

class UserDetail(CamelModel):
    id: str
    name: str
    email: str
    role: str
    email_verified: bool
    avatar_url: str | None = None
    created_at: datetime
    updated_at: datetime
    projects: list[ProjectSummary] = []
    orders: list[OrderSummary] = []
    chat_sessions: list[ChatSummary] = []
    consultations: list[ConsultationSummary] = []
