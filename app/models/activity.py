from sqlalchemy import Column, String, Integer, Boolean, Numeric, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from app.db.session import Base
from app.utils.ids import new_id, utcnow

ORDER_STATUSES = ("pending", "paid", "in_progress", "completed", "cancelled")

class Order(Base):
    __tablename__ = "orders"
    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default="pending")
    total_price = Column(Numeric(12, 2), nullable=False, default=0)
    created_at = Column(DateTime, default=utcnow, nullable=False)

class Project(Base):
    __tablename__ = "projects"
    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    estimated_cost = Column(Numeric(12, 2), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

class ChatSession(Base):
    __tablename__ = "chat_sessions"
    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default="open")
    mode = Column(String(20), nullable=False, default="ai")
    chat_type = Column(String(30), nullable=False, default="general")
    created_at = Column(DateTime, default=utcnow, nullable=False)

class Expert(Base):
    __tablename__ = "experts"
    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), unique=True, nullable=False)
    specialization = Column(String(120), nullable=True)
    rate_per_hour = Column(Numeric(10, 2), nullable=True)
    bio = Column(Text, nullable=True)
    rating_avg = Column(Numeric(3, 2), nullable=False, default=0)
    rating_count = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    is_verified = Column(Boolean, nullable=False, default=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    user = relationship("User")

class Consultation(Base):
    __tablename__ = "consultations"
    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    expert_id = Column(String(36), ForeignKey("experts.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default="scheduled")
    meeting_time = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    expert = relationship("Expert")
