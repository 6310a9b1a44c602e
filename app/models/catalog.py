
from sqlalchemy import Column, String, Integer, Boolean, Numeric, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from app.db.session import Base
from app.utils.ids import new_id, utcnow

class MaterialCategory(Base):
    __tablename__ = "material_category"
    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(120), nullable=False)
    slug = Column(String(160), unique=True, index=True, nullable=False)
    parent_id = Column(String(36), ForeignKey("material_category.id"), nullable=True, index=True)
    sort_order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    materials = relationship("Material", back_populates="category")

class Material(Base):
    __tablename__ = "material"
    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    category_id = Column(String(36), ForeignKey("material_category.id"), nullable=False, index=True)
    unit = Column(String(30), nullable=False)
    unit_cost = Column(Numeric(10, 2), nullable=False)
    texture_url = Column(String(500), nullable=True)
    model_url = Column(String(500), nullable=True)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    category = relationship("MaterialCategory", back_populates="materials")
