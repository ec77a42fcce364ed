from sqlalchemy import Column, Integer, String
from database import Base
from models.audit_mixin import AuditMixin


class Category(Base, AuditMixin):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    # Unique across deleted rows as well, so a soft-deleted name stays reserved
    name = Column(String, unique=True, index=True, nullable=False)
