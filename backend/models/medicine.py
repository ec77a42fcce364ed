from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, JSON
from database import Base
from models.audit_mixin import TimestampMixin

DEFAULT_QUANTITY = 10


class Medicine(Base, TimestampMixin):
    __tablename__ = "medicines"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    # No foreign key: medicines keep the copied category id/name even after the category is soft deleted
    category_id = Column(String, nullable=False, index=True)
    category_name = Column(String, nullable=False, index=True)
    purpose = Column(Text, nullable=True)
    usage_notes = Column(Text, nullable=True)
    dosage = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False, default=0)
    default_quantity = Column(Integer, nullable=False, default=DEFAULT_QUANTITY)
    symptoms = Column(JSON, nullable=False, default=list)
    usage_count = Column(Integer, nullable=False, default=0)
    last_used = Column(DateTime(timezone=True), nullable=True)
    is_quick_access = Column(Boolean, nullable=False, default=False)

    def __repr__(self):
        return f"<Medicine(id={self.id}, name={self.name}, quantity={self.quantity})>"
