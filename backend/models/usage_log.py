from sqlalchemy import Column, Integer, DateTime, String, Boolean, JSON
from database import Base
from models.audit_mixin import utcnow


class UsageLog(Base):
    __tablename__ = "usage_logs"

    id = Column(Integer, primary_key=True, index=True)
    # Plain column, not a ForeignKey: logs outlive the medicine they reference
    medicine_id = Column(Integer, nullable=False, index=True)
    # Snapshot of the medicine name at the time of the dose
    medicine_name = Column(String, nullable=False)
    dose = Column(Integer, nullable=False, default=1)
    symptoms = Column(JSON, nullable=False, default=list)
    timestamp = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    was_effective = Column(Boolean, nullable=True)
