from sqlalchemy.orm import Session
from models.usage_log import UsageLog
from models.audit_mixin import utcnow
from schemas.usage_log import UsageLogCreate
from utils.ids import parse_id
from typing import List

RECENT_LOGS_LIMIT = 100
MEDICINE_LOGS_LIMIT = 50


def append_usage_log(db: Session, log: UsageLogCreate, commit: bool = True) -> UsageLog:
    """
    Store a dose event stamped with the current time.

    Logs are append-only. ``commit=False`` lets take-dose write the log in the
    same transaction as the stock change.
    """
    db_log = UsageLog(**log.model_dump(), timestamp=utcnow())
    db.add(db_log)
    if commit:
        db.commit()
        db.refresh(db_log)
    else:
        db.flush()
    return db_log


def get_usage_logs(db: Session) -> List[UsageLog]:
    return (
        db.query(UsageLog)
        .order_by(UsageLog.timestamp.desc(), UsageLog.id.desc())
        .limit(RECENT_LOGS_LIMIT)
        .all()
    )


def get_usage_logs_for_medicine(db: Session, medicine_id) -> List[UsageLog]:
    pk = parse_id(medicine_id)
    if pk is None:
        return []
    return (
        db.query(UsageLog)
        .filter(UsageLog.medicine_id == pk)
        .order_by(UsageLog.timestamp.desc(), UsageLog.id.desc())
        .limit(MEDICINE_LOGS_LIMIT)
        .all()
    )
