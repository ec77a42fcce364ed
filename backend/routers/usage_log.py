from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from database import get_db
from schemas.usage_log import UsageLog
from crud import usage_log as crud_usage_log
from utils.auth_utils import get_current_user

router = APIRouter(
    prefix="/api/usage",
    tags=["usage"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=List[UsageLog])
def read_usage_logs(db: Session = Depends(get_db)):
    """The 100 most recent doses across all medicines."""
    return crud_usage_log.get_usage_logs(db)


@router.get("/medicine/{medicine_id}", response_model=List[UsageLog])
def read_usage_logs_for_medicine(medicine_id: str, db: Session = Depends(get_db)):
    """The 50 most recent doses of one medicine."""
    return crud_usage_log.get_usage_logs_for_medicine(db, medicine_id)
