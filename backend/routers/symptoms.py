from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from database import get_db
from schemas.medicine import Medicine
from schemas.symptoms import SYMPTOMS, SymptomSearchRequest
import crud.medicine as crud_medicine
from utils.auth_utils import get_current_user

router = APIRouter(
    prefix="/api/symptoms",
    tags=["symptoms"],
    dependencies=[Depends(get_current_user)],
)


@router.get("", response_model=List[str])
def list_symptoms():
    """Symptoms offered by the symptom picker."""
    return SYMPTOMS


@router.get("/search", response_model=List[Medicine])
def search_by_symptoms(symptoms: Optional[List[str]] = Query(None), db: Session = Depends(get_db)):
    """Search with repeated query parameters: ?symptoms=Fever&symptoms=Headache"""
    if not symptoms:
        return []
    return crud_medicine.search_medicines_by_symptoms(db, symptoms)


@router.post("/search", response_model=List[Medicine])
def search_by_symptoms_body(request: SymptomSearchRequest, db: Session = Depends(get_db)):
    if not request.symptoms:
        return []
    return crud_medicine.search_medicines_by_symptoms(db, request.symptoms)
