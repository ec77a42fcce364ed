from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from database import get_db
import crud.medicine as crud_medicine
import crud.dosing as crud_dosing
import logging
from typing import List
from schemas.medicine import (
    Medicine as MedicineSchema,
    MedicineCreate,
    MedicineUpdate,
    TakeDoseRequest,
    RestockRequest,
    DoseResult,
    RestockAllResult,
)
from schemas.usage_log import UsageLog as UsageLogSchema
from utils.auth_utils import get_current_user, get_user_identifier

router = APIRouter(
    prefix="/api/medicines",
    tags=["medicines"],
    dependencies=[Depends(get_current_user)],
)
logger = logging.getLogger(__name__)


@router.get("", response_model=List[MedicineSchema])
def get_all_medicines(db: Session = Depends(get_db)):
    """Get all medicines ordered by name."""
    return crud_medicine.get_all_medicines(db)


@router.get("/quick-access", response_model=List[MedicineSchema])
def get_quick_access_medicines(db: Session = Depends(get_db)):
    """Medicines used in the last week, used often, or already flagged for quick access."""
    return crud_medicine.get_quick_access_medicines(db)


@router.get("/low-stock", response_model=List[MedicineSchema])
def get_low_stock_medicines(db: Session = Depends(get_db)):
    return crud_medicine.get_low_stock_medicines(db)


@router.post("/take-dose", response_model=DoseResult)
def take_dose(
    request: TakeDoseRequest,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
):
    """Take one unit of a medicine and record it in the usage log."""
    if request.medicine_id in (None, ""):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Medicine ID is required")

    result = crud_dosing.take_dose(db, request.medicine_id, request.symptoms)
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Could not take dose - medicine not found or out of stock",
        )
    logger.info(f"Dose of medicine id={result.medicine.id} recorded by {get_user_identifier(user)}")
    return DoseResult(
        medicine=MedicineSchema.model_validate(result.medicine),
        log=UsageLogSchema.model_validate(result.log),
    )


@router.post("/restock", response_model=MedicineSchema)
def restock_medicine(request: RestockRequest, db: Session = Depends(get_db)):
    """Reset a medicine's quantity to its default quantity."""
    if request.medicine_id in (None, ""):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Medicine ID is required")

    medicine = crud_dosing.restock_medicine(db, request.medicine_id)
    if medicine is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Medicine not found")
    return medicine


@router.post("/restock-all", response_model=RestockAllResult)
def restock_all_medicines(db: Session = Depends(get_db)):
    """Restock every low-stock medicine."""
    count = crud_dosing.restock_all_medicines(db)
    return RestockAllResult(success=True, restocked_count=count)


@router.get("/{medicine_id}", response_model=MedicineSchema)
def get_medicine(medicine_id: str, db: Session = Depends(get_db)):
    """Get a specific medicine by ID."""
    db_medicine = crud_medicine.get_medicine(db, medicine_id=medicine_id)
    if db_medicine is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Medicine not found")
    return db_medicine


@router.post("", response_model=MedicineSchema, status_code=status.HTTP_201_CREATED)
def create_medicine(medicine: MedicineCreate, db: Session = Depends(get_db)):
    """Create a new medicine."""
    return crud_medicine.create_medicine(db=db, medicine=medicine)


@router.put("/{medicine_id}", response_model=MedicineSchema)
def update_medicine(medicine_id: str, medicine: MedicineUpdate, db: Session = Depends(get_db)):
    """Update an existing medicine. Only the fields sent are changed."""
    db_medicine = crud_medicine.update_medicine(db, medicine_id, medicine)
    if db_medicine is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Medicine not found")
    return db_medicine


@router.delete("/{medicine_id}")
def delete_medicine(medicine_id: str, db: Session = Depends(get_db)):
    """Delete a medicine by ID. Its usage history is kept."""
    if not crud_medicine.delete_medicine(db=db, medicine_id=medicine_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Medicine not found")
    return {"success": True}
