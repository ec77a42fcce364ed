from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
import logging

from database import get_db
from schemas.category import Category, CategoryCreate, CategoryUpdate
from crud import category as crud_category
from utils.auth_utils import get_current_user

router = APIRouter(
    prefix="/api/categories",
    tags=["categories"],
    dependencies=[Depends(get_current_user)],
)
logger = logging.getLogger(__name__)


@router.get("", response_model=List[Category])
def read_categories(db: Session = Depends(get_db)):
    """Retrieve every category that has not been deleted."""
    return crud_category.get_categories(db)


@router.get("/{category_id}", response_model=Category)
def read_category(category_id: str, db: Session = Depends(get_db)):
    """Retrieve a single category by ID."""
    db_category = crud_category.get_category(db, category_id)
    if db_category is None:
        raise HTTPException(status_code=404, detail="Category not found")
    return db_category


@router.post("", response_model=Category, status_code=status.HTTP_201_CREATED)
def create_category(category: CategoryCreate, db: Session = Depends(get_db)):
    """Create a new category."""
    try:
        return crud_category.create_category(db, category)
    except crud_category.CategoryNameExistsError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/{category_id}", response_model=Category)
def update_category(category_id: str, category: CategoryUpdate, db: Session = Depends(get_db)):
    """Rename a category."""
    try:
        db_category = crud_category.update_category(db, category_id, category)
    except crud_category.CategoryNameExistsError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if db_category is None:
        raise HTTPException(status_code=404, detail="Category not found")
    return db_category


@router.delete("/{category_id}", status_code=status.HTTP_200_OK)
def delete_category(category_id: str, db: Session = Depends(get_db)):
    """Soft delete a category. Medicines filed under it are not touched."""
    if not crud_category.soft_delete_category(db, category_id):
        raise HTTPException(status_code=404, detail="Category not found")
    return {"success": True}
