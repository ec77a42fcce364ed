from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from models.category import Category
from models.audit_mixin import utcnow
from schemas.category import CategoryCreate, CategoryUpdate
from utils.ids import parse_id
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)


class CategoryNameExistsError(ValueError):
    def __init__(self, name: str):
        super().__init__(f"Category '{name}' already exists")
        self.name = name


def _name_taken(db: Session, name: str, exclude_id: Optional[int] = None) -> bool:
    # Deleted categories keep their name reserved
    query = db.query(Category.id).filter(Category.name == name).execution_options(include_deleted=True)
    if exclude_id is not None:
        query = query.filter(Category.id != exclude_id)
    return query.first() is not None


def _commit_or_conflict(db: Session, name: str):
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise CategoryNameExistsError(name)


def get_category(db: Session, category_id) -> Optional[Category]:
    pk = parse_id(category_id)
    if pk is None:
        return None
    return db.query(Category).filter(Category.id == pk).first()


def get_categories(db: Session) -> List[Category]:
    return db.query(Category).order_by(Category.name.asc()).all()


def create_category(db: Session, category: CategoryCreate) -> Category:
    if _name_taken(db, category.name):
        raise CategoryNameExistsError(category.name)

    now = utcnow()
    db_category = Category(name=category.name, is_deleted=False, created_at=now, updated_at=now)
    db.add(db_category)
    _commit_or_conflict(db, category.name)
    db.refresh(db_category)
    logger.info(f"Created category '{db_category.name}' (id={db_category.id})")
    return db_category


def update_category(db: Session, category_id, category: CategoryUpdate) -> Optional[Category]:
    db_category = get_category(db, category_id)
    if not db_category:
        return None

    update_data = category.model_dump(exclude_unset=True)
    if update_data.get("name") is None:
        update_data.pop("name", None)
    new_name = update_data.get("name")
    if new_name and new_name != db_category.name and _name_taken(db, new_name, exclude_id=db_category.id):
        raise CategoryNameExistsError(new_name)

    for key, value in update_data.items():
        setattr(db_category, key, value)
    db_category.updated_at = utcnow()
    _commit_or_conflict(db, new_name or db_category.name)
    db.refresh(db_category)
    return db_category


def soft_delete_category(db: Session, category_id) -> bool:
    """Flag the category as deleted. Medicines keep their copied category name."""
    db_category = get_category(db, category_id)
    if not db_category:
        return False

    # Read before commit: once flagged, reloading the row goes through the soft-delete filter
    name, pk = db_category.name, db_category.id
    db_category.is_deleted = True
    db_category.updated_at = utcnow()
    db.commit()
    logger.info(f"Soft deleted category '{name}' (id={pk})")
    return True
