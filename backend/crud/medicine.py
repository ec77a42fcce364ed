from sqlalchemy import or_
from sqlalchemy.orm import Session
from models.medicine import Medicine as MedicineModel
from models.audit_mixin import utcnow
from schemas.medicine import MedicineCreate, MedicineUpdate
from utils.ids import parse_id
from utils.stock import LOW_STOCK_THRESHOLD
from datetime import timedelta
from typing import Iterable, List, Optional
import logging

logger = logging.getLogger(__name__)

QUICK_ACCESS_RECENT_DAYS = 7
QUICK_ACCESS_MIN_USAGE = 5
QUICK_ACCESS_LIMIT = 8


def get_medicine(db: Session, medicine_id) -> Optional[MedicineModel]:
    """Return the medicine or None. Malformed ids are treated as unknown ids."""
    pk = parse_id(medicine_id)
    if pk is None:
        return None
    return db.query(MedicineModel).filter(MedicineModel.id == pk).first()


def get_all_medicines(db: Session) -> List[MedicineModel]:
    return db.query(MedicineModel).order_by(MedicineModel.name.asc()).all()


def search_medicines_by_symptoms(db: Session, symptoms: Iterable[str]) -> List[MedicineModel]:
    """
    Medicines sharing at least one symptom with ``symptoms``.

    Ranking: anything out of stock goes last regardless of how well it
    matches, then more matching symptoms first, then most used first.
    Symptoms live in a JSON list, so matching happens here rather than in SQL.
    """
    wanted = {s for s in symptoms if s}
    if not wanted:
        return []

    matches = []
    for medicine in db.query(MedicineModel).all():
        match_count = len(wanted.intersection(medicine.symptoms or []))
        if match_count:
            matches.append((medicine, match_count))

    matches.sort(key=lambda pair: (pair[0].quantity == 0, -pair[1], -(pair[0].usage_count or 0)))
    return [medicine for medicine, _ in matches]


def get_quick_access_medicines(db: Session) -> List[MedicineModel]:
    """Recently used, frequently used, or already flagged medicines; newest use first."""
    since = utcnow() - timedelta(days=QUICK_ACCESS_RECENT_DAYS)
    return (
        db.query(MedicineModel)
        .filter(
            or_(
                MedicineModel.last_used >= since,
                MedicineModel.usage_count >= QUICK_ACCESS_MIN_USAGE,
                MedicineModel.is_quick_access.is_(True),
            )
        )
        .order_by(MedicineModel.last_used.desc().nullslast(), MedicineModel.usage_count.desc())
        .limit(QUICK_ACCESS_LIMIT)
        .all()
    )


def get_low_stock_medicines(db: Session) -> List[MedicineModel]:
    return (
        db.query(MedicineModel)
        .filter(MedicineModel.quantity <= LOW_STOCK_THRESHOLD)
        .order_by(MedicineModel.quantity.asc(), MedicineModel.name.asc())
        .all()
    )


def create_medicine(db: Session, medicine: MedicineCreate) -> MedicineModel:
    now = utcnow()
    db_medicine = MedicineModel(
        **medicine.model_dump(),
        usage_count=0,
        last_used=None,
        is_quick_access=False,
        created_at=now,
        updated_at=now,
    )
    db.add(db_medicine)
    db.commit()
    db.refresh(db_medicine)
    logger.info(f"Created medicine '{db_medicine.name}' (id={db_medicine.id}, quantity={db_medicine.quantity})")
    return db_medicine


def update_medicine(db: Session, medicine_id, medicine: MedicineUpdate) -> Optional[MedicineModel]:
    db_medicine = get_medicine(db, medicine_id)
    if not db_medicine:
        return None

    # Update the provided fields
    for key, value in medicine.model_dump(exclude_unset=True).items():
        setattr(db_medicine, key, value)
    db_medicine.updated_at = utcnow()

    db.commit()
    db.refresh(db_medicine)
    return db_medicine


def delete_medicine(db: Session, medicine_id) -> bool:
    """Hard delete. Usage logs that reference the medicine are left in place."""
    db_medicine = get_medicine(db, medicine_id)
    if not db_medicine:
        return False

    name, pk = db_medicine.name, db_medicine.id
    db.delete(db_medicine)
    db.commit()
    logger.info(f"Deleted medicine '{name}' (id={pk})")
    return True
