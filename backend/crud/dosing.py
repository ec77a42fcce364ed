"""
Composite stock operations: taking a dose and restocking.

Every stock change is a single conditional UPDATE so it is atomic per
medicine row. Taking a dose also writes the usage log in the same
transaction; restocking all low-stock medicines is a series of independent
commits with no rollback across the batch.
"""
from sqlalchemy import func
from sqlalchemy.orm import Session
from models.medicine import Medicine, DEFAULT_QUANTITY
from models.usage_log import UsageLog
from models.audit_mixin import utcnow
from schemas.usage_log import UsageLogCreate
from crud.medicine import get_medicine
from crud.usage_log import append_usage_log
from utils.ids import parse_id
from utils.stock import LOW_STOCK_THRESHOLD
from typing import List, NamedTuple, Optional, Sequence
import logging

logger = logging.getLogger(__name__)


class DoseResult(NamedTuple):
    medicine: Medicine
    log: UsageLog


def resolve_dose_symptoms(medicine: Medicine, symptoms: Optional[Sequence[str]]) -> List[str]:
    """
    Symptoms recorded with a dose.

    If the caller supplies no symptoms, default to the medicine's first
    recorded symptom, or empty if it has none.
    """
    supplied = [s for s in (symptoms or []) if s]
    if supplied:
        return supplied
    return list(medicine.symptoms[:1]) if medicine.symptoms else []


def _restock_quantity(default_quantity: Optional[int]) -> int:
    return default_quantity or DEFAULT_QUANTITY


def take_dose(db: Session, medicine_id, symptoms: Optional[Sequence[str]] = None) -> Optional[DoseResult]:
    """
    Take one unit of a medicine and log it.

    Returns None, with nothing written, when the medicine does not exist or
    is out of stock.
    """
    medicine = get_medicine(db, medicine_id)
    if not medicine or medicine.quantity <= 0:
        logger.info("Refused dose for medicine id=%r: not found or out of stock", medicine_id)
        return None

    now = utcnow()
    resolved_symptoms = resolve_dose_symptoms(medicine, symptoms)
    medicine_name = medicine.name

    # quantity > 0 is re-checked by the UPDATE itself so a concurrent dose cannot go negative
    updated = (
        db.query(Medicine)
        .filter(Medicine.id == medicine.id, Medicine.quantity > 0)
        .update(
            {
                Medicine.quantity: Medicine.quantity - 1,
                Medicine.usage_count: func.coalesce(Medicine.usage_count, 0) + 1,
                Medicine.last_used: now,
                Medicine.is_quick_access: True,
                Medicine.updated_at: now,
            },
            synchronize_session=False,
        )
    )
    if not updated:
        db.rollback()
        logger.info(f"Refused dose for '{medicine_name}' (id={medicine.id}): out of stock")
        return None

    log = append_usage_log(
        db,
        UsageLogCreate(
            medicine_id=medicine.id,
            medicine_name=medicine_name,
            dose=1,
            symptoms=resolved_symptoms,
            was_effective=None,
        ),
        commit=False,
    )
    db.commit()
    db.refresh(medicine)
    db.refresh(log)

    logger.info(f"Dose taken of '{medicine_name}' (id={medicine.id}), {medicine.quantity} left")
    return DoseResult(medicine=medicine, log=log)


def restock_medicine(db: Session, medicine_id) -> Optional[Medicine]:
    """Reset quantity to the medicine's default quantity, whatever the current stock."""
    pk = parse_id(medicine_id)
    if pk is None:
        return None

    updated = (
        db.query(Medicine)
        .filter(Medicine.id == pk)
        .update(
            {
                Medicine.quantity: func.coalesce(func.nullif(Medicine.default_quantity, 0), DEFAULT_QUANTITY),
                Medicine.updated_at: utcnow(),
            },
            synchronize_session=False,
        )
    )
    if not updated:
        db.rollback()
        return None
    db.commit()

    medicine = get_medicine(db, pk)
    if medicine is None:
        return None
    logger.info(f"Restocked '{medicine.name}' (id={pk}) to {medicine.quantity}")
    return medicine


def restock_all_medicines(db: Session) -> int:
    """
    Restock every medicine that is low at call time.

    Each medicine is committed on its own; a failure partway through leaves
    the earlier restocks in place.
    """
    low_stock = (
        db.query(Medicine.id, Medicine.default_quantity)
        .filter(Medicine.quantity <= LOW_STOCK_THRESHOLD)
        .all()
    )

    restocked = 0
    for pk, default_quantity in low_stock:
        db.query(Medicine).filter(Medicine.id == pk).update(
            {
                Medicine.quantity: _restock_quantity(default_quantity),
                Medicine.updated_at: utcnow(),
            },
            synchronize_session=False,
        )
        db.commit()
        restocked += 1

    logger.info(f"Restocked {restocked} low-stock medicines")
    return restocked
