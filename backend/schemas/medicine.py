from pydantic import BaseModel, Field, StrictInt, StrictStr, computed_field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import List, Optional, Union

from schemas.usage_log import UsageLog
from utils.stock import StockStatus, get_stock_status

# Fields that may be omitted on update but never set to null
_NON_NULLABLE = {"name", "category_id", "category_name", "dosage", "quantity", "default_quantity", "symptoms"}


def _unique_symptoms(symptoms: Optional[List[str]]) -> Optional[List[str]]:
    """Drop blanks and duplicates while keeping first-seen order."""
    if symptoms is None:
        return None
    seen = []
    for symptom in symptoms:
        symptom = symptom.strip()
        if symptom and symptom not in seen:
            seen.append(symptom)
    return seen


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class MedicineBase(CamelModel):
    name: str = Field(..., min_length=1)
    category_id: str = Field(..., min_length=1)
    category_name: str = Field(..., min_length=1)
    purpose: Optional[str] = None
    usage_notes: Optional[str] = None
    dosage: str
    quantity: int = Field(..., ge=0)
    default_quantity: int = Field(10, ge=1)
    symptoms: List[str] = Field(default_factory=list)

    @field_validator("category_id", mode="before")
    @classmethod
    def _category_id_as_str(cls, value):
        return str(value) if isinstance(value, int) else value

    @field_validator("symptoms")
    @classmethod
    def _dedupe_symptoms(cls, value):
        return _unique_symptoms(value)


class MedicineCreate(MedicineBase):
    pass


class MedicineUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1)
    category_id: Optional[str] = Field(None, min_length=1)
    category_name: Optional[str] = Field(None, min_length=1)
    purpose: Optional[str] = None
    usage_notes: Optional[str] = None
    dosage: Optional[str] = None
    quantity: Optional[int] = Field(None, ge=0)
    default_quantity: Optional[int] = Field(None, ge=1)
    symptoms: Optional[List[str]] = None

    @field_validator("category_id", mode="before")
    @classmethod
    def _category_id_as_str(cls, value):
        return str(value) if isinstance(value, int) else value

    @field_validator("symptoms")
    @classmethod
    def _dedupe_symptoms(cls, value):
        return _unique_symptoms(value)

    @model_validator(mode="after")
    def _reject_explicit_nulls(self):
        nulled = sorted(
            name for name in self.model_fields_set & _NON_NULLABLE if getattr(self, name) is None
        )
        if nulled:
            raise ValueError(f"Fields cannot be null: {', '.join(nulled)}")
        return self


class Medicine(MedicineBase):
    id: int
    usage_count: int = 0
    last_used: Optional[datetime] = None
    is_quick_access: bool = False
    created_at: datetime
    updated_at: datetime

    @computed_field(alias="stockStatus")
    @property
    def stock_status(self) -> StockStatus:
        return get_stock_status(self.quantity)


class MedicineIdRequest(CamelModel):
    medicine_id: Optional[Union[StrictInt, StrictStr]] = None

    @field_validator("medicine_id", mode="before")
    @classmethod
    def _keep_raw_id(cls, value):
        # Booleans and floats stay malformed instead of coercing to an int id
        if value is None or (isinstance(value, (int, str)) and not isinstance(value, bool)):
            return value
        return str(value)


class TakeDoseRequest(MedicineIdRequest):
    symptoms: Optional[List[str]] = None


class RestockRequest(MedicineIdRequest):
    pass


class DoseResult(CamelModel):
    medicine: Medicine
    log: UsageLog


class RestockAllResult(CamelModel):
    success: bool = True
    restocked_count: int
