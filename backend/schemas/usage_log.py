from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import List, Optional


class UsageLogBase(BaseModel):
    medicine_id: int
    medicine_name: str
    dose: int = 1
    symptoms: List[str] = Field(default_factory=list)
    was_effective: Optional[bool] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class UsageLogCreate(UsageLogBase):
    pass


class UsageLog(UsageLogBase):
    id: int
    timestamp: datetime
