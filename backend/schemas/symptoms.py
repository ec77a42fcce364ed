from pydantic import BaseModel, Field
from typing import List

# Symptoms offered by the client's symptom picker. Medicines may carry others.
SYMPTOMS = [
    "Fever",
    "Headache",
    "Nausea",
    "Cold & Flu",
    "Body Pain",
    "Allergy",
    "Stomach",
    "Sleep Aid",
    "Anxiety",
]


class SymptomSearchRequest(BaseModel):
    symptoms: List[str] = Field(default_factory=list)
