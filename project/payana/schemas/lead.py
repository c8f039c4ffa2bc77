# payana/schemas/lead.py

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime

# ────────────── Входные данные форм ──────────────
# Поля необязательные: формат email/телефона не проверяется, храним как есть.
# Числа (возраст, CGPA, телефон) сохраняются строкой.

class StudyLeadCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)

    country: Optional[str] = Field(None, alias="selectedCountry")
    qualification: Optional[str] = Field(None, alias="selectedQualification")
    age: Optional[str] = Field(None, alias="selectedAge")
    education_topic: Optional[str] = Field(None, alias="selectedEducationTopic")
    cgpa: Optional[str] = Field(None, alias="currentCgpa")
    budget: Optional[str] = Field(None, alias="selectedBudget")
    needs_loan: Optional[bool] = Field(None, alias="needsLoan")
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class WorkLeadCreate(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    occupation: Optional[str] = None
    education: Optional[str] = None
    experience: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class InvestLeadCreate(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    name: Optional[str] = None
    email: Optional[str] = None
    country: Optional[str] = None

# ────────────── Схемы для RESPONSE ──────────────

class StudyLead(BaseModel):
    id: int
    country: Optional[str] = None
    qualification: Optional[str] = None
    age: Optional[str] = None
    education_topic: Optional[str] = None
    cgpa: Optional[str] = None
    budget: Optional[str] = None
    needs_loan: Optional[bool] = None
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }


class WorkLead(BaseModel):
    id: int
    occupation: Optional[str] = None
    education: Optional[str] = None
    experience: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }


class InvestLead(BaseModel):
    id: int
    name: Optional[str] = None
    email: Optional[str] = None
    country: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }
