# payana/models/lead.py

from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.sql import func
from payana.utils.database import Base


class StudyLead(Base):
    __tablename__ = "study"

    id = Column(Integer, primary_key=True, index=True)
    country = Column(String(100), nullable=True)            # страна обучения
    qualification = Column(String(50), nullable=True)
    age = Column(String(20), nullable=True)
    education_topic = Column(String(100), nullable=True)
    cgpa = Column(String(20), nullable=True)
    budget = Column(String(50), nullable=True)
    needs_loan = Column(Boolean, nullable=True)              # нужен ли кредит на обучение
    name = Column(String(100), nullable=True)
    email = Column(String(100), nullable=True)
    phone = Column(String(20), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class WorkLead(Base):
    __tablename__ = "work_profiles"

    id = Column(Integer, primary_key=True, index=True)
    occupation = Column(String(100), nullable=True)
    education = Column(String(100), nullable=True)
    experience = Column(String(100), nullable=True)
    name = Column(String(100), nullable=True)
    email = Column(String(100), nullable=True)
    phone = Column(String(20), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class InvestLead(Base):
    __tablename__ = "invest"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=True)
    email = Column(String(100), nullable=True)
    country = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
