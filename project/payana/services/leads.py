# payana/services/leads.py

from sqlalchemy.future import select
from fastapi import Request
from pydantic import BaseModel

from payana.models.lead import StudyLead, WorkLead, InvestLead
from payana.services.templates import render_lead_email

# тип заявки -> модель
LEAD_MODELS = {
    "study": StudyLead,
    "work": WorkLead,
    "invest": InvestLead,
}


async def create_lead_service(kind: str, lead: BaseModel, request: Request):
    """
    Сохраняет заявку и ставит в очередь письмо менеджерам.
    Результат отправки письма на ответ не влияет.
    """
    db = request.state.db
    log = request.app.state.log
    model = LEAD_MODELS[kind]

    db_lead = model(**lead.model_dump())
    db.add(db_lead)
    await db.commit()
    await db.refresh(db_lead)
    await log.log_info("lead", f"Заявка {kind} сохранена", {"id": db_lead.id})

    subject, html = render_lead_email(kind, db_lead, request.app.state.settings.NOTIFY_TIMEZONE)
    request.app.state.mailer.send(subject, html)
    return db_lead


async def read_leads_service(kind: str, request: Request) -> list:
    """
    Все заявки типа kind, новые сверху.
    """
    db = request.state.db
    log = request.app.state.log
    model = LEAD_MODELS[kind]

    result = await db.execute(select(model).order_by(model.created_at.desc(), model.id.desc()))
    leads = result.scalars().all()

    await log.log_info("lead", f"{len(leads)} заявок {kind} загружено")
    return leads
