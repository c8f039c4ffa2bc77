# payana/routes/leads.py

from enum import Enum

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError

from payana.schemas.lead import (
    StudyLeadCreate,
    WorkLeadCreate,
    InvestLeadCreate,
    StudyLead,
    WorkLead,
    InvestLead,
)
from payana.services.leads import create_lead_service, read_leads_service
from payana.utils.errors import upstream_error

router = APIRouter()

LEAD_RESPONSES = {
    200: {"description": "Заявка сохранена, письмо менеджерам поставлено в очередь"},
    400: {"description": "Неверные данные запроса"},
    500: {"description": "Ошибка базы данных"},
}


class LeadKind(str, Enum):
    study = "study"
    work = "work"
    invest = "invest"


FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")

LEAD_SCHEMAS = {
    LeadKind.study: StudyLead,
    LeadKind.work: WorkLead,
    LeadKind.invest: InvestLead,
}


def lead_body(schema):
    """
    Тело заявки: JSON или обычная HTML-форма (urlencoded / multipart).
    Пустое тело означает заявку, в которой все поля null.
    """
    async def dependency(request: Request):
        content_type = request.headers.get("content-type", "")
        if content_type.startswith(FORM_CONTENT_TYPES):
            data = dict(await request.form())
        elif not (await request.body()).strip():
            data = {}
        else:
            try:
                data = await request.json()
            except ValueError:
                raise RequestValidationError([{"type": "json_invalid", "loc": ("body",), "msg": "JSON decode error"}])

        if not isinstance(data, dict):
            raise RequestValidationError([{"type": "dict_type", "loc": ("body",), "msg": "Object expected"}])
        try:
            return schema.model_validate(data)
        except PydanticValidationError as e:
            raise RequestValidationError(e.errors())

    return dependency


async def submit(request: Request, kind: LeadKind, lead, message: str) -> dict:
    try:
        db_lead = await create_lead_service(kind.value, lead, request)
    except HTTPException:
        raise
    except Exception as e:
        raise await upstream_error(request, "lead", f"сохранение заявки {kind.value}", e, "Database error")

    return {
        "success": True,
        "message": message,
        "data": LEAD_SCHEMAS[kind].model_validate(db_lead),
    }

# ────────────── ФОРМЫ С САЙТА ──────────────
@router.post(
    "/submit-form",
    status_code=status.HTTP_200_OK,
    summary="Заявка на обучение за рубежом",
    responses=LEAD_RESPONSES,
)
async def submit_study_form(request: Request, lead: StudyLeadCreate = Depends(lead_body(StudyLeadCreate))):
    return await submit(request, LeadKind.study, lead, "Form submitted successfully")


@router.post(
    "/submit-work-form",
    status_code=status.HTTP_200_OK,
    summary="Заявка на работу за рубежом",
    responses=LEAD_RESPONSES,
)
async def submit_work_form(request: Request, lead: WorkLeadCreate = Depends(lead_body(WorkLeadCreate))):
    return await submit(request, LeadKind.work, lead, "Work profile saved successfully")


@router.post(
    "/submit-invest-form",
    status_code=status.HTTP_200_OK,
    summary="Заявка на инвестиции",
    responses=LEAD_RESPONSES,
)
async def submit_invest_form(request: Request, lead: InvestLeadCreate = Depends(lead_body(InvestLeadCreate))):
    return await submit(request, LeadKind.invest, lead, "Investment inquiry submitted successfully")

# ────────────── АДМИНКА ──────────────
@router.get(
    "/admin/leads/{kind}",
    status_code=status.HTTP_200_OK,
    summary="Список заявок (study / work / invest)",
    response_description="Все заявки выбранного типа, новые сверху",
    responses={
        200: {"description": "Список заявок получен"},
        400: {"description": "Неизвестный тип заявки"},
        500: {"description": "Ошибка базы данных"},
    },
)
async def read_leads(kind: LeadKind, request: Request):
    try:
        leads = await read_leads_service(kind.value, request)
    except Exception as e:
        raise await upstream_error(request, "lead", f"получение заявок {kind.value}", e)

    schema = LEAD_SCHEMAS[kind]
    return {"success": True, "data": [schema.model_validate(lead) for lead in leads]}
