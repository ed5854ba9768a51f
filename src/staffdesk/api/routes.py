from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from staffdesk.api.deps import get_engine, get_user
from staffdesk.api.schemas import ContactDeleteResponse, DeleteResponse, StageCountsResponse
from staffdesk.core.engine import CRMEngine
from staffdesk.errors import EngineError, NotFoundError
from staffdesk.types import (
    Company,
    CompanyCreate,
    CompanyInvestigate,
    CompanyStateChange,
    CompanyUpdate,
    Contact,
    ContactCreate,
    ContactUpdate,
    DashboardData,
    Page,
    Research,
    ResearchUpdate,
    StateChangeRequest,
    Vacancy,
    VacancyCreate,
    VacancyStateChange,
    VacancyUpdate,
)

router = APIRouter(prefix="/api", tags=["api"])


def _http_error(exc: EngineError) -> HTTPException:
    status_code = 404 if isinstance(exc, NotFoundError) else 400
    return HTTPException(status_code=status_code, detail=str(exc))


def _history_filters(
    stage: str | None,
    user: str | None,
    date_from: str | None,
    date_to: str | None,
) -> dict[str, str] | None:
    filters = {"stage": stage, "user": user, "date_from": date_from, "date_to": date_to}
    filters = {key: value for key, value in filters.items() if value}
    return filters or None


@router.get("/dashboard", response_model=DashboardData)
def get_dashboard(engine: CRMEngine = Depends(get_engine)) -> DashboardData:
    return engine.dashboard()


@router.get("/vacancies", response_model=Page[Vacancy])
def list_vacancies(
    page: int = Query(1),
    page_size: int | None = Query(None),
    search: str | None = Query(None),
    status: str | None = Query(None),
    pipeline_stage: str | None = Query(None),
    source: str | None = Query(None),
    state: str | None = Query(None),
    company: str | None = Query(None),
    company_id: int | None = Query(None),
    date_from: str | None = Query(None),
    date_to: str | None = Query(None),
    assigned_to: str | None = Query(None),
    engine: CRMEngine = Depends(get_engine),
) -> Page[Vacancy]:
    params = {
        "page": page,
        "page_size": page_size,
        "search": search,
        "status": status,
        "pipeline_stage": pipeline_stage,
        "source": source,
        "state": state,
        "company": company,
        "company_id": company_id,
        "date_from": date_from,
        "date_to": date_to,
        "assigned_to": assigned_to,
    }
    try:
        return engine.vacancies.query({key: value for key, value in params.items() if value is not None})
    except EngineError as exc:
        raise _http_error(exc) from exc


@router.get("/vacancies/stage-counts", response_model=StageCountsResponse)
def vacancy_stage_counts(engine: CRMEngine = Depends(get_engine)) -> StageCountsResponse:
    counts = engine.vacancies.counts_by_stage()
    return StageCountsResponse(counts=counts, total=sum(counts.values()))


@router.post("/vacancies", response_model=Vacancy, status_code=201)
def create_vacancy(
    payload: VacancyCreate,
    engine: CRMEngine = Depends(get_engine),
    user: str | None = Depends(get_user),
) -> Vacancy:
    try:
        return engine.vacancies.create(payload, user=user)
    except EngineError as exc:
        raise _http_error(exc) from exc


@router.get("/vacancies/{vacancy_id}", response_model=Vacancy)
def get_vacancy(vacancy_id: int, engine: CRMEngine = Depends(get_engine)) -> Vacancy:
    try:
        return engine.vacancies.get_by_id(vacancy_id)
    except EngineError as exc:
        raise _http_error(exc) from exc


@router.patch("/vacancies/{vacancy_id}", response_model=Vacancy)
def update_vacancy(vacancy_id: int, payload: VacancyUpdate, engine: CRMEngine = Depends(get_engine)) -> Vacancy:
    try:
        return engine.vacancies.update(vacancy_id, payload)
    except EngineError as exc:
        raise _http_error(exc) from exc


@router.delete("/vacancies/{vacancy_id}", response_model=DeleteResponse)
def delete_vacancy(vacancy_id: int, engine: CRMEngine = Depends(get_engine)) -> DeleteResponse:
    return DeleteResponse(id=vacancy_id, deleted=engine.vacancies.delete(vacancy_id))


@router.post("/vacancies/{vacancy_id}/state", response_model=Vacancy)
def change_vacancy_state(
    vacancy_id: int,
    payload: StateChangeRequest,
    engine: CRMEngine = Depends(get_engine),
    user: str | None = Depends(get_user),
) -> Vacancy:
    try:
        return engine.vacancies.change_state(
            vacancy_id,
            payload.new_state,
            payload.note,
            tags=payload.tags,
            user=user,
        )
    except EngineError as exc:
        raise _http_error(exc) from exc


@router.get("/vacancies/{vacancy_id}/history", response_model=list[VacancyStateChange])
def vacancy_history(
    vacancy_id: int,
    stage: str | None = Query(None),
    user: str | None = Query(None),
    date_from: str | None = Query(None),
    date_to: str | None = Query(None),
    engine: CRMEngine = Depends(get_engine),
) -> list[VacancyStateChange]:
    return engine.vacancies.get_history(vacancy_id, _history_filters(stage, user, date_from, date_to))


@router.get("/companies", response_model=Page[Company])
def list_companies(
    page: int = Query(1),
    page_size: int | None = Query(None),
    search: str | None = Query(None),
    relationship_type: str | None = Query(None),
    pipeline_stage: str | None = Query(None),
    industry: str | None = Query(None),
    location: str | None = Query(None),
    country: str | None = Query(None),
    assigned_to: str | None = Query(None),
    engine: CRMEngine = Depends(get_engine),
) -> Page[Company]:
    params = {
        "page": page,
        "page_size": page_size,
        "search": search,
        "relationship_type": relationship_type,
        "pipeline_stage": pipeline_stage,
        "industry": industry,
        "location": location,
        "country": country,
        "assigned_to": assigned_to,
    }
    try:
        return engine.companies.query({key: value for key, value in params.items() if value is not None})
    except EngineError as exc:
        raise _http_error(exc) from exc


@router.get("/companies/stage-counts", response_model=StageCountsResponse)
def company_stage_counts(engine: CRMEngine = Depends(get_engine)) -> StageCountsResponse:
    counts = engine.companies.counts_by_stage()
    return StageCountsResponse(counts=counts, total=sum(counts.values()))


@router.post("/companies", response_model=Company, status_code=201)
def create_company(
    payload: CompanyCreate,
    engine: CRMEngine = Depends(get_engine),
    user: str | None = Depends(get_user),
) -> Company:
    try:
        return engine.companies.create(payload, user=user)
    except EngineError as exc:
        raise _http_error(exc) from exc


@router.post("/companies/investigate", response_model=Company, status_code=201)
def investigate_company(
    payload: CompanyInvestigate,
    engine: CRMEngine = Depends(get_engine),
    user: str | None = Depends(get_user),
) -> Company:
    try:
        return engine.companies.investigate(payload, user=user)
    except EngineError as exc:
        raise _http_error(exc) from exc


@router.get("/companies/{company_id}", response_model=Company)
def get_company(company_id: int, engine: CRMEngine = Depends(get_engine)) -> Company:
    try:
        return engine.companies.get_by_id(company_id)
    except EngineError as exc:
        raise _http_error(exc) from exc


@router.patch("/companies/{company_id}", response_model=Company)
def update_company(company_id: int, payload: CompanyUpdate, engine: CRMEngine = Depends(get_engine)) -> Company:
    try:
        return engine.companies.update(company_id, payload)
    except EngineError as exc:
        raise _http_error(exc) from exc


@router.delete("/companies/{company_id}", response_model=DeleteResponse)
def delete_company(company_id: int, engine: CRMEngine = Depends(get_engine)) -> DeleteResponse:
    return DeleteResponse(id=company_id, deleted=engine.companies.delete(company_id))


@router.post("/companies/{company_id}/state", response_model=Company)
def change_company_state(
    company_id: int,
    payload: StateChangeRequest,
    engine: CRMEngine = Depends(get_engine),
    user: str | None = Depends(get_user),
) -> Company:
    try:
        return engine.companies.change_state(
            company_id,
            payload.new_state,
            payload.note,
            tags=payload.tags,
            user=user,
        )
    except EngineError as exc:
        raise _http_error(exc) from exc


@router.get("/companies/{company_id}/history", response_model=list[CompanyStateChange])
def company_history(
    company_id: int,
    stage: str | None = Query(None),
    user: str | None = Query(None),
    date_from: str | None = Query(None),
    date_to: str | None = Query(None),
    engine: CRMEngine = Depends(get_engine),
) -> list[CompanyStateChange]:
    return engine.companies.get_history(company_id, _history_filters(stage, user, date_from, date_to))


@router.get("/companies/{company_id}/vacancies", response_model=list[Vacancy])
def company_vacancies(company_id: int, engine: CRMEngine = Depends(get_engine)) -> list[Vacancy]:
    try:
        return engine.companies.get_company_vacancies(company_id)
    except EngineError as exc:
        raise _http_error(exc) from exc


@router.patch("/companies/{company_id}/research", response_model=Research)
def update_company_research(
    company_id: int,
    payload: ResearchUpdate,
    engine: CRMEngine = Depends(get_engine),
) -> Research:
    try:
        return engine.companies.update_research(company_id, payload)
    except EngineError as exc:
        raise _http_error(exc) from exc


@router.post("/companies/{company_id}/contacts", response_model=Contact, status_code=201)
def add_contact(
    company_id: int,
    payload: ContactCreate,
    engine: CRMEngine = Depends(get_engine),
    user: str | None = Depends(get_user),
) -> Contact:
    try:
        return engine.companies.add_contact(company_id, payload, user=user)
    except EngineError as exc:
        raise _http_error(exc) from exc


@router.patch("/companies/{company_id}/contacts/{contact_id}", response_model=Contact)
def update_contact(
    company_id: int,
    contact_id: int,
    payload: ContactUpdate,
    engine: CRMEngine = Depends(get_engine),
    user: str | None = Depends(get_user),
) -> Contact:
    try:
        return engine.companies.update_contact(company_id, contact_id, payload, user=user)
    except EngineError as exc:
        raise _http_error(exc) from exc


@router.delete("/companies/{company_id}/contacts/{contact_id}", response_model=ContactDeleteResponse)
def remove_contact(
    company_id: int,
    contact_id: int,
    engine: CRMEngine = Depends(get_engine),
    user: str | None = Depends(get_user),
) -> ContactDeleteResponse:
    try:
        deleted = engine.companies.remove_contact(company_id, contact_id, user=user)
    except EngineError as exc:
        raise _http_error(exc) from exc
    return ContactDeleteResponse(company_id=company_id, contact_id=contact_id, deleted=deleted)
