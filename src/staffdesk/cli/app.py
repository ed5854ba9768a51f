from __future__ import annotations

import json

import typer
import uvicorn

from staffdesk.api.app import create_app
from staffdesk.config import get_settings
from staffdesk.core.engine import CRMEngine, build_engine
from staffdesk.errors import EngineError
from staffdesk.logging_config import configure_logging

app = typer.Typer(help="Staffdesk CLI")
vacancies_app = typer.Typer(help="Browse vacancies and their pipeline history")
companies_app = typer.Typer(help="Browse companies and their pipeline history")

app.add_typer(vacancies_app, name="vacancies")
app.add_typer(companies_app, name="companies")


def _engine() -> CRMEngine:
    configure_logging()
    return build_engine(get_settings(), seed=True)


def _echo(payload: object) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@vacancies_app.command("list")
def vacancies_list(
    search: str | None = typer.Option(None, "--search"),
    stage: str | None = typer.Option(None, "--stage"),
    status: str | None = typer.Option(None, "--status"),
    source: str | None = typer.Option(None, "--source"),
    company: str | None = typer.Option(None, "--company"),
    page: int = typer.Option(1, "--page"),
    page_size: int | None = typer.Option(None, "--page-size"),
) -> None:
    engine = _engine()
    params = {
        "search": search,
        "pipeline_stage": stage,
        "status": status,
        "source": source,
        "company": company,
        "page": page,
        "page_size": page_size,
    }
    try:
        result = engine.vacancies.query({key: value for key, value in params.items() if value is not None})
    except EngineError as exc:
        raise typer.BadParameter(str(exc)) from exc
    _echo(result.model_dump())


@vacancies_app.command("show")
def vacancies_show(vacancy_id: int = typer.Option(..., "--id")) -> None:
    engine = _engine()
    try:
        vacancy = engine.vacancies.get_by_id(vacancy_id)
    except EngineError as exc:
        raise typer.BadParameter(str(exc)) from exc
    _echo(vacancy.model_dump())


@vacancies_app.command("history")
def vacancies_history(vacancy_id: int = typer.Option(..., "--id")) -> None:
    engine = _engine()
    _echo([entry.model_dump() for entry in engine.vacancies.get_history(vacancy_id)])


@companies_app.command("list")
def companies_list(
    search: str | None = typer.Option(None, "--search"),
    stage: str | None = typer.Option(None, "--stage"),
    relationship: str | None = typer.Option(None, "--relationship"),
    industry: str | None = typer.Option(None, "--industry"),
    page: int = typer.Option(1, "--page"),
    page_size: int | None = typer.Option(None, "--page-size"),
) -> None:
    engine = _engine()
    params = {
        "search": search,
        "pipeline_stage": stage,
        "relationship_type": relationship,
        "industry": industry,
        "page": page,
        "page_size": page_size,
    }
    try:
        result = engine.companies.query({key: value for key, value in params.items() if value is not None})
    except EngineError as exc:
        raise typer.BadParameter(str(exc)) from exc
    _echo(result.model_dump())


@companies_app.command("show")
def companies_show(company_id: int = typer.Option(..., "--id")) -> None:
    engine = _engine()
    try:
        company = engine.companies.get_by_id(company_id)
    except EngineError as exc:
        raise typer.BadParameter(str(exc)) from exc
    _echo(company.model_dump())


@companies_app.command("history")
def companies_history(company_id: int = typer.Option(..., "--id")) -> None:
    engine = _engine()
    _echo([entry.model_dump() for entry in engine.companies.get_history(company_id)])


@app.command("dashboard")
def dashboard() -> None:
    """Print KPI tiles and per-stage counts for both pipelines."""
    engine = _engine()
    _echo(engine.dashboard().model_dump())


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, "--host"),
    port: int | None = typer.Option(None, "--port"),
) -> None:
    engine = _engine()
    settings = engine.settings
    uvicorn.run(create_app(engine), host=host or settings.app_host, port=port or settings.app_port)
