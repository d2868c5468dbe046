"""HTTP route definitions for the service."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import PlainTextResponse

from app.schemas import CoolingRun, RunRequest, RunSummary
from services.errors import ComputationError
from services.runs import RunService, build_default_service

router = APIRouter()


def get_service() -> RunService:
    return build_default_service()


def _not_found(exc: KeyError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=exc.args[0] if exc.args else "Cooling run not found.",
    )


@router.post(
    "/runs",
    status_code=status.HTTP_201_CREATED,
    response_model=CoolingRun,
    summary="Compute and store a cooling run.",
)
async def create_run(
    payload: RunRequest,
    service: RunService = Depends(get_service),
) -> CoolingRun:
    try:
        return service.create_run(payload.model_dump())
    except ComputationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=exc.to_dict(),
        ) from exc


@router.get(
    "/runs",
    response_model=List[RunSummary],
    summary="List stored runs, newest first.",
)
async def list_runs(service: RunService = Depends(get_service)) -> List[RunSummary]:
    return service.list_runs()


@router.get(
    "/runs/{run_id}",
    response_model=CoolingRun,
    summary="Fetch a stored run with its data points.",
)
async def get_run(
    run_id: str,
    service: RunService = Depends(get_service),
) -> CoolingRun:
    try:
        return service.fetch_run(run_id)
    except KeyError as exc:
        raise _not_found(exc) from exc


@router.get(
    "/runs/{run_id}/points.csv",
    response_class=PlainTextResponse,
    summary="Export the per-minute records of a run as CSV.",
)
async def export_run_points(
    run_id: str,
    service: RunService = Depends(get_service),
) -> PlainTextResponse:
    try:
        body = service.export_points(run_id)
    except KeyError as exc:
        raise _not_found(exc) from exc
    return PlainTextResponse(
        body,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="run_{run_id}.csv"'},
    )


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /health for service status."}
