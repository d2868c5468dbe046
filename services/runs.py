"""Orchestration of run computation, storage and retrieval."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, List, Mapping, Optional
from uuid import uuid4

from app.schemas import CoolingRun, CoolingTrend, DataPointOut, RunParameters, RunSummary
from datastore.run_table import RunTable, build_default_table
from models.records import CoolingResult
from services.cooling import CoolingSeriesGenerator
from services.errors import ComputationError
from services.export import points_to_csv
from services.parsing import parse_parameters
from services.report import closing_observation, summary_rows
from settings import get_settings

logger = logging.getLogger(__name__)


def build_run_record(
    result: CoolingResult,
    run_id: str,
    created_at: Optional[datetime] = None,
) -> CoolingRun:
    """Convert a domain result into the API/storage representation."""
    params = result.params
    return CoolingRun(
        run_id=run_id,
        created_at=created_at or datetime.now(timezone.utc),
        parameters=RunParameters(
            date=params.run_date.strftime("%d/%m/%Y"),
            start_clock=params.start_clock.strftime("%H:%M"),
            end_clock=params.end_clock.strftime("%H:%M"),
            initial_temp=params.initial_temp,
            final_temp=params.final_temp,
            initial_humidity=params.initial_humidity,
            final_humidity=params.final_humidity,
            title=params.title,
            objective=params.objective,
            product=params.product,
            issued_at=params.issued_at,
        ),
        total_minutes=result.total_minutes,
        global_rate_constant=result.global_rate_constant,
        mean_linear_rate=result.mean_linear_rate,
        humidity_max=result.humidity_max,
        humidity_min=result.humidity_min,
        humidity_mean=result.humidity_mean,
        temperature_max=result.temperature_max,
        temperature_min=result.temperature_min,
        temperature_mean=result.temperature_mean,
        jitter_seconds=result.jitter_seconds,
        target_temp=result.target_temp,
        minutes_to_target=result.minutes_to_target,
        trend=CoolingTrend(result.trend),
        summary_rows=[[label, value] for label, value in summary_rows(result)],
        observation=closing_observation(result),
        data_points=[
            DataPointOut(
                index=point.index,
                clock_time=point.clock_time,
                observed_temp=point.observed_temp,
                model_temp=point.model_temp,
                humidity=point.humidity,
                interval_rate_constant=point.interval_rate_constant,
                timestamp=point.timestamp,
            )
            for point in result.data_points
        ],
    )


class RunService:
    """Coordinates parameter validation, computation and run storage."""

    def __init__(self, table: RunTable, generator: CoolingSeriesGenerator) -> None:
        self.table = table
        self.generator = generator

    def create_run(self, payload: Mapping[str, Any]) -> CoolingRun:
        """Validate, compute and store a run; raises ``ComputationError`` on rejection."""
        run_id = str(uuid4())
        try:
            params = parse_parameters(payload)
            result = self.generator.compute(params)
        except ComputationError as exc:
            logger.warning(
                "Rejected cooling run",
                extra={"run_id": run_id, "code": exc.code, "field": exc.field, "reason": exc.message},
            )
            raise

        record = build_run_record(result, run_id=run_id)
        self.table.put_item(record)
        logger.info(
            "Stored cooling run",
            extra={"run_id": run_id, "total_minutes": record.total_minutes},
        )
        return record

    def fetch_run(self, run_id: str) -> CoolingRun:
        record = self.table.get_item(run_id)
        if record is None:
            raise KeyError(f"Cooling run {run_id!r} not found.")
        return record

    def list_runs(self) -> List[RunSummary]:
        return [record.summary() for record in self.table.scan()]

    def export_points(self, run_id: str) -> str:
        return points_to_csv(self.fetch_run(run_id).data_points)


@lru_cache
def build_default_service() -> RunService:
    """Factory that wires the service with configured defaults."""
    settings = get_settings()
    generator = CoolingSeriesGenerator(
        seed=settings.jitter_seed,
        target_temp=settings.target_temp,
    )
    return RunService(table=build_default_table(), generator=generator)
