from __future__ import annotations

from typing import Any, Dict

import httpx
import typer

from cli.config import CLIConfig


class ApiClient:
    """Minimal HTTP client for the cooling run service."""

    def __init__(self, config: CLIConfig) -> None:
        self._config = config
        self._client = httpx.Client(base_url=config.base_url, timeout=config.timeout)

    def close(self) -> None:
        self._client.close()

    def submit_run(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self._client.post("/runs", json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        data = response.json()
        if not isinstance(data.get("run_id"), str):
            raise typer.BadParameter("Unexpected response payload when submitting run.")
        return data

    def get_run(self, run_id: str) -> Dict[str, Any]:
        try:
            response = self._client.get(f"/runs/{run_id}")
            if response.status_code == 404:
                raise typer.BadParameter(f"Run {run_id} was not found.")
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        return response.json()

    def export_points(self, run_id: str) -> str:
        try:
            response = self._client.get(f"/runs/{run_id}/points.csv")
            if response.status_code == 404:
                raise typer.BadParameter(f"Run {run_id} was not found.")
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        return response.text

    @staticmethod
    def _handle_http_error(exc: httpx.HTTPStatusError) -> None:
        detail: Any = None
        try:
            data = exc.response.json()
            detail = data.get("detail")
        except Exception:  # noqa: BLE001 - best effort parsing
            detail = exc.response.text.strip()
        if isinstance(detail, dict):
            detail = f"[{detail.get('code')}] {detail.get('message')}"
        message = (
            f"Request failed with status {exc.response.status_code}: {detail or 'no detail provided.'}"
        )
        typer.secho(message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
