from __future__ import annotations
import json
import logging
from functools import lru_cache
from pathlib import Path
from threading import Lock
from typing import Dict, Optional

from app.schemas import CoolingRun
from settings import get_settings

logger = logging.getLogger(__name__)


class RunTable:

    def __init__(self, name: str, persistence_path: Optional[Path] = None) -> None:
        self.name = name
        self._items: Dict[str, CoolingRun] = {}
        self.persistence_path = persistence_path
        self._lock = Lock()
        if persistence_path:
            persistence_path.parent.mkdir(parents=True, exist_ok=True)
            self._load_from_disk()

    def put_item(self, item: CoolingRun) -> None:
        with self._lock:
            self._items[item.run_id] = item.model_copy(deep=True)
            self._persist()

    def get_item(self, key: str) -> Optional[CoolingRun]:
        with self._lock:
            item = self._items.get(key)
            if item is None:
                return None
            return item.model_copy(deep=True)

    def scan(self) -> list[CoolingRun]:
        """Return deep copies of all stored runs, newest first."""

        with self._lock:
            items = sorted(self._items.values(), key=lambda item: item.created_at, reverse=True)
            return [item.model_copy(deep=True) for item in items]

    def _persist(self) -> None:
        if not self.persistence_path:
            return
        payload = {
            run_id: item.model_dump(mode="json") for run_id, item in self._items.items()
        }
        self.persistence_path.write_text(
            json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False),
            encoding="utf-8",
        )

    def _load_from_disk(self) -> None:
        if not self.persistence_path or not self.persistence_path.exists():
            return

        try:
            raw = self.persistence_path.read_text(encoding="utf-8") or "{}"
            data = json.loads(raw)
        except (OSError, json.JSONDecodeError):
            logger.warning(
                "Ignoring unreadable run table file",
                extra={"reason": str(self.persistence_path)},
            )
            data = {}

        for run_id, payload in data.items():
            self._items[run_id] = CoolingRun.model_validate(payload)


@lru_cache
def build_default_table(
    name: Optional[str] = None,
    path: Optional[str] = None,
) -> RunTable:
    settings = get_settings()
    table_name = settings.table_name if name is None else name
    table_path = settings.table_persistence_path if path is None else path
    persistence = Path(table_path) if table_path else None
    return RunTable(name=table_name, persistence_path=persistence)
