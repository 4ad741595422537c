"""Per-user analysis history, newest first."""

import logging

from pydantic import TypeAdapter
from pydantic import ValidationError as SchemaError

from debug_buddy.models import AnalysisReport
from debug_buddy.storage import KeyValueStore

logger = logging.getLogger(__name__)

ANALYSES_KEY = "analyses"

_history_adapter = TypeAdapter(dict[str, list[AnalysisReport]])


class AnalysisStore:
    """Stores every user's reports under one key as a user-id → list map."""

    def __init__(self, storage: KeyValueStore) -> None:
        self._storage = storage

    def _load(self) -> dict[str, list[AnalysisReport]]:
        raw = self._storage.get(ANALYSES_KEY)
        if raw is None:
            return {}
        if not isinstance(raw, dict):
            logger.warning("Stored analyses are not a user map, starting empty")
            return {}
        history: dict[str, list[AnalysisReport]] = {}
        for user_id, items in raw.items():
            if not isinstance(items, list):
                logger.warning("Dropping unreadable history for %s", user_id)
                continue
            reports: list[AnalysisReport] = []
            for item in items:
                try:
                    reports.append(AnalysisReport.model_validate(item))
                except SchemaError as exc:
                    logger.warning("Dropping unreadable report for %s: %s", user_id, exc)
            history[user_id] = reports
        return history

    def save(self, report: AnalysisReport, user_id: str) -> None:
        history = self._load()
        history.setdefault(user_id, []).insert(0, report)
        self._storage.set(ANALYSES_KEY, _history_adapter.dump_python(history, mode="json"))

    def list_for_user(self, user_id: str) -> list[AnalysisReport]:
        return self._load().get(user_id, [])

    def summarize(self, user_id: str) -> tuple[int, float]:
        """Count and mean score over the user's whole history."""
        reports = self.list_for_user(user_id)
        if not reports:
            return 0, 0.0
        total = sum(r.overall_score for r in reports)
        return len(reports), total / len(reports)
