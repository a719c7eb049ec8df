"""Comparison lookup with a per-pair in-memory cache."""
from __future__ import annotations

from typing import Dict, Tuple

from report_viewer.core.logging import LogEvent
from report_viewer.models.comparison import Comparison
from report_viewer.services.base_service import BaseService, singleton
from report_viewer.services.comparison_factory import ComparisonFactory
from report_viewer.services.report_store import ReportStore


@singleton
class ComparisonService(BaseService):
    """Serves colored comparisons of the configured report."""

    def __init__(self):
        super().__init__()
        self._cache: Dict[Tuple[str, str], Comparison] = {}

    def _initialize(self) -> None:
        self.store = ReportStore(self.settings.report_path)
        self.factory = ComparisonFactory(self.store, self.settings.match_color_count)
        self.logger.info(
            "comparison_service_ready",
            report_path=self.settings.report_path,
            archive=self.settings.is_archive_report,
            palette_size=self.settings.match_color_count,
        )

    def _teardown(self) -> None:
        self._cache.clear()
        self.store.close()

    def get_comparison(self, first_id: str, second_id: str) -> Comparison:
        key = (first_id, second_id)
        with self._lock:
            self._ensure_initialized()
            cached = self._cache.get(key)
            if cached is not None:
                self.logger.debug(LogEvent.COMPARISON_CACHE_HIT, first_submission_id=first_id, second_submission_id=second_id)
                return cached

            self.logger.info(LogEvent.COMPARISON_REQUESTED, first_submission_id=first_id, second_submission_id=second_id)
            comparison = self.factory.get_comparison(first_id, second_id)
            self._cache[key] = comparison
            return comparison

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()
