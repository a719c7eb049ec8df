"""Build colored comparisons from a report's comparison files."""
from __future__ import annotations

import math
from typing import Any, Dict, List

from pydantic import BaseModel, Field, ValidationError

from report_viewer.core.errors import ComparisonNotFoundError, MalformedInputError, NoSimilarityDataError
from report_viewer.core.logging import LogEvent, get_logger
from report_viewer.models.comparison import Comparison, MetricType
from report_viewer.models.match import Match
from report_viewer.services.match_colorer import color_matches
from report_viewer.services.report_store import ReportStore
from report_viewer.utils.paths import to_slash

logger = get_logger(__name__)


class MatchDescriptor(BaseModel):
    """One entry of a comparison file's ``matches`` array."""

    file1: str
    file2: str
    start1: int = Field(ge=0)
    end1: int = Field(ge=0)
    start2: int = Field(ge=0)
    end2: int = Field(ge=0)
    tokens: int = Field(gt=0)

    def to_match(self) -> Match:
        return Match(
            first_file=to_slash(self.file1),
            second_file=to_slash(self.file2),
            start_in_first=self.start1,
            end_in_first=self.end1,
            start_in_second=self.start2,
            end_in_second=self.end2,
            tokens=self.tokens,
        )


class ComparisonFactory:
    """Turns comparison JSON into :class:`Comparison` objects."""

    def __init__(self, store: ReportStore, palette_size: int):
        self.store = store
        self.palette_size = palette_size

    def get_comparison(self, first_id: str, second_id: str) -> Comparison:
        file_name = self.store.get_comparison_file_name(first_id, second_id)
        if not file_name:
            raise ComparisonNotFoundError(first_id, second_id)
        data = self.store.read_json(file_name)
        if not isinstance(data, dict):
            raise MalformedInputError("expected a JSON object", source=file_name)
        return self.extract_comparison(data, source=file_name)

    def extract_comparison(self, data: Dict[str, Any], source: str = "comparison") -> Comparison:
        first_id = self._require_str(data, "id1", source)
        second_id = self._require_str(data, "id2", source)

        self.store.load_submission_files(first_id)
        self.store.load_submission_files(second_id)

        similarities = self.extract_similarities(data, source=source)
        matches = color_matches(self.extract_matches(data, source=source), self.palette_size)

        logger.info(
            LogEvent.COMPARISON_BUILT,
            first_submission_id=first_id,
            second_submission_id=second_id,
            matches=len(matches),
        )
        return Comparison(
            first_submission_id=first_id,
            second_submission_id=second_id,
            similarities=similarities,
            files_of_first_submission=self.store.files_of_submission(first_id),
            files_of_second_submission=self.store.files_of_submission(second_id),
            matches=matches,
        )

    @staticmethod
    def extract_matches(data: Dict[str, Any], source: str = "comparison") -> List[Match]:
        raw_matches = data.get("matches")
        if not isinstance(raw_matches, list):
            raise MalformedInputError("'matches' must be a list", source=source, field="matches")
        try:
            return [MatchDescriptor.model_validate(raw).to_match() for raw in raw_matches]
        except ValidationError as e:
            raise MalformedInputError(f"invalid match entry: {e.errors()[0]['msg']}", source=source, field="matches")

    @classmethod
    def extract_similarities(cls, data: Dict[str, Any], source: str = "comparison") -> Dict[MetricType, float]:
        similarity_map = data.get("similarities")
        if similarity_map:
            if not isinstance(similarity_map, dict):
                raise MalformedInputError("'similarities' must be an object", source=source, field="similarities")
            return cls._similarities_from_map(similarity_map, source)
        if data.get("similarity") is not None:
            logger.info(LogEvent.LEGACY_SIMILARITY_FORMAT, source=source)
            return cls._similarities_from_single_value(data["similarity"], source)
        raise NoSimilarityDataError(source)

    @staticmethod
    def _similarities_from_single_value(value: Any, source: str) -> Dict[MetricType, float]:
        """Legacy reports only carry the average similarity."""
        return {
            MetricType.AVERAGE: _to_float(value, source, "similarity"),
            MetricType.MAXIMUM: math.nan,
        }

    @staticmethod
    def _similarities_from_map(similarity_map: Dict[str, Any], source: str) -> Dict[MetricType, float]:
        similarities: Dict[MetricType, float] = {}
        for key, value in similarity_map.items():
            try:
                metric = MetricType(key)
            except ValueError:
                logger.warning(LogEvent.UNKNOWN_METRIC_SKIPPED, metric=key, source=source)
                continue
            similarities[metric] = _to_float(value, source, f"similarities.{key}")
        return similarities

    @staticmethod
    def _require_str(data: Dict[str, Any], field: str, source: str) -> str:
        value = data.get(field)
        if not isinstance(value, str) or not value:
            raise MalformedInputError(f"missing '{field}'", source=source, field=field)
        return value


def _to_float(value: Any, source: str, field: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedInputError(f"'{field}' must be a number", source=source, field=field)
    return float(value)


__all__ = ["ComparisonFactory", "MatchDescriptor"]
