"""Comparison record assembled from a report's comparison file."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List

from .match import Match


class MetricType(str, Enum):
    """Similarity metrics reported per comparison."""

    AVERAGE = "AVG"
    MAXIMUM = "MAX"


@dataclass(frozen=True, slots=True)
class SubmissionFile:
    submission_id: str
    file_name: str
    data: str


@dataclass(frozen=True, slots=True)
class Comparison:
    """Two submissions, their similarity scores and the colored matches."""

    first_submission_id: str
    second_submission_id: str
    similarities: Dict[MetricType, float]
    files_of_first_submission: List[SubmissionFile] = field(default_factory=list)
    files_of_second_submission: List[SubmissionFile] = field(default_factory=list)
    # ordered by ascending token count
    matches: List[Match] = field(default_factory=list)

    def similarity(self, metric: MetricType) -> float:
        return self.similarities.get(metric, math.nan)
