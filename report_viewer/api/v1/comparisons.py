"""Comparison APIs serving colored matches to the viewer."""
from __future__ import annotations

import math
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from report_viewer.api.deps import get_comparison_service
from report_viewer.models.comparison import Comparison, SubmissionFile
from report_viewer.models.match import Match
from report_viewer.services.comparison_service import ComparisonService

router = APIRouter(tags=["Comparison"])


class MatchResponse(BaseModel):
    first_file: str
    second_file: str
    start_in_first: int
    end_in_first: int
    start_in_second: int
    end_in_second: int
    tokens: int
    color_index: int

    @classmethod
    def from_model(cls, match: Match) -> MatchResponse:
        return cls(
            first_file=match.first_file,
            second_file=match.second_file,
            start_in_first=match.start_in_first,
            end_in_first=match.end_in_first,
            start_in_second=match.start_in_second,
            end_in_second=match.end_in_second,
            tokens=match.tokens,
            color_index=match.color_index,
        )


class SubmissionFileResponse(BaseModel):
    file_name: str
    data: Optional[str] = None

    @classmethod
    def from_model(cls, file: SubmissionFile, include_content: bool) -> SubmissionFileResponse:
        return cls(file_name=file.file_name, data=file.data if include_content else None)


class ComparisonResponse(BaseModel):
    first_submission_id: str
    second_submission_id: str
    # 未设置的指标(NaN)以null返回
    similarities: Dict[str, Optional[float]]
    files_of_first_submission: List[SubmissionFileResponse]
    files_of_second_submission: List[SubmissionFileResponse]
    matches: List[MatchResponse]

    @classmethod
    def from_model(cls, comparison: Comparison, include_file_contents: bool = False) -> ComparisonResponse:
        return cls(
            first_submission_id=comparison.first_submission_id,
            second_submission_id=comparison.second_submission_id,
            similarities={
                metric.value: None if math.isnan(value) else value
                for metric, value in comparison.similarities.items()
            },
            files_of_first_submission=[
                SubmissionFileResponse.from_model(file, include_file_contents)
                for file in comparison.files_of_first_submission
            ],
            files_of_second_submission=[
                SubmissionFileResponse.from_model(file, include_file_contents)
                for file in comparison.files_of_second_submission
            ],
            matches=[MatchResponse.from_model(match) for match in comparison.matches],
        )


@router.get(
    "/{first_id}/{second_id}",
    response_model=ComparisonResponse,
    summary="Get a colored comparison",
)
def get_comparison(
    first_id: str,
    second_id: str,
    include_file_contents: bool = Query(False, description="Include submission file contents"),
    service: ComparisonService = Depends(get_comparison_service),
) -> ComparisonResponse:
    comparison = service.get_comparison(first_id, second_id)
    return ComparisonResponse.from_model(comparison, include_file_contents)
