"""Domain models for comparisons and their matches."""
from .comparison import Comparison, MetricType, SubmissionFile
from .match import Match

__all__ = ["Comparison", "Match", "MetricType", "SubmissionFile"]
