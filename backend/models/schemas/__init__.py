"""Pydantic contracts passed between the recommender stages."""

from models.schemas.extracted_signals import ExtractedSignals
from models.schemas.filter_criteria import ClassificationResult, FilterCriteria
from models.schemas.job_posting import JobPosting

__all__ = [
    "ExtractedSignals",
    "ClassificationResult",
    "FilterCriteria",
    "JobPosting",
]
