"""Filter criteria classified out of a short free-text query."""

from pydantic import BaseModel


class ClassificationResult(BaseModel):
    """Zero-shot output: labels ranked by confidence with parallel scores."""
    labels: list[str] = []
    scores: list[float] = []


class FilterCriteria(BaseModel):
    location: str | None = None
    job_title: str | None = None
    company: str | None = None
    job_type: str | None = None

    def is_empty(self) -> bool:
        return not (self.location or self.job_title or self.company or self.job_type)
