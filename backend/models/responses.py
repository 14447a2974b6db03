from typing import Literal

from pydantic import BaseModel, Field

from models.schemas.extracted_signals import ExtractedSignals
from models.schemas.filter_criteria import FilterCriteria


class RankedResult(BaseModel):
    """One recommended job, projected from a stored posting."""
    model_config = {"populate_by_name": True}

    job_id: int | str | None = Field(default=None, alias="jobId")
    score: float = 0.0  # vectorSearchScore, cosine-like in [0, 1]
    job_name: str | None = None
    job_description: str | None = None
    location: str | None = None
    job_type: str | None = None
    company: str | None = None


class RecommendationResponse(BaseModel):
    mode: Literal["query", "resume"]
    results: list[RankedResult] = []
    search_query: str = ""
    criteria: FilterCriteria | None = None
    signals: ExtractedSignals | None = None
    # True when extraction or embedding failed before the search could run
    degraded: bool = False
    message: str = ""
