"""Vector search planning, execution and result ranking.

Pipeline shape sent to Atlas:
    $vectorSearch  (index, path, queryVector, numCandidates, limit)
    $set score     ($meta: vectorSearchScore)
    $match         (only when filter criteria are present: $or of regexes)
    $sort          (score descending)

Results are re-sorted locally (stable) and truncated to the plan's final
limit, which may be smaller than the search-stage limit.
"""

import logging
import re
from dataclasses import dataclass
from typing import Protocol

from models.responses import RankedResult
from models.schemas.filter_criteria import FilterCriteria
from services.errors import SearchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchPlan:
    index: str
    path: str = "embedding"
    num_candidates: int = 38
    limit: int = 5
    final_limit: int = 5


# Short free-text queries: small candidate pool, no re-limit
QUERY_PLAN = SearchPlan(index="job_vector_search", num_candidates=38, limit=5, final_limit=5)
# Résumés: oversample, then keep the top 10 of 20
RESUME_PLAN = SearchPlan(index="smart_job_recommend_data", num_candidates=100, limit=20, final_limit=10)

# FilterCriteria field -> stored document attribute
_CRITERIA_FIELDS: dict[str, str] = {
    "location": "location",
    "job_title": "jobTitle",
    "company": "company",
    "job_type": "jobType",
}


class AggregateStore(Protocol):
    def aggregate(self, pipeline: list[dict], max_time_ms: int | None = None) -> list[dict]: ...


def plan_for_mode(mode: str, settings) -> SearchPlan:
    """Build the 'query' or 'resume' plan from settings."""
    if mode == "query":
        return SearchPlan(
            index=settings.query_index,
            path=settings.vector_path,
            num_candidates=settings.query_num_candidates,
            limit=settings.query_limit,
            final_limit=settings.query_final_limit,
        )
    if mode == "resume":
        return SearchPlan(
            index=settings.resume_index,
            path=settings.vector_path,
            num_candidates=settings.resume_num_candidates,
            limit=settings.resume_limit,
            final_limit=settings.resume_final_limit,
        )
    raise ValueError(f"Unknown search mode: {mode}")


def build_filter_stage(criteria: FilterCriteria | None) -> dict | None:
    """Build a $match stage requiring at least one criterion to substring-match.

    Returns None when no criterion is set, so an empty $or is never emitted.
    """
    if criteria is None:
        return None

    predicates = []
    for field, attribute in _CRITERIA_FIELDS.items():
        value = getattr(criteria, field)
        if value:
            predicates.append({attribute: {"$regex": re.escape(value), "$options": "i"}})

    if not predicates:
        return None
    return {"$match": {"$or": predicates}}


def build_pipeline(
    plan: SearchPlan,
    query_vector: list[float],
    criteria: FilterCriteria | None = None,
) -> list[dict]:
    pipeline: list[dict] = [
        {
            "$vectorSearch": {
                "index": plan.index,
                "path": plan.path,
                "queryVector": list(query_vector),
                "numCandidates": plan.num_candidates,
                "limit": plan.limit,
            }
        },
        {"$set": {"score": {"$meta": "vectorSearchScore"}}},
    ]
    filter_stage = build_filter_stage(criteria)
    if filter_stage is not None:
        pipeline.append(filter_stage)
    pipeline.append({"$sort": {"score": -1}})
    return pipeline


def to_ranked_result(document: dict) -> RankedResult:
    """Project a stored job document onto the result shape."""
    return RankedResult(
        job_id=document.get("jobId"),
        score=float(document.get("score") or 0.0),
        job_name=document.get("jobTitle"),
        job_description=document.get("jobDescription"),
        location=document.get("location"),
        job_type=document.get("jobType"),
        company=document.get("company"),
    )


def rank_results(documents: list[dict], final_limit: int) -> list[RankedResult]:
    """Sort by score descending (ties keep retrieval order) and keep the top N."""
    ordered = sorted(documents, key=lambda d: float(d.get("score") or 0.0), reverse=True)
    return [to_ranked_result(doc) for doc in ordered[:final_limit]]


def similarity_search(
    store: AggregateStore,
    query_vector: list[float],
    plan: SearchPlan,
    criteria: FilterCriteria | None = None,
) -> list[RankedResult]:
    """Run a vector search and return ranked results.

    A failed aggregation is logged and yields an empty list.
    """
    if not query_vector:
        logger.warning("Empty query vector, skipping vector search on %s", plan.index)
        return []

    pipeline = build_pipeline(plan, query_vector, criteria)
    try:
        documents = store.aggregate(pipeline)
    except SearchError as e:
        logger.error("Vector search failed: %s", e)
        return []

    if not documents:
        logger.info("No job postings found in index %s for the given criteria", plan.index)
        return []

    return rank_results(documents, plan.final_limit)
