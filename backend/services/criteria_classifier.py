"""Zero-shot classification of short queries into job filter criteria.

Each whitespace-separated token of the query is classified against a fixed
label set with facebook/bart-large-mnli. Tokens whose top label scores above
the threshold fill the matching FilterCriteria field.
"""

import logging
from typing import Protocol

from models.schemas.filter_criteria import ClassificationResult, FilterCriteria

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "facebook/bart-large-mnli"
DEFAULT_THRESHOLD = 0.4

CRITERIA_LABELS: tuple[str, ...] = ("location", "job title", "company", "job type")

# Classifier label -> FilterCriteria field
_LABEL_TO_FIELD: dict[str, str] = {
    "location": "location",
    "job title": "job_title",
    "company": "company",
    "job type": "job_type",
}

# Lazy-loaded zero-shot pipelines, keyed by model name
_pipelines: dict = {}


def _get_zero_shot(model_name: str):
    """Load a zero-shot classification pipeline lazily."""
    if model_name not in _pipelines:
        try:
            from transformers import pipeline

            _pipelines[model_name] = pipeline("zero-shot-classification", model=model_name)
            logger.info("Zero-shot model %s loaded successfully", model_name)
        except Exception as e:
            logger.warning("Failed to load zero-shot model %s: %s", model_name, e)
            return None
    return _pipelines[model_name]


class TextClassifier(Protocol):
    def classify(self, text: str, candidate_labels: list[str]) -> ClassificationResult: ...


class ZeroShotClassifier:
    """TextClassifier backed by a transformers zero-shot pipeline."""

    def __init__(self, model_name: str = DEFAULT_MODEL):
        self.model_name = model_name

    def classify(self, text: str, candidate_labels: list[str]) -> ClassificationResult:
        classifier = _get_zero_shot(self.model_name)
        if classifier is None:
            raise RuntimeError(f"Zero-shot model {self.model_name} unavailable")
        result = classifier(text, candidate_labels=list(candidate_labels))
        return ClassificationResult(labels=result["labels"], scores=result["scores"])


def extract_filter_criteria(
    query: str,
    classifier: TextClassifier | None = None,
    threshold: float = DEFAULT_THRESHOLD,
) -> FilterCriteria:
    """Classify each query token and keep confident labels as filter criteria.

    A later qualifying token overwrites an earlier one for the same field.
    Tokens whose classification fails are skipped.
    """
    classifier = classifier or ZeroShotClassifier()
    assigned: dict[str, str] = {}

    for token in query.split():
        try:
            result = classifier.classify(token, list(CRITERIA_LABELS))
        except Exception as e:
            logger.warning("Classification failed for token %r: %s", token, e)
            continue

        if not result.labels or not result.scores:
            continue
        top_label, top_score = result.labels[0], result.scores[0]
        logger.debug("Token %r -> %s (%.3f)", token, top_label, top_score)

        field = _LABEL_TO_FIELD.get(top_label)
        if field and top_score > threshold:
            assigned[field] = token

    return FilterCriteria(**assigned)
