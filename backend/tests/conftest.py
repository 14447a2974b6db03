"""Shared test configuration, pytest markers and fake collaborators."""

import pytest

from models.schemas.filter_criteria import ClassificationResult
from services.errors import EmbeddingError, SearchError


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: loads real ML models or needs MongoDB Atlas (slow)"
    )


class FakeJobStore:
    """In-memory stand-in for JobStore that records every pipeline."""

    def __init__(self, documents=None, error=None):
        self.documents = list(documents or [])
        self.error = error
        self.pipelines: list[list[dict]] = []
        self.inserted: list[dict] = []
        self.is_open = True

    def aggregate(self, pipeline, max_time_ms=None):
        self.pipelines.append(pipeline)
        if self.error is not None:
            raise self.error
        return list(self.documents)

    def insert_many(self, records):
        self.inserted.extend(records)
        return len(records)

    def count_documents(self):
        return len(self.documents) + len(self.inserted)

    def close(self):
        self.is_open = False


class StubGateway:
    """Embedding gateway returning a constant vector, or failing on demand."""

    def __init__(self, dimension=384, fail=False):
        self.dimension = dimension
        self.fail = fail
        self.calls: list[str] = []

    def embed(self, text):
        return self.embed_batch([text])[0]

    def embed_batch(self, texts):
        self.calls.extend(texts)
        if self.fail:
            raise EmbeddingError("embedding service unavailable")
        return [[0.1] * self.dimension for _ in texts]


class StubClassifier:
    """Zero-shot stub: token -> (top label, top score)."""

    def __init__(self, answers=None):
        self.answers = answers or {}
        self.calls: list[str] = []

    def classify(self, text, candidate_labels):
        self.calls.append(text)
        label, score = self.answers.get(text, ("job title", 0.1))
        others = [l for l in candidate_labels if l != label]
        rest = (1.0 - score) / max(len(others), 1)
        return ClassificationResult(labels=[label, *others], scores=[score] + [rest] * len(others))


def make_job_document(job_id, score, **overrides):
    doc = {
        "jobId": job_id,
        "jobTitle": f"Job {job_id}",
        "jobDescription": f"Description {job_id}",
        "location": "Remote",
        "jobType": "Full-time",
        "company": "Acme",
        "score": score,
    }
    doc.update(overrides)
    return doc


@pytest.fixture()
def fake_store():
    return FakeJobStore()


@pytest.fixture()
def stub_gateway():
    return StubGateway()


@pytest.fixture()
def stub_classifier():
    return StubClassifier()


@pytest.fixture()
def search_failure():
    return SearchError("index not found")
