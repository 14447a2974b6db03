import json

import pytest

from models.schemas.job_posting import JobPosting
from services.errors import EmbeddingError
from services.job_loader import (
    attach_embeddings,
    job_embedding_text,
    load_jobs,
    read_postings,
    seed_if_empty,
)
from conftest import FakeJobStore, StubGateway

POSTINGS_JSON = [
    {
        "jobId": 1,
        "jobTitle": "Frontend Developer",
        "jobDescription": "Build UIs with React and Tailwind",
        "location": "Seattle, WA",
        "jobType": "Full-time",
        "company": "Acme",
    },
    {
        "jobId": 2,
        "jobTitle": "Backend Engineer",
        "jobDescription": "Design Node APIs on MongoDB",
        "location": "Remote",
        "jobType": "Contract",
        "company": "Globex",
    },
]


@pytest.fixture()
def postings_file(tmp_path):
    path = tmp_path / "jobPostings.json"
    path.write_text(json.dumps(POSTINGS_JSON), encoding="utf-8")
    return path


@pytest.fixture()
def postings():
    return [JobPosting.model_validate(item) for item in POSTINGS_JSON]


def test_read_postings(postings_file):
    postings = read_postings(postings_file)
    assert len(postings) == 2
    assert postings[0].job_title == "Frontend Developer"
    assert postings[1].job_type == "Contract"


def test_read_postings_rejects_non_array(tmp_path):
    path = tmp_path / "jobs.json"
    path.write_text(json.dumps({"jobId": 1}), encoding="utf-8")
    with pytest.raises(ValueError, match="JSON array"):
        read_postings(path)


def test_posting_round_trips_stored_keys(postings):
    assert postings[0].to_document() == POSTINGS_JSON[0]


def test_embedding_text_is_lowercased_description(postings):
    assert job_embedding_text(postings[0]) == "build uis with react and tailwind"


def test_attach_embeddings_by_index(postings):
    docs = attach_embeddings(postings, [[1.0, 0.0], [0.0, 1.0]])
    assert docs[0]["jobId"] == 1
    assert docs[0]["embedding"] == [1.0, 0.0]
    assert docs[1]["embedding"] == [0.0, 1.0]


def test_attach_embeddings_length_mismatch(postings):
    with pytest.raises(ValueError):
        attach_embeddings(postings, [[1.0, 0.0]])


def test_load_jobs_embeds_and_inserts(postings):
    store, gateway = FakeJobStore(), StubGateway(dimension=4)

    inserted = load_jobs(store, gateway, postings)

    assert inserted == 2
    assert gateway.calls == [
        "build uis with react and tailwind",
        "design node apis on mongodb",
    ]
    assert all(len(doc["embedding"]) == 4 for doc in store.inserted)
    assert [doc["jobId"] for doc in store.inserted] == [1, 2]


def test_load_jobs_empty():
    store = FakeJobStore()
    assert load_jobs(store, StubGateway(), []) == 0
    assert store.inserted == []


def test_load_jobs_embedding_failure_inserts_nothing(postings):
    store = FakeJobStore()
    with pytest.raises(EmbeddingError):
        load_jobs(store, StubGateway(fail=True), postings)
    assert store.inserted == []


def test_seed_if_empty_loads_empty_collection(postings):
    store = FakeJobStore()
    assert seed_if_empty(store, StubGateway(), postings) == 2
    assert store.count_documents() == 2


def test_seed_if_empty_skips_populated_collection(postings):
    store = FakeJobStore(documents=[{"jobId": 99}])
    gateway = StubGateway()
    assert seed_if_empty(store, gateway, postings) == 0
    assert gateway.calls == []
    assert store.inserted == []


def test_embedding_text_falls_back_to_title():
    posting = JobPosting(jobId=3, jobTitle="Site Reliability Engineer", jobDescription="  ")
    assert job_embedding_text(posting) == "site reliability engineer"


def test_load_jobs_mixed_descriptions():
    postings = [
        JobPosting(jobId=1, jobDescription="React dashboards"),
        JobPosting(jobId=2, jobTitle="Ops"),
        JobPosting(jobId=3),
    ]
    store, gateway = FakeJobStore(), StubGateway()

    assert load_jobs(store, gateway, postings) == 2
    assert gateway.calls == ["react dashboards", "ops"]
    assert [doc["jobId"] for doc in store.inserted] == [1, 2]


def test_load_jobs_without_any_text_inserts_nothing():
    store, gateway = FakeJobStore(), StubGateway()
    assert load_jobs(store, gateway, [JobPosting(jobId=1)]) == 0
    assert gateway.calls == []
    assert store.inserted == []
