"""Initial load of job postings with their embeddings into the job store."""

import json
import logging
from pathlib import Path

from models.schemas.job_posting import JobPosting

logger = logging.getLogger(__name__)


def read_postings(path: str | Path) -> list[JobPosting]:
    """Read a JSON array of job postings."""
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, list):
        raise ValueError(f"Expected a JSON array of job postings in {path}")
    return [JobPosting.model_validate(item) for item in raw]


def job_embedding_text(posting: JobPosting) -> str:
    """Text embedded for a posting: its lowercased description, else its title."""
    return (posting.job_description.strip() or posting.job_title.strip()).lower()


def attach_embeddings(
    postings: list[JobPosting], embeddings: list[list[float]]
) -> list[dict]:
    """Zip postings with their embeddings by index into store documents."""
    if len(postings) != len(embeddings):
        raise ValueError(
            f"Got {len(embeddings)} embeddings for {len(postings)} postings"
        )
    return [
        {**posting.to_document(), "embedding": embedding}
        for posting, embedding in zip(postings, embeddings)
    ]


def load_jobs(store, gateway, postings: list[JobPosting]) -> int:
    """Embed all postings and bulk insert them. Returns the number inserted.

    Postings with neither description nor title are skipped. EmbeddingError
    propagates and nothing is inserted unless every remaining posting was
    embedded.
    """
    embeddable = [p for p in postings if job_embedding_text(p)]
    skipped = len(postings) - len(embeddable)
    if skipped:
        logger.warning("Skipping %d job postings without description or title", skipped)
    if not embeddable:
        return 0
    embeddings = gateway.embed_batch([job_embedding_text(p) for p in embeddable])
    documents = attach_embeddings(embeddable, embeddings)
    inserted = store.insert_many(documents)
    logger.info("Inserted %d job postings with embeddings", inserted)
    return inserted


def seed_if_empty(store, gateway, postings: list[JobPosting]) -> int:
    """Load postings only when the collection holds no documents yet."""
    existing = store.count_documents()
    if existing:
        logger.info("Job collection already holds %d postings, skipping load", existing)
        return 0
    logger.info("No job postings found in the database. Inserting %d postings", len(postings))
    return load_jobs(store, gateway, postings)
