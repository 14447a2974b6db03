"""Exceptions raised at the external-call boundaries of the recommender."""


class RecommenderError(Exception):
    """Base class for all recommender failures."""


class StoreConnectionError(RecommenderError):
    """The document store is unreachable or rejected the credentials.

    Fatal for the current run: no recommendation is possible without a store.
    """


class EmbeddingError(RecommenderError):
    """The embedding model failed or produced an empty/malformed vector."""


class ExtractionError(RecommenderError):
    """Résumé text could not be read or was empty."""


class SearchError(RecommenderError):
    """The vector search aggregation failed."""


class StoreOperationError(RecommenderError):
    """A write or count against the job collection failed."""
