"""Orchestrator: job recommendations for short queries and résumés.

Query mode:
1. Normalize query text
2. Zero-shot classify tokens into filter criteria
3. Embed the raw query
4. Vector search with the query plan + criteria filter

Résumé mode:
1. Read résumé text (file or upload)
2. Normalize text
3. Regex signal extraction
4. Compose signals into a descriptive query
5. Embed the composed query
6. Vector search with the résumé plan

Extraction and embedding failures end in an empty, degraded response with
a log entry. A failed search only yields no results. StoreConnectionError
propagates.
"""

import logging
from pathlib import Path

from config import Settings
from config import settings as default_settings
from models.responses import RecommendationResponse
from models.schemas.extracted_signals import ExtractedSignals
from models.schemas.filter_criteria import FilterCriteria
from services import pdf_parser
from services.criteria_classifier import TextClassifier, ZeroShotClassifier, extract_filter_criteria
from services.embedding_gateway import EmbeddingGateway
from services.errors import EmbeddingError, ExtractionError
from services.query_composer import compose_query
from services.search_planner import plan_for_mode, similarity_search
from services.signal_extractor import extract_signals
from services.text_normalizer import normalize_text

logger = logging.getLogger(__name__)

NO_RESULTS_MESSAGE = "No job recommendations found."


class Recommender:
    def __init__(
        self,
        store,
        gateway: EmbeddingGateway,
        classifier: TextClassifier | None = None,
        settings: Settings | None = None,
    ):
        self.store = store
        self.gateway = gateway
        self.settings = settings or default_settings
        self.classifier = classifier or ZeroShotClassifier(self.settings.classifier_model)

    def recommend_for_query(self, query: str) -> RecommendationResponse:
        """Recommend jobs for a short free-text query such as 'python seattle'."""
        text = normalize_text(query)
        if not text:
            logger.warning("Empty query, nothing to recommend")
            return RecommendationResponse(mode="query", degraded=True, message="Empty query")

        # --- Criteria classification ---
        criteria = extract_filter_criteria(
            text, self.classifier, threshold=self.settings.classification_threshold
        )

        # --- Embedding + search ---
        return self._search(mode="query", search_query=text, criteria=criteria)

    def recommend_for_resume_text(self, resume_text: str) -> RecommendationResponse:
        """Recommend jobs for résumé text already extracted from a document."""
        text = normalize_text(resume_text)
        if not text:
            logger.warning("Empty resume text, nothing to recommend")
            return RecommendationResponse(
                mode="resume", degraded=True, message="No text extracted from resume"
            )

        # --- Signal extraction + composition ---
        signals = extract_signals(text)
        search_query = compose_query(signals)
        if not search_query:
            logger.warning("No job titles, technologies or experience found in resume")
            return RecommendationResponse(
                mode="resume",
                signals=signals,
                degraded=True,
                message="No job titles, technologies or experience found in resume",
            )

        return self._search(mode="resume", search_query=search_query, signals=signals)

    def recommend_for_resume_file(self, path: str | Path) -> RecommendationResponse:
        try:
            text = pdf_parser.extract_text_from_path(path)
        except ExtractionError as e:
            logger.warning("Resume extraction failed: %s", e)
            return RecommendationResponse(mode="resume", degraded=True, message=str(e))
        return self.recommend_for_resume_text(text)

    def recommend_for_resume_bytes(self, content: bytes, suffix: str) -> RecommendationResponse:
        try:
            text = pdf_parser.extract_text_from_bytes(content, suffix)
        except ExtractionError as e:
            logger.warning("Resume extraction failed: %s", e)
            return RecommendationResponse(mode="resume", degraded=True, message=str(e))
        return self.recommend_for_resume_text(text)

    def _search(
        self,
        mode: str,
        search_query: str,
        criteria: FilterCriteria | None = None,
        signals: ExtractedSignals | None = None,
    ) -> RecommendationResponse:
        response = RecommendationResponse(
            mode=mode, search_query=search_query, criteria=criteria, signals=signals
        )

        try:
            query_vector = self.gateway.embed(search_query)
        except EmbeddingError as e:
            logger.warning("Failed to generate query embedding: %s", e)
            return response.model_copy(update={"degraded": True, "message": str(e)})

        plan = plan_for_mode(mode, self.settings)
        results = similarity_search(self.store, query_vector, plan, criteria)
        if not results:
            return response.model_copy(update={"message": NO_RESULTS_MESSAGE})
        return response.model_copy(update={"results": results})
