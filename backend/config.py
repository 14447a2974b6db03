import os
from urllib.parse import quote_plus

from pydantic_settings import BaseSettings


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    # MongoDB Atlas
    mongo_uri: str = ""  # full URI, overrides the host/user/pass parts below
    mongo_host: str = ""
    mongo_user: str = ""
    mongo_pass: str = ""
    mongo_db: str = "jobs"
    mongo_collection: str = "job_postings"
    mongo_timeout_ms: int = 10000

    # Vector search plans
    vector_path: str = "embedding"
    query_index: str = "job_vector_search"
    query_num_candidates: int = 38
    query_limit: int = 5
    query_final_limit: int = 5
    resume_index: str = "smart_job_recommend_data"
    resume_num_candidates: int = 100
    resume_limit: int = 20
    resume_final_limit: int = 10

    # Models
    embedding_model: str = "sentence-transformers/all-MiniLM-L6-v2"
    embedding_dimension: int = 384
    classifier_model: str = "facebook/bart-large-mnli"
    classification_threshold: float = 0.4

    max_upload_size_mb: int = 5
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    log_level: str = "INFO"
    debug: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "protected_namespaces": ("settings_",)}

    @property
    def mongo_connection_uri(self) -> str:
        """Atlas SRV connection string, unless MONGO_URI is given explicitly."""
        if self.mongo_uri:
            return self.mongo_uri
        user = quote_plus(self.mongo_user)
        password = quote_plus(self.mongo_pass)
        return f"mongodb+srv://{user}:{password}@{self.mongo_host}/?retryWrites=true&w=majority"


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
